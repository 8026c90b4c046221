"""Host-facing rating scales: Likert (discrete) and banded slider (continuous).

Each scale takes a named options object with documented defaults instead of
positional optional arguments. Options are validated when constructed, so a
bad configuration fails before anything is drawn.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Sequence

from models import ConfigurationError, ResponseResult, TimingConfig
from rating_types import DeviceSampler, FrameRenderer, StyleConfig, TimeSource
from response_loop import ResponseLoop
from scale_geometry import START_POSITIONS, ContinuousScaleGeometry, DiscreteScaleGeometry

# Options that are forwarded to the renderer rather than the engine
_STYLE_FIELDS = (
    'bg_colour', 'highlight_colour', 'cursor_colour', 'cursor_size',
    'slider_colour', 'slider_height', 'line_width',
)


class _ScaleOptions:

    start_position: str
    read_time: float
    warning_time: float
    abort_time: Optional[float]

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]):
        """Build options from a dict, rejecting names the scale does not support."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(
                f"{cls.__name__} does not support: {', '.join(unknown)}"
            )
        return cls(**values)

    def __post_init__(self) -> None:
        if self.start_position not in START_POSITIONS:
            raise ConfigurationError(
                f"start_position must be one of {', '.join(START_POSITIONS)}; "
                f"got {self.start_position!r}"
            )
        self.timing()

    def timing(self) -> TimingConfig:
        return TimingConfig(
            read_time=self.read_time,
            warning_time=self.warning_time,
            abort_time=self.abort_time,
        )

    def merged_style(self, style: Optional[StyleConfig]) -> StyleConfig:
        merged: dict = dict(style or {})
        for name in _STYLE_FIELDS:
            value = getattr(self, name, None)
            if value is not None:
                merged[name] = value
        return merged  # type: ignore[return-value]


@dataclass(frozen=True)
class LikertScaleOptions(_ScaleOptions):
    """Likert scale options.

    Attributes:
        label_size: (width, height) of the option squares in pixels;
            None means 5% of screen width by 5% of screen height
        start_position: 'left', 'right', 'center' or 'random'
        read_time: Answers within this many seconds are disregarded
        warning_time: Seconds after which the warning prompt is shown
        abort_time: Seconds after which the scale gives up (None: never)
        bg_colour, highlight_colour, cursor_colour, cursor_size: Style overrides
    """
    label_size: Optional[tuple] = None
    start_position: str = 'random'
    read_time: float = 1.0
    warning_time: float = 20.0
    abort_time: Optional[float] = None
    bg_colour: Optional[Sequence[float]] = None
    highlight_colour: Optional[Sequence[float]] = None
    cursor_colour: Optional[Sequence[float]] = None
    cursor_size: Optional[float] = None


@dataclass(frozen=True)
class SlideScaleOptions(_ScaleOptions):
    """Banded slider options.

    Attributes:
        scale_length: Fraction of screen width; the scale spans
            (1 - scale_length) .. scale_length of the width
        scale_pos: Vertical position as a fraction (0 top, 1 bottom)
        num_bands: Number of alternating bands (even)
        start_position: 'left', 'right', 'center' or 'random'
        read_time, warning_time, abort_time: Timing thresholds in seconds
        bg_colour, slider_colour, slider_height, line_width: Style overrides
    """
    scale_length: float = 0.9
    scale_pos: float = 0.5
    num_bands: int = 10
    start_position: str = 'random'
    read_time: float = 1.0
    warning_time: float = 30.0
    abort_time: Optional[float] = 60.0
    bg_colour: Optional[Sequence[float]] = None
    slider_colour: Optional[Sequence[float]] = None
    slider_height: Optional[float] = None
    line_width: Optional[float] = None


def likert_scale(
    sampler: DeviceSampler,
    renderer: FrameRenderer,
    question: str,
    labels: Sequence[str],
    screen_size: tuple[float, float],
    options: Optional[LikertScaleOptions] = None,
    style: Optional[StyleConfig] = None,
    time_source: Optional[TimeSource] = None,
    rng: Optional[random.Random] = None,
    image: Optional[str] = None,
) -> ResponseResult:
    """Present a Likert scale and return the selected option (1..N)."""
    options = options or LikertScaleOptions()
    width, height = screen_size
    geometry = DiscreteScaleGeometry(width, height, len(labels), options.label_size)
    style = options.merged_style(style)
    loop = ResponseLoop(
        sampler, renderer, time_source,
        settle_duration=style.get('settle_duration', 0.2),
        blank_duration=style.get('blank_duration', 0.2),
    )
    return loop.run(
        question, labels, geometry, options.timing(),
        start_position=options.start_position, rng=rng, style=style, image=image,
    )


def slide_scale(
    sampler: DeviceSampler,
    renderer: FrameRenderer,
    question: str,
    labels: Sequence[str],
    screen_size: tuple[float, float],
    options: Optional[SlideScaleOptions] = None,
    style: Optional[StyleConfig] = None,
    time_source: Optional[TimeSource] = None,
    rng: Optional[random.Random] = None,
    image: Optional[str] = None,
) -> ResponseResult:
    """Present a banded slider and return the position as -100..100."""
    options = options or SlideScaleOptions()
    width, height = screen_size
    geometry = ContinuousScaleGeometry(
        width, height,
        scale_length=options.scale_length,
        scale_pos=options.scale_pos,
        num_bands=options.num_bands,
    )
    style = options.merged_style(style)
    loop = ResponseLoop(
        sampler, renderer, time_source,
        settle_duration=style.get('settle_duration', 0.2),
        blank_duration=style.get('blank_duration', 0.2),
    )
    return loop.run(
        question, labels, geometry, options.timing(),
        start_position=options.start_position, rng=rng, style=style, image=image,
    )
