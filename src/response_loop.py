"""ResponseLoop: per-frame polling of a rating scale until answer or abort.

Responsibilities:
- Samples the pointer once per frame and clamps it onto the scale
- Evaluates the timing gate before hit testing
- Submits exactly one frame per sampled input, in order
- Shows the confirmation and blank frames after an answer
"""
from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Sequence, Union

from psychopy import logging

from models import (
    ConfigurationError,
    FrameDescriptor,
    FrameKind,
    ResponseResult,
    TimingConfig,
    TrialClock,
)
from rating_types import DeviceSampler, FrameRenderer, StyleConfig, TimeSource
from scale_geometry import ContinuousScaleGeometry, DiscreteScaleGeometry
from timing_gate import evaluate_gate

SETTLE_DURATION = 0.2
BLANK_DURATION = 0.2
DEFAULT_WARNING_TEXT = 'Please indicate how true this is of you right now.'

ScaleGeometry = Union[DiscreteScaleGeometry, ContinuousScaleGeometry]


class LoopState(Enum):
    RUNNING = 'running'
    ANSWERED = 'answered'
    ABORTED = 'aborted'


class ResponseLoop:

    def __init__(
        self,
        sampler: DeviceSampler,
        renderer: FrameRenderer,
        time_source: Optional[TimeSource] = None,
        settle_duration: float = SETTLE_DURATION,
        blank_duration: float = BLANK_DURATION,
    ) -> None:
        """Initialize the loop with its collaborators.

        Args:
            sampler: Pointer/keyboard source, queried once per frame
            renderer: Receives one FrameDescriptor per frame
            time_source: Clock used for onset and debounce waits (PsychoPy by default)
            settle_duration: Seconds the chosen answer stays highlighted
            blank_duration: Seconds of blank screen before returning
        """
        self.sampler = sampler
        self.renderer = renderer
        self.time_source = time_source
        self.settle_duration = settle_duration
        self.blank_duration = blank_duration
        self.state = LoopState.RUNNING

    def run(
        self,
        question: str,
        labels: Sequence[str],
        geometry: ScaleGeometry,
        timing: TimingConfig,
        start_position: Optional[str] = None,
        rng: Optional[random.Random] = None,
        style: Optional[StyleConfig] = None,
        image: Optional[str] = None,
    ) -> ResponseResult:
        """Present one question and block until it is answered or aborted.

        Args:
            question: Question/statement text
            labels: One label per option (discrete) or the two extremes (continuous)
            geometry: Scale layout
            timing: Read/warning/abort thresholds
            start_position: 'left', 'right', 'center', 'random', or None to leave the pointer
            rng: Random source for the 'random' start position
            style: Visual style handed through to the renderer
            image: Optional stimulus image drawn above the question

        Returns:
            ResponseResult (value/reaction_time are None when unanswered)
        """
        self._validate(labels, geometry)
        style = style or {}
        discrete = isinstance(geometry, DiscreteScaleGeometry)
        warning_text = style.get('warning_text', DEFAULT_WARNING_TEXT)

        if start_position is not None:
            x = geometry.start_position(start_position, rng)
            y = geometry.center_y if discrete else geometry.y
            self.sampler.place(x, y)

        clock = TrialClock(self.time_source)
        clock.start()
        self.state = LoopState.RUNNING
        logging.exp(f"rating scale started: {question!r}")

        value = None
        reaction_time = None
        hit_index = None

        while self.state is LoopState.RUNNING:
            sample = self.sampler.sample()
            pos = geometry.clamp(sample.position)
            elapsed = clock.elapsed(sample.timestamp)
            gate = evaluate_gate(elapsed, timing)

            if gate.aborted:
                self.state = LoopState.ABORTED
                logging.exp(f"rating scale aborted after {elapsed:.3f}s")
                break

            hit_index = geometry.hit_test(pos) if discrete else None
            accepted = sample.primary_button_down and (hit_index is not None or not discrete)
            if accepted and not gate.accepts:
                logging.debug(f"click at {elapsed:.3f}s ignored (read time {timing.read_time}s)")
                accepted = False

            if accepted:
                self.state = LoopState.ANSWERED
                value = hit_index if discrete else geometry.value_of(pos)
                reaction_time = elapsed

            self.renderer.render(FrameDescriptor(
                kind=FrameKind.RESPONSE,
                question=question,
                labels=tuple(labels),
                geometry=geometry,
                position=pos,
                highlight_index=hit_index,
                warning_active=gate.warn,
                warning_text=warning_text,
                image=image,
                style=style,
            ))

        if self.state is LoopState.ANSWERED:
            settle_start = clock.now()
            self.renderer.render(FrameDescriptor(
                kind=FrameKind.CONFIRM,
                question=question,
                labels=tuple(labels),
                geometry=geometry,
                position=pos,
                highlight_index=hit_index,
                selected_index=hit_index,
                image=image,
                style=style,
            ))
            clock.wait_until(settle_start + self.settle_duration)

        blank_start = clock.now()
        self.renderer.render(FrameDescriptor(kind=FrameKind.BLANK, style=style))
        clock.wait_until(blank_start + self.blank_duration)

        if self.state is LoopState.ANSWERED:
            result = ResponseResult(value=value, reaction_time=reaction_time, answered=True)
        else:
            result = ResponseResult.unanswered()
        logging.data(
            f"rating response: value={result.value} rt={result.reaction_time} answered={result.answered}"
        )
        return result

    def _validate(self, labels: Sequence[str], geometry: ScaleGeometry) -> None:
        if not labels:
            raise ConfigurationError("label set must not be empty")
        if isinstance(geometry, DiscreteScaleGeometry):
            if len(labels) != geometry.n_options:
                raise ConfigurationError(
                    f"{len(labels)} labels given for {geometry.n_options} options"
                )
        elif isinstance(geometry, ContinuousScaleGeometry):
            if len(labels) != 2:
                raise ConfigurationError(
                    f"a continuous scale takes exactly 2 extreme labels, got {len(labels)}"
                )
        else:
            raise ConfigurationError(f"unsupported geometry {type(geometry).__name__}")
