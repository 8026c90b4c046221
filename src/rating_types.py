"""Typed structures for rating scale configuration and collaborators.

Defines TypedDict schemas for:
- StyleConfig: Visual style parameters loaded from configs/style.json

And the Protocols the response engine depends on:
- TimeSource: Clock with blocking wait
- DeviceSampler: Pointer/keyboard polling
- FrameRenderer: One screen update per call
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence, TypedDict

if TYPE_CHECKING:
    from models import FrameDescriptor, KeySample, PointerSample


class StyleConfig(TypedDict, total=False):
    # Colours
    colour_space: str
    bg_colour: object
    text_colour: object
    highlight_colour: object
    option_colour: object
    cursor_colour: object
    slider_colour: object
    band_colours: list
    warning_colour: object
    # Sizes
    font_main: str
    text_height: float
    cursor_size: float
    slider_height: float
    line_width: float
    selected_line_width: float
    # Texts
    warning_text: str
    quit_prompt: str
    # Debounce frames
    settle_duration: float
    blank_duration: float
    # Misc
    debug_mode: bool


class TimeSource(Protocol):
    def getTime(self) -> float:
        """Return monotonic seconds."""

    def wait(self, seconds: float) -> None:
        """Block for the given duration."""


class DeviceSampler(Protocol):
    def sample(self) -> "PointerSample":
        ...

    def sample_key(
        self, timeout: float, key_list: Optional[Sequence[str]] = None
    ) -> Optional["KeySample"]:
        """Wait up to ``timeout`` seconds for a key; 0 polls without blocking.

        ``key_list`` restricts the keys reported; None accepts any key.
        """
        ...

    def place(self, x: float, y: float) -> None:
        ...


class FrameRenderer(Protocol):
    def render(self, frame: "FrameDescriptor") -> None:
        ...
