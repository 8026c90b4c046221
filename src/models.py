"""Data models for rating scale responses."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence

from psychopy import core

from rating_types import StyleConfig, TimeSource


class ConfigurationError(ValueError):
    """Invalid scale, timing or style configuration (raised before polling starts)."""


@dataclass(frozen=True)
class TimingConfig:
    """Read/warning/abort thresholds in seconds since scale onset.

    Attributes:
        read_time: Answers at or before this time are discarded
        warning_time: After this time the 'please respond' prompt is shown
        abort_time: After this time the scale gives up; None never aborts
    """
    read_time: float = 1.0
    warning_time: float = 20.0
    abort_time: Optional[float] = None

    def __post_init__(self) -> None:
        for name in ('read_time', 'warning_time', 'abort_time'):
            value = getattr(self, name)
            if value is None and name == 'abort_time':
                continue
            if value is None or value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value!r}")

    @classmethod
    def likert_defaults(cls) -> "TimingConfig":
        return cls(read_time=1.0, warning_time=20.0, abort_time=None)

    @classmethod
    def slider_defaults(cls) -> "TimingConfig":
        return cls(read_time=1.0, warning_time=30.0, abort_time=60.0)


@dataclass(frozen=True)
class PointerSample:
    position: float
    primary_button_down: bool
    timestamp: float


@dataclass(frozen=True)
class KeySample:
    key: str
    timestamp: float


@dataclass(frozen=True)
class ResponseResult:
    value: Optional[float]
    reaction_time: Optional[float]
    answered: bool

    @classmethod
    def unanswered(cls) -> "ResponseResult":
        return cls(value=None, reaction_time=None, answered=False)


@dataclass(frozen=True)
class ChoiceResult:
    choice: int
    accuracy: int
    press_time: float


@dataclass(frozen=True)
class QuitDecision:
    skip: bool
    quit: bool


class ConfirmState(Enum):
    IDLE = 'idle'
    PENDING_CONFIRM = 'pending_confirm'


class FrameKind(Enum):
    RESPONSE = 'response'
    CONFIRM = 'confirm'
    BLANK = 'blank'
    QUIT_PROMPT = 'quit_prompt'


@dataclass(frozen=True)
class FrameDescriptor:
    """Everything the renderer needs for one flip.

    ``geometry`` is a DiscreteScaleGeometry or ContinuousScaleGeometry for
    response/confirm frames and None otherwise.
    """
    kind: FrameKind
    question: str = ''
    labels: Sequence[str] = ()
    geometry: Any = None
    position: Optional[float] = None
    highlight_index: Optional[int] = None
    selected_index: Optional[int] = None
    warning_active: bool = False
    warning_text: str = ''
    image: Optional[str] = None
    style: StyleConfig = field(default_factory=dict)


class PsychoPyTimeSource:
    """Production time source backed by psychopy.core."""

    def getTime(self) -> float:
        return core.getTime()

    def wait(self, seconds: float) -> None:
        core.wait(seconds)


class TrialClock:
    """Encapsulates timing state for one response loop.

    Attributes:
        t0: Scale onset timestamp (None until start() is called)
    """
    def __init__(self, source: Optional[TimeSource] = None):
        self._source = source or PsychoPyTimeSource()
        self.t0: Optional[float] = None

    def start(self) -> float:
        self.t0 = self._source.getTime()
        return self.t0

    def now(self) -> float:
        return self._source.getTime()

    def elapsed(self, timestamp: float) -> float:
        """Seconds between onset and ``timestamp``."""
        if self.t0 is None:
            raise RuntimeError("TrialClock.start() has not been called")
        return timestamp - self.t0

    def wait(self, seconds: float) -> None:
        if seconds > 0:
            self._source.wait(seconds)

    def wait_until(self, deadline: float) -> None:
        self.wait(deadline - self.now())

    def is_started(self) -> bool:
        return self.t0 is not None
