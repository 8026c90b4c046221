"""TimingGate: classifies a frame by time since scale onset.

Priority is ABORTED > TOO_EARLY > WARN > NORMAL. The warning flag is kept
separately because a too-early frame still shows the warning prompt when
warning_time < read_time.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from models import TimingConfig


class GateState(Enum):
    NORMAL = 'normal'
    TOO_EARLY = 'too_early'
    WARN = 'warn'
    ABORTED = 'aborted'


@dataclass(frozen=True)
class GateDecision:
    aborted: bool
    too_early: bool
    warn: bool

    @property
    def state(self) -> GateState:
        if self.aborted:
            return GateState.ABORTED
        if self.too_early:
            return GateState.TOO_EARLY
        if self.warn:
            return GateState.WARN
        return GateState.NORMAL

    @property
    def accepts(self) -> bool:
        """True when an answer sampled in this frame may be registered."""
        return not (self.aborted or self.too_early)


def evaluate_gate(elapsed: float, timing: TimingConfig) -> GateDecision:
    aborted = timing.abort_time is not None and elapsed > timing.abort_time
    return GateDecision(
        aborted=aborted,
        too_early=elapsed <= timing.read_time,
        warn=elapsed > timing.warning_time,
    )
