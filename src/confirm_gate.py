"""ConfirmGate: two-stage quit confirmation.

The first quit key press shows a prompt; a second quit key press within the
timeout confirms. Any other key, or no key at all, cancels and asks the host
to skip the current trial.
"""
from __future__ import annotations

from typing import Optional

from psychopy import logging

from models import ConfirmState, FrameDescriptor, FrameKind, QuitDecision
from rating_types import DeviceSampler, FrameRenderer, StyleConfig

CONFIRM_TIMEOUT = 3.0
DEFAULT_QUIT_PROMPT = (
    'You pressed the escape key.\n\n\n'
    'Are you sure you want to quit the experiment?\n\n\n'
    'Press escape if yes, press any other key if no.'
)


class ConfirmGate:

    def __init__(
        self,
        sampler: DeviceSampler,
        renderer: FrameRenderer,
        quit_key: str = 'escape',
        timeout: float = CONFIRM_TIMEOUT,
        style: Optional[StyleConfig] = None,
    ) -> None:
        self.sampler = sampler
        self.renderer = renderer
        self.quit_key = quit_key
        self.timeout = timeout
        self.style = style or {}
        self.state = ConfirmState.IDLE

    def check(self, observed_key: Optional[str] = None) -> QuitDecision:
        """Run the confirmation if the quit key was pressed.

        Args:
            observed_key: Key the host already saw; None polls the keyboard once

        Returns:
            QuitDecision(skip, quit)
        """
        self.state = ConfirmState.IDLE
        if observed_key is None:
            polled = self.sampler.sample_key(0, key_list=(self.quit_key,))
            observed_key = polled.key if polled is not None else None
        if observed_key != self.quit_key:
            return QuitDecision(skip=False, quit=False)

        self.renderer.render(FrameDescriptor(
            kind=FrameKind.QUIT_PROMPT,
            question=self.style.get('quit_prompt', DEFAULT_QUIT_PROMPT),
            style=self.style,
        ))
        self.state = ConfirmState.PENDING_CONFIRM
        try:
            answer = self.sampler.sample_key(self.timeout)
        finally:
            self.state = ConfirmState.IDLE

        confirmed = answer is not None and answer.key == self.quit_key
        if confirmed:
            logging.exp("quit confirmed")
        else:
            logging.exp("quit cancelled; skipping trial")
        return QuitDecision(skip=True, quit=confirmed)
