"""PsychoPy pointer and keyboard sampler.

Geometry works in screen pixels (origin top-left, y down); the window must use
'pix' units (origin at the centre, y up). This class converts between them.
"""
from __future__ import annotations

from typing import Optional, Sequence

from psychopy import event, visual

from models import KeySample, PointerSample, PsychoPyTimeSource
from rating_types import TimeSource


class PsychoPySampler:

    def __init__(self, win: visual.Window, time_source: Optional[TimeSource] = None):
        self.win = win
        self.time_source = time_source or PsychoPyTimeSource()
        self._mouse = event.Mouse(visible=False, win=win)

    @property
    def screen_size(self) -> tuple[float, float]:
        width, height = self.win.size
        return float(width), float(height)

    def to_pix(self, x: float, y: float) -> tuple[float, float]:
        width, height = self.screen_size
        return x - width / 2.0, height / 2.0 - y

    def sample(self) -> PointerSample:
        x_pix, _ = self._mouse.getPos()
        buttons = self._mouse.getPressed()
        # Timestamp taken after reading the mouse so it belongs to this sample
        t = self.time_source.getTime()
        width, _ = self.screen_size
        return PointerSample(
            position=float(x_pix) + width / 2.0,
            primary_button_down=bool(buttons[0]),
            timestamp=t,
        )

    def sample_key(
        self, timeout: float, key_list: Optional[Sequence[str]] = None
    ) -> Optional[KeySample]:
        """First key pressed within ``timeout`` seconds (0 polls), or None.

        With ``key_list`` only those keys are reported; other buffered presses
        do not hide them. Key timestamps are on the psychopy.core.getTime()
        timebase.
        """
        key_list = list(key_list) if key_list else None
        if timeout <= 0:
            keys = event.getKeys(keyList=key_list, timeStamped=True)
        else:
            keys = event.waitKeys(maxWait=timeout, keyList=key_list, timeStamped=True)
        for key, t in keys or ():
            if key_list is None or key in key_list:
                return KeySample(key=key, timestamp=t)
        return None

    def place(self, x: float, y: float) -> None:
        self._mouse.setPos(self.to_pix(round(x), round(y)))
