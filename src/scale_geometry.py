"""Scale geometry: option rectangles, slider bands and value mapping.

Coordinates are screen pixels with the origin at the top-left corner and y
growing downwards. The PsychoPy adapters in ui/ convert to 'pix' units.
"""
from __future__ import annotations

import math
import random
from typing import Optional

from models import ConfigurationError

START_POSITIONS = ('left', 'right', 'center', 'random')
# Number of evenly spaced candidates for the 'random' start position
RANDOM_START_STEPS = 100


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class _AxisGeometry:
    """Shared horizontal-axis behaviour: clamping and start positions."""

    left: float
    right: float
    center_x: float

    def clamp(self, position: float) -> float:
        if position > self.right:
            return self.right
        if position < self.left:
            return self.left
        return position

    def start_position(self, policy: str, rng: Optional[random.Random] = None) -> float:
        """Initial pointer position for a start-position policy.

        Args:
            policy: 'left', 'right', 'center' or 'random'
            rng: Random source for 'random' (defaults to the module RNG)
        """
        if policy == 'right':
            return self.right
        if policy == 'center':
            return self.center_x
        if policy == 'left':
            return self.left
        if policy == 'random':
            n = RANDOM_START_STEPS
            step = (self.right - self.left) / (n - 1)
            k = (rng or random).randrange(n)
            return self.left + k * step
        raise ConfigurationError(
            f"start position must be one of {', '.join(START_POSITIONS)}; got {policy!r}"
        )


class DiscreteScaleGeometry(_AxisGeometry):
    """N equal option rectangles along the horizontal centre line.

    Option i (1-based) is centred at (i / (N + 1)) * width. The pointer is
    confined to [0.1 * width, 0.9 * width].
    """

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        n_options: int,
        label_size: Optional[tuple[float, float]] = None,
    ) -> None:
        if screen_width <= 0 or screen_height <= 0:
            raise ConfigurationError("screen size must be positive")
        if n_options < 1:
            raise ConfigurationError(f"a discrete scale needs at least one option, got {n_options}")
        if label_size is None:
            label_size = (0.05 * screen_width, 0.05 * screen_height)
        rect_w, rect_h = label_size
        if rect_w <= 0 or rect_h <= 0:
            raise ConfigurationError(f"label rectangle must have positive size, got {label_size!r}")

        self.screen_width = screen_width
        self.screen_height = screen_height
        self.n_options = n_options
        self.label_size = (rect_w, rect_h)
        self.left = 0.1 * screen_width
        self.right = 0.9 * screen_width
        self.center_x = round_half_up(screen_width / 2)
        self.center_y = round_half_up(screen_height / 2)

        self.option_rects: list[tuple[float, float, float, float]] = []
        for i in range(1, n_options + 1):
            cx = (i / (n_options + 1)) * screen_width
            self.option_rects.append((
                cx - rect_w / 2, self.center_y - rect_h / 2,
                cx + rect_w / 2, self.center_y + rect_h / 2,
            ))

    def hit_test(self, position: float) -> Optional[int]:
        """Return the 1-based option whose closed span contains position, else None."""
        for i, (x1, _, x2, _) in enumerate(self.option_rects, start=1):
            if x1 <= position <= x2:
                return i
        return None


class ContinuousScaleGeometry(_AxisGeometry):
    """Banded slider between (1 - scale_length) * width and scale_length * width."""

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        scale_length: float = 0.9,
        scale_pos: float = 0.5,
        num_bands: int = 10,
    ) -> None:
        if screen_width <= 0 or screen_height <= 0:
            raise ConfigurationError("screen size must be positive")
        if not 0.5 < scale_length <= 1.0:
            raise ConfigurationError(f"scale_length must be in (0.5, 1], got {scale_length!r}")
        if not 0.0 <= scale_pos <= 1.0:
            raise ConfigurationError(f"scale_pos must be in [0, 1], got {scale_pos!r}")
        if int(num_bands) != num_bands or num_bands < 2 or num_bands % 2:
            raise ConfigurationError(f"num_bands must be an even integer >= 2, got {num_bands!r}")

        self.screen_width = screen_width
        self.screen_height = screen_height
        self.scale_length = scale_length
        self.scale_pos = scale_pos
        self.num_bands = int(num_bands)
        self.left = screen_width * (1 - scale_length)
        self.right = screen_width * scale_length
        # Midpoint of [left, right], not rounded
        self.center_x = (self.left + self.right) / 2
        self.y = screen_height * scale_pos

    @property
    def band_segments(self) -> list[tuple[float, float, int]]:
        """(x_start, x_end, band) per segment; band alternates 0/1 from the left."""
        increment = (self.right - self.left) / self.num_bands
        return [
            (self.left + k * increment, self.left + (k + 1) * increment, k % 2)
            for k in range(self.num_bands)
        ]

    def value_of(self, position: float) -> float:
        """Signed percentage: -100 at left, 0 at center_x, +100 at right."""
        return ((position - self.center_x) / (self.center_x - self.left)) * 100
