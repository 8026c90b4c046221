"""Two-alternative forced choice on the keyboard."""
from __future__ import annotations

from typing import Optional

from psychopy import logging

from models import ChoiceResult, ConfigurationError, TrialClock
from rating_types import DeviceSampler, TimeSource

KEY_WAIT_TIMEOUT = 3.0
IDLE_INTERVAL = 0.01


def score_choice(choice: int, first_level: float, second_level: float) -> int:
    """Return 1 if the chosen option had the higher intensity, else 0.

    Equal intensities have no correct answer and are scored 0.
    """
    if first_level == second_level:
        logging.warning(
            f"forced choice with equal levels ({first_level}); scoring as incorrect"
        )
        return 0
    if choice == 0:
        return int(first_level > second_level)
    return int(second_level > first_level)


def get_choice(
    sampler: DeviceSampler,
    first_level: float,
    second_level: float,
    first_key: str = 'left',
    second_key: str = 'right',
    time_source: Optional[TimeSource] = None,
    key_timeout: float = KEY_WAIT_TIMEOUT,
    idle_interval: float = IDLE_INTERVAL,
) -> ChoiceResult:
    """Block until one of two keys is pressed and score the response.

    Args:
        sampler: Keyboard source (sample_key is used)
        first_level: Intensity of the first option (e.g. Gabor orientation)
        second_level: Intensity of the second option
        first_key: Key name choosing the first option
        second_key: Key name choosing the second option
        time_source: Clock used for the idle interval between key waits
        key_timeout: Upper bound of a single key wait in seconds
        idle_interval: Pause between key waits to avoid busy-spinning

    Returns:
        ChoiceResult with choice 0 (first) / 1 (second), accuracy and press time
    """
    if first_key == second_key:
        raise ConfigurationError(f"choice keys must differ, both are {first_key!r}")
    clock = TrialClock(time_source)
    keys = (first_key, second_key)

    while True:
        pressed = sampler.sample_key(key_timeout, key_list=keys)
        if pressed is not None and pressed.key in keys:
            break
        clock.wait(idle_interval)

    choice = keys.index(pressed.key)
    accuracy = score_choice(choice, first_level, second_level)
    logging.data(f"forced choice: choice={choice} accuracy={accuracy} t={pressed.timestamp:.3f}")
    return ChoiceResult(choice=choice, accuracy=accuracy, press_time=pressed.timestamp)
