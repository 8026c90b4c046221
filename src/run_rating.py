"""Rating scales – Demo entry point

Opens a PsychoPy window and asks one question with each widget:
- Likert scale (5 options, click a square)
- Banded slider (click anywhere on the scale)
- Two-alternative forced choice (left/right arrow keys)

Before each question the escape key can be pressed to quit; a second escape
confirms, any other key skips that question. Results are logged only.

Debug mode: set "debug_mode": true in configs/style.json to run in a
1280×800 window instead of fullscreen.
Dependencies: PsychoPy, Pillow.
"""
from __future__ import annotations

from contextlib import contextmanager

from psychopy import logging, visual

from config_loader import load_style
from confirm_gate import ConfirmGate
from forced_choice import get_choice
from rating_scales import LikertScaleOptions, SlideScaleOptions, likert_scale, slide_scale
from rating_types import StyleConfig
from ui.renderer import PsychoPyRenderer
from ui.sampler import PsychoPySampler

LIKERT_LABELS = [
    'Completely untrue', 'Mostly untrue', 'Neither', 'Mostly true', 'Completely true',
]


@contextmanager
def create_window(style: StyleConfig, debug_mode: bool):
    """Context manager creating a 'pix'-unit window and closing it afterwards."""
    kwargs = dict(
        color=style.get('bg_colour', [1, 1, 1]),
        colorSpace=style.get('colour_space', 'rgb1'),
        units='pix',
    )
    if debug_mode:
        win = visual.Window(size=(1280, 800), **kwargs)
    else:
        win = visual.Window(fullscr=True, **kwargs)
    try:
        yield win
    finally:
        win.close()


def main() -> None:
    """Main entry point for the demo."""
    logging.console.setLevel(logging.WARNING)
    style = load_style()
    debug_active = bool(style.get('debug_mode', False))

    with create_window(style, debug_active) as win:
        sampler = PsychoPySampler(win)
        renderer = PsychoPyRenderer(win, style)
        gate = ConfirmGate(sampler, renderer, style=style)
        screen_size = sampler.screen_size

        questions = [
            lambda: likert_scale(
                sampler, renderer, 'I feel alert right now.', LIKERT_LABELS,
                screen_size, LikertScaleOptions(), style,
            ),
            lambda: slide_scale(
                sampler, renderer, 'How pleasant was the last tone?',
                ['unpleasant', 'pleasant'], screen_size, SlideScaleOptions(), style,
            ),
            lambda: get_choice(sampler, first_level=5, second_level=2),
        ]
        for ask in questions:
            decision = gate.check()
            if decision.quit:
                logging.exp("demo stopped by participant")
                return
            if decision.skip:
                continue
            result = ask()
            logging.data(f"demo result: {result}")


if __name__ == '__main__':
    main()
