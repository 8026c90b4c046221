"""Configuration loader for rating scales.

Loads the visual style (configs/style.json), with external override
precedence when running as a packaged exe.
"""
from __future__ import annotations

import json
import os
import sys
from typing import Optional, cast

from psychopy import logging

from rating_types import StyleConfig


def get_base_dir() -> str:
    """Return base directory for read-only resources (configs/stimuli).

    Note: In PyInstaller onefile, resources are unpacked to a temporary
    extraction directory (sys._MEIPASS).
    """
    meipass = getattr(sys, '_MEIPASS', None)
    if meipass and os.path.isdir(meipass):
        return meipass
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    # Dev mode: project root (src/..)
    return os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def get_exe_override_path(rel_path: str) -> Optional[str]:
    """When running as a frozen exe, return the override path next to the exe.

    Example: rel_path='configs/style.json' -> '<exe_dir>/configs/style.json'
    Returns None if not frozen.
    """
    if getattr(sys, 'frozen', False):
        return os.path.join(os.path.dirname(sys.executable), rel_path)
    return None


BASE_DIR = get_base_dir()
STYLE_DEFAULT_PATH = os.path.join(BASE_DIR, 'configs', 'style.json')


def load_style(path: Optional[str] = None) -> StyleConfig:
    """Load style.json with external-override precedence and parameter merging.

    Search order:
    1) Defaults from ``path`` or <BASE_DIR>/configs/style.json (must exist)
    2) If running as frozen exe, overrides from <exe_dir>/configs/style.json
    3) Merge: override parameters take precedence, missing ones use defaults
    """
    default_path = path or STYLE_DEFAULT_PATH
    if not os.path.exists(default_path):
        raise RuntimeError(f"Default style file not found: {default_path}")

    with open(default_path, 'r', encoding='utf-8') as f:
        style = cast(StyleConfig, json.load(f))

    override_path = get_exe_override_path(os.path.join('configs', 'style.json'))
    if override_path and os.path.exists(override_path):
        try:
            with open(override_path, 'r', encoding='utf-8') as f:
                style.update(cast(StyleConfig, json.load(f)))
        except (OSError, ValueError) as e:
            logging.warning(
                f"Malformed style override {override_path}, using defaults: {e}"
            )

    return style
