"""Path resolution and image sizing for stimulus images shown above a question."""
from __future__ import annotations

import os
import sys
from typing import Optional

from PIL import Image

from config_loader import BASE_DIR


def resolve_path(p: str) -> str:
    """Resolve a possibly relative path.

    Priority:
    1. Existing absolute path
    2. BASE_DIR / path (bundled resources or dev mode)
    3. Executable directory / path (frozen builds)
    Falls back to the BASE_DIR candidate so error messages show a full path.
    """
    if os.path.isabs(p) and os.path.exists(p):
        return p
    candidate = os.path.join(BASE_DIR, p)
    if os.path.exists(candidate):
        return candidate
    if getattr(sys, 'frozen', False):
        fallback = os.path.join(os.path.dirname(sys.executable), p)
        if os.path.exists(fallback):
            return fallback
    return candidate


def file_exists_nonempty(path: str) -> bool:
    p = resolve_path(path)
    return os.path.isfile(p) and os.path.getsize(p) > 0


# Image sizes are looked up every frame; cache by resolved path
_IMG_SIZE_CACHE: dict[str, tuple[int, int]] = {}


def get_image_pixel_size(path: str) -> Optional[tuple[int, int]]:
    """Pixel (width, height) of an image, or None if it cannot be read."""
    abs_path = resolve_path(path)
    if abs_path in _IMG_SIZE_CACHE:
        return _IMG_SIZE_CACHE[abs_path]
    try:
        with Image.open(abs_path) as im:
            size = im.size
    except OSError:
        return None
    _IMG_SIZE_CACHE[abs_path] = size
    return size


def fitted_size_keep_aspect(path: str, max_w: float, max_h: float) -> tuple[float, float]:
    """Largest size within (max_w, max_h) that keeps the image aspect ratio.

    Returns the box itself when the image size is unknown.
    """
    px = get_image_pixel_size(path)
    if not px:
        return max_w, max_h
    pw, ph = px
    if pw <= 0 or ph <= 0:
        return max_w, max_h
    img_ratio = pw / ph
    box_ratio = max_w / max_h if max_h > 0 else img_ratio
    if img_ratio >= box_ratio:
        return max_w, max_w / img_ratio
    return max_h * img_ratio, max_h
