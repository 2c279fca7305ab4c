"""
Font loading and text measurement in pixels using Pillow.
"""

from __future__ import annotations

import warnings
from functools import lru_cache

from watchface.core.config import DEFAULT_FONT_FAMILY

_font_warning_emitted: set[str] = set()


@lru_cache(maxsize=32)
def load_font(font_size_px: int, font_family: str = DEFAULT_FONT_FAMILY):
    """Load a PIL ImageFont; fallback with warning if the font is not found."""
    from PIL import ImageFont

    size = max(1, int(font_size_px))
    candidates = [
        font_family + ".ttf",
        font_family.replace(" ", "") + ".ttf",
        "DejaVuSans.ttf",
        "arial.ttf",
        "Arial.ttf",
    ]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size=size)
        except (OSError, IOError):
            continue
    if font_family not in _font_warning_emitted:
        _font_warning_emitted.add(font_family)
        warnings.warn(f"Font not found: {font_family!r}; using default.", UserWarning)
    return ImageFont.load_default(size=size)


def measure_text_px(text: str, font_size_px: int, font_family: str = DEFAULT_FONT_FAMILY) -> tuple[int, int]:
    """Return (width_px, height_px) of the rendered text's bounding box."""
    from PIL import Image, ImageDraw

    if not text:
        return (0, 0)
    font = load_font(font_size_px, font_family)
    draw = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    return (int(right - left), int(bottom - top))
