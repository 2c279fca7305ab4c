"""
Screen-size scale factor relative to the reference resolution.
"""

from __future__ import annotations

from watchface.core.config import REFERENCE_EDGE_PX


def calculate_scale_factor(width: int, height: int) -> float:
    """
    Average edge length divided by REFERENCE_EDGE_PX.
    Exactly 1.0 at 260x260; strictly increasing in width and height.
    """
    return (width + height) / 2.0 / REFERENCE_EDGE_PX
