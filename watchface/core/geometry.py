# watchface/core/geometry.py
"""
Geometry helpers: rotation primitive, hand polygons, hand angles,
hash-mark segments, bounding boxes and partial-update dirty regions.
Angles are radians, 0 = 12 o'clock, increasing clockwise (screen y points down).
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

import numpy as np
from shapely.geometry import Polygon as ShapelyPolygon

from watchface.core.config import (
    GEOMETRY_DEBUG,
    HOUR_HAND_LENGTH_DIVISOR,
    HOUR_HAND_WIDTH_DIVISOR,
    ROTATION_PIXEL_BIAS,
)
from watchface.core.types import (
    BoundingBox,
    ClockTime,
    HandAngles,
    HandBehavior,
    LayoutConfig,
    Point2D,
    Polygon,
    Segment,
)

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


def rotate(point: Sequence[float], angle: float) -> Point2D:
    """
    Rotate about the origin, then add ROTATION_PIXEL_BIAS on both axes.
    The bias makes later integer truncation behave like rounding.
    """
    x, y = point[0], point[1]
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return Point2D(
        x * cos_a - y * sin_a + ROTATION_PIXEL_BIAS,
        x * sin_a + y * cos_a + ROTATION_PIXEL_BIAS,
    )


def _transform(local: Iterable[tuple[float, float]], center: Sequence[float], angle: float) -> Polygon:
    cx, cy = center[0], center[1]
    out = []
    for p in local:
        r = rotate(p, angle)
        out.append(Point2D(r.x + cx, r.y + cy))
    return tuple(out)


def generate_hand_coordinates(
    center: Sequence[float],
    angle: float,
    hand_length: float,
    tail_length: float,
    width: float,
) -> Polygon:
    """
    Quadrilateral hand: tail-left, tip-left, tip-right, tail-right.
    The tail protrudes past the pivot on the side opposite the tip.
    """
    hw = width / 2.0
    local = [
        (-hw, tail_length),
        (-hw, -hand_length),
        (hw, -hand_length),
        (hw, tail_length),
    ]
    return _transform(local, center, angle)


def generate_hour_coordinates(
    center: Sequence[float],
    angle: float,
    hand_length: float,
    tail_length: float,
    width: float,
) -> Polygon:
    """Triangular hand: tip-left, tip-right, tail-center."""
    hw = width / 2.0
    local = [
        (-hw, -hand_length),
        (hw, -hand_length),
        (0.0, tail_length),
    ]
    return _transform(local, center, angle)


def hour_angle(time: ClockTime, behavior: HandBehavior = HandBehavior.SMOOTH) -> float:
    """((hour mod 12) * 60 + minutes) / 720 of a turn; DISCRETE ignores the minutes."""
    minutes = time.minute if behavior == HandBehavior.SMOOTH else 0
    return ((time.hour % 12) * 60 + minutes) / 720.0 * TWO_PI


def minute_angle(time: ClockTime) -> float:
    return time.minute / 60.0 * TWO_PI


def hand_angles(time: ClockTime, behavior: HandBehavior = HandBehavior.SMOOTH) -> HandAngles:
    return HandAngles(hour=hour_angle(time, behavior), minute=minute_angle(time))


def hour_hand_polygon(layout: LayoutConfig, angle: float) -> Polygon:
    """Hour-hand triangle with proportions taken from the layout record."""
    return generate_hour_coordinates(
        layout.center,
        angle,
        layout.hour_hand_length // HOUR_HAND_LENGTH_DIVISOR,
        layout.hour_hand_tail,
        max(1, layout.hour_hand_width // HOUR_HAND_WIDTH_DIVISOR),
    )


def minute_hand_polygon(layout: LayoutConfig, angle: float) -> Polygon:
    """Minute-hand quadrilateral reaching the inner end of the minute marks."""
    return generate_hand_coordinates(
        layout.center,
        angle,
        layout.minute_hand_length,
        layout.minute_tail,
        max(1, layout.minute_hand_width),
    )


def get_bounding_box(points: Sequence[Sequence[float]]) -> BoundingBox:
    """
    Componentwise (min, max) over the points. A single point gives a zero-area box.
    Precondition: points is non-empty (raises ValueError otherwise).
    """
    if len(points) == 0:
        raise ValueError("get_bounding_box requires at least one point")
    xy = np.asarray(points, dtype=float).reshape(-1, 2)
    mins = xy.min(axis=0)
    maxs = xy.max(axis=0)
    return (
        Point2D(float(mins[0]), float(mins[1])),
        Point2D(float(maxs[0]), float(maxs[1])),
    )


def generate_hash_mark_segments(
    center: Sequence[float],
    outer_radius: float,
    major_count: int,
    minor_divisions: int,
    length: float,
) -> list[Segment]:
    """
    Radial tick segments from (outer_radius - length) to outer_radius.
    Each of major_count * minor_divisions steps of pi / (major_count * minor_divisions)
    emits two segments, one at the step angle and one opposite it.
    """
    if major_count <= 0:
        return []
    divisions = max(1, minor_divisions)
    steps = major_count * divisions
    cx, cy = center[0], center[1]
    inner = outer_radius - length

    base = np.arange(steps, dtype=float) * math.pi / steps
    angles = np.stack([base, base + math.pi], axis=1).reshape(-1)
    # Same parametrisation as rotate(): local (0, -r) turned clockwise by angle.
    sin_a = np.sin(angles)
    cos_a = np.cos(angles)

    segments: list[Segment] = []
    for s, c in zip(sin_a, cos_a):
        start = Point2D(cx + inner * s, cy - inner * c)
        end = Point2D(cx + outer_radius * s, cy - outer_radius * c)
        segments.append(Segment(start, end))
    if GEOMETRY_DEBUG:
        logger.debug("Hash marks: %d segments (major=%d, minor=%d, length=%.1f)",
                     len(segments), major_count, divisions, length)
    return segments


def polygon_area(points: Sequence[Sequence[float]]) -> float:
    """Area of the filled region; 0 for degenerate input (fewer than 3 points)."""
    if len(points) < 3:
        return 0.0
    return float(ShapelyPolygon([(p[0], p[1]) for p in points]).area)


def dirty_region(
    boxes: Iterable[BoundingBox],
    width: int,
    height: int,
    pad: int = 1,
) -> tuple[int, int, int, int] | None:
    """
    Integer (x, y, w, h) covering the union of boxes, padded and clipped to the screen.
    Returns None when nothing is visible.
    """
    corners = [corner for pair in boxes for corner in pair]
    if not corners:
        return None
    (minx, miny), (maxx, maxy) = get_bounding_box(corners)
    x0 = max(0, int(math.floor(minx)) - pad)
    y0 = max(0, int(math.floor(miny)) - pad)
    x1 = min(width, int(math.ceil(maxx)) + pad)
    y1 = min(height, int(math.ceil(maxy)) + pad)
    if x1 <= x0 or y1 <= y0:
        return None
    return (x0, y0, x1 - x0, y1 - y0)
