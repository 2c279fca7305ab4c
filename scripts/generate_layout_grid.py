#!/usr/bin/env python3
"""
Generate a layout grid CSV for reviewing scaling across screen sizes.

Rows:
- every square size from 150 to 500 px in 2 px steps (round and square devices)
- every entry of DEVICE_SCREEN_SIZES (real device catalogue)
- a handful of rectangular screens (scale uses the mean edge)

Columns are the LayoutConfig lengths plus the bounding-box extents of both hands
at 10:10, so a reviewer can spot hands leaving the dial or strips colliding.
"""

from __future__ import annotations

import csv
from dataclasses import asdict
from pathlib import Path
from typing import List, Tuple

import numpy as np

from watchface.core.config import DEVICE_SCREEN_SIZES
from watchface.core.fields import field_strip
from watchface.core.geometry import (
    get_bounding_box,
    hand_angles,
    hour_hand_polygon,
    minute_hand_polygon,
    polygon_area,
)
from watchface.core.layout import create_layout_config
from watchface.core.types import ClockTime, HandBehavior

# Output file
OUTPUT_PATH = Path(__file__).parent.parent / "docs" / "assets" / "layout_grid.csv"

RECTANGULAR_SIZES: List[Tuple[int, int]] = [(240, 280), (320, 360), (336, 480), (176, 176), (200, 265)]


def grid_sizes() -> List[Tuple[int, int]]:
    """Square sweep, then the device catalogue, then rectangles; duplicates dropped."""
    sizes = [(int(e), int(e)) for e in np.arange(150, 502, 2)]
    sizes += list(DEVICE_SCREEN_SIZES) + RECTANGULAR_SIZES
    seen = set()
    out = []
    for size in sizes:
        if size not in seen:
            seen.add(size)
            out.append(size)
    return out


def layout_row(width: int, height: int) -> dict:
    layout = create_layout_config(width, height)
    angles = hand_angles(ClockTime(10, 10), HandBehavior.SMOOTH)
    hour = hour_hand_polygon(layout, angles.hour)
    minute = minute_hand_polygon(layout, angles.minute)
    hour_lo, hour_hi = get_bounding_box(hour)
    min_lo, min_hi = get_bounding_box(minute)
    _, top_y, _, strip_h = field_strip(layout, "top")
    _, bottom_y, _, _ = field_strip(layout, "bottom")

    row = {k: v for k, v in asdict(layout).items() if not isinstance(v, float)}
    row["scale_factor"] = round(layout.scale_factor, 4)
    row["hour_box"] = f"{hour_lo.x:.1f},{hour_lo.y:.1f},{hour_hi.x:.1f},{hour_hi.y:.1f}"
    row["minute_box"] = f"{min_lo.x:.1f},{min_lo.y:.1f},{min_hi.x:.1f},{min_hi.y:.1f}"
    row["hour_hand_area"] = round(polygon_area(hour), 1)
    row["minute_hand_area"] = round(polygon_area(minute), 1)
    row["top_strip_y"] = top_y
    row["bottom_strip_y"] = bottom_y
    # strips must not overlap the gauge band
    row["strips_clear_gauge"] = top_y + strip_h <= layout.gauge_top and bottom_y >= layout.gauge_top + layout.gauge_bar_height
    return row


def main() -> None:
    OUTPUT_PATH.parent.mkdir(parents=True, exist_ok=True)
    rows = [layout_row(w, h) for w, h in grid_sizes()]
    with open(OUTPUT_PATH, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)
    print(f"Wrote {len(rows)} layouts to {OUTPUT_PATH}")


if __name__ == "__main__":
    main()
