# watchface/core/render.py
"""
Matplotlib debug rendering: dial outline, tick segments, hand polygons with
bounding boxes, gauge span and text strips, in screen pixel coordinates.
"""

from __future__ import annotations

import warnings
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Circle, Rectangle

from watchface.core.config import (
    HOUR_HASH_MAJOR_COUNT,
    HOUR_HASH_MINOR_DIVISIONS,
    MINUTE_HASH_MAJOR_COUNT,
    MINUTE_HASH_MINOR_DIVISIONS,
    RENDER_DPI,
)
from watchface.core.fields import field_strip
from watchface.core.gauge import gauge_tick_xs
from watchface.core.geometry import (
    generate_hash_mark_segments,
    get_bounding_box,
    hand_angles,
    hour_hand_polygon,
    minute_hand_polygon,
)
from watchface.core.types import ClockTime, HandBehavior, LayoutConfig, Polygon


def _new_fig(width_px: int, height_px: int, scale: int) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(
        figsize=(width_px * scale / RENDER_DPI, height_px * scale / RENDER_DPI),
        dpi=RENDER_DPI,
        constrained_layout=False,
    )
    ax = fig.add_axes([0, 0, 1, 1])  # full-canvas axes
    ax.set_xlim(0, width_px)
    ax.set_ylim(height_px, 0)  # screen y grows downward
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")
    return fig, ax


def _draw_polygon_with_box(ax: plt.Axes, polygon: Polygon, color: str, label: str) -> None:
    xy = np.array(polygon + (polygon[0],))
    ax.fill(xy[:, 0], xy[:, 1], facecolor=color, edgecolor="black", linewidth=0.5, alpha=0.8, label=label)
    lo, hi = get_bounding_box(polygon)
    ax.add_patch(Rectangle((lo.x, lo.y), hi.x - lo.x, hi.y - lo.y,
                           fill=False, linestyle="--", linewidth=0.8, edgecolor=color))


def render_debug(
    layout: LayoutConfig,
    time: ClockTime,
    output_path: str | Path,
    behavior: HandBehavior = HandBehavior.SMOOTH,
    scale: int = 2,
) -> Path:
    """Render geometry overlay for one layout and time. scale multiplies output resolution."""
    fig, ax = _new_fig(layout.width, layout.height, scale)
    center = layout.center

    ax.add_patch(Circle((center.x, center.y), layout.outer_radius, fill=False, edgecolor="gray", linewidth=0.8))

    for major, minor, length, color in (
        (MINUTE_HASH_MAJOR_COUNT, MINUTE_HASH_MINOR_DIVISIONS, layout.minute_hash_length, "gray"),
        (HOUR_HASH_MAJOR_COUNT, HOUR_HASH_MINOR_DIVISIONS, layout.hour_hash_length, "black"),
    ):
        for seg in generate_hash_mark_segments(center, layout.outer_radius, major, minor, length):
            ax.plot([seg.start.x, seg.end.x], [seg.start.y, seg.end.y], color=color, linewidth=1)

    for position, color in (("top", "tab:blue"), ("bottom", "tab:purple")):
        x, y, w, h = field_strip(layout, position)
        ax.add_patch(Rectangle((x, y), w, h, facecolor=color, alpha=0.15, edgecolor="none"))

    for x in gauge_tick_xs(layout):
        ax.plot([x, x], [layout.gauge_top, layout.gauge_top + layout.gauge_bar_height], color="green", linewidth=1)

    angles = hand_angles(time, behavior)
    _draw_polygon_with_box(ax, hour_hand_polygon(layout, angles.hour), "orange", "hour")
    _draw_polygon_with_box(ax, minute_hand_polygon(layout, angles.minute), "tab:red", "minute")
    ax.add_patch(Circle((center.x, center.y), layout.arbor_radius, color="black"))

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(path, dpi=RENDER_DPI, facecolor="white")
    plt.close(fig)
    return path
