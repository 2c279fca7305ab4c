"""
Layout record for one screen size: every length is base * scale factor, truncated.
Built once per layout event and cached; replaced wholesale when dimensions change.
"""

from __future__ import annotations

import logging

from watchface.core.config import (
    ARBOR_RADIUS_BASE,
    BATTERY_LEFT_RATIO,
    BATTERY_RIGHT_RATIO,
    DATE_Y_RATIO,
    GAUGE_BAR_HEIGHT_BASE,
    GAUGE_INDICATOR_RADIUS_BASE,
    GAUGE_Y_RATIO,
    HOUR_HAND_LENGTH_BASE,
    HOUR_HAND_WIDTH_BASE,
    HOUR_HASH_LENGTH_BASE,
    MINUTE_HAND_WIDTH_BASE,
    MINUTE_HASH_LENGTH_BASE,
    MINUTE_TAIL_BASE,
    NOTIFICATION_MULTIPLIER,
    NOTIFICATION_Y_RATIO,
)
from watchface.core.scale import calculate_scale_factor
from watchface.core.types import LayoutConfig, ScreenDimensions

logger = logging.getLogger(__name__)


def _px(base: float, scale: float) -> int:
    # Truncation, not rounding: int() of a non-negative float is floor.
    return int(base * scale)


def create_layout_config(width: int, height: int) -> LayoutConfig:
    """
    Derive all layout constants from screen dimensions.
    Battery gauge bounds are 25% / 75% of width regardless of scale.
    Raises ValueError for non-positive dimensions.
    """
    dims = ScreenDimensions(width, height)
    s = calculate_scale_factor(dims.width, dims.height)

    outer_radius = min(dims.width, dims.height) // 2
    minute_hash_length = _px(MINUTE_HASH_LENGTH_BASE, s)
    minute_tail = _px(MINUTE_TAIL_BASE, s)
    arbor_radius = _px(ARBOR_RADIUS_BASE, s)

    return LayoutConfig(
        width=dims.width,
        height=dims.height,
        scale_factor=s,
        center_x=dims.width // 2,
        center_y=dims.height // 2,
        outer_radius=outer_radius,
        hour_hand_width=_px(HOUR_HAND_WIDTH_BASE, s),
        hour_hand_length=_px(HOUR_HAND_LENGTH_BASE, s),
        hour_hand_tail=minute_tail,
        minute_hand_width=_px(MINUTE_HAND_WIDTH_BASE, s),
        minute_hand_length=outer_radius - minute_hash_length,
        minute_tail=minute_tail,
        hour_hash_length=_px(HOUR_HASH_LENGTH_BASE, s),
        minute_hash_length=minute_hash_length,
        gauge_bar_height=_px(GAUGE_BAR_HEIGHT_BASE, s),
        gauge_indicator_radius=_px(GAUGE_INDICATOR_RADIUS_BASE, s),
        gauge_top=int(dims.height * GAUGE_Y_RATIO) + arbor_radius * 2,
        arbor_radius=arbor_radius,
        notification_multiplier=NOTIFICATION_MULTIPLIER,
        field_strip_height=_px(NOTIFICATION_MULTIPLIER * GAUGE_INDICATOR_RADIUS_BASE, s),
        date_y_ratio=DATE_Y_RATIO,
        notification_y_ratio=NOTIFICATION_Y_RATIO,
        gauge_y_ratio=GAUGE_Y_RATIO,
        battery_left=int(BATTERY_LEFT_RATIO * dims.width),
        battery_right=int(BATTERY_RIGHT_RATIO * dims.width),
    )


def field_strip_top(layout: LayoutConfig, y_ratio: float) -> int:
    """Top pixel row of a text strip centred on y_ratio * height, kept on screen."""
    top = int(layout.height * y_ratio) - layout.field_strip_height // 2
    return max(0, min(top, layout.height - layout.field_strip_height))


class LayoutCache:
    """Holds the current LayoutConfig; rebuilds only when the dimensions change."""

    def __init__(self) -> None:
        self._layout: LayoutConfig | None = None

    @property
    def current(self) -> LayoutConfig | None:
        return self._layout

    def get(self, width: int, height: int) -> LayoutConfig:
        layout = self._layout
        if layout is None or layout.width != width or layout.height != height:
            layout = create_layout_config(width, height)
            logger.debug("Layout rebuilt for %dx%d (scale=%.4f)", width, height, layout.scale_factor)
            self._layout = layout
        return layout
