# watchface/core/config.py
"""
Central configuration for the watchface engine.
All tunable values live here; no magic numbers in other modules.
Lengths are given at the reference resolution and scaled per screen.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Reference resolution -----
REFERENCE_EDGE_PX: float = 260.0
"""Edge length (px) at which scale factor is exactly 1.0."""

# ----- Base lengths at reference resolution (px) -----
HOUR_HAND_WIDTH_BASE: float = 160.0
HOUR_HAND_LENGTH_BASE: float = 151.6
MINUTE_HAND_WIDTH_BASE: float = 2.0
MINUTE_TAIL_BASE: float = 15.0
HOUR_HASH_LENGTH_BASE: float = 15.0
MINUTE_HASH_LENGTH_BASE: float = 5.0
GAUGE_BAR_HEIGHT_BASE: float = 11.0
GAUGE_INDICATOR_RADIUS_BASE: float = 5.0
ARBOR_RADIUS_BASE: float = 8.0

NOTIFICATION_MULTIPLIER: float = 4.6
"""Text strip height in units of the gauge indicator radius."""

# ----- Hand proportions derived from the layout record -----
HOUR_HAND_LENGTH_DIVISOR: int = 2
"""Drawn hour-hand length = hour_hand_length // HOUR_HAND_LENGTH_DIVISOR."""

HOUR_HAND_WIDTH_DIVISOR: int = 10
"""Drawn hour-hand triangle base = hour_hand_width // HOUR_HAND_WIDTH_DIVISOR."""

# ----- Ratios (fraction of width/height, evaluated at layout time) -----
DATE_Y_RATIO: float = 0.25
NOTIFICATION_Y_RATIO: float = 0.77
GAUGE_Y_RATIO: float = 0.5
BATTERY_LEFT_RATIO: float = 0.25
BATTERY_RIGHT_RATIO: float = 0.75

# ----- Dial -----
HOUR_HASH_MAJOR_COUNT: int = 6
HOUR_HASH_MINOR_DIVISIONS: int = 1
MINUTE_HASH_MAJOR_COUNT: int = 6
MINUTE_HASH_MINOR_DIVISIONS: int = 5
HOUR_HASH_STROKE_PX: int = 3
MINUTE_HASH_STROKE_PX: int = 1

ROTATION_PIXEL_BIAS: float = 0.5
"""Added to both axes after rotation; consumers truncate to integer pixels."""

# ----- Gauge -----
GAUGE_TICK_COUNT: int = 11
"""Fixed tick count: 0%, 10%, ..., 100%."""

GAUGE_RED_THRESHOLD: int = 10
GAUGE_YELLOW_THRESHOLD: int = 20
GAUGE_LINE_STROKE_PX: int = 1

# ----- Alerts -----
MOVE_BAR_ALERT_LEVEL: int = 1
"""Arbor switches to the alert colour at or above this inactivity level."""

# ----- Settings defaults and floors -----
CALORIE_GOAL_OVERALL_DEFAULT: int = 2400
CALORIE_GOAL_OVERALL_MIN: int = 1000
CALORIE_GOAL_ACTIVE_DEFAULT: int = 750
CALORIE_GOAL_ACTIVE_MIN: int = 200

# ----- Text -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
FIELD_FONT_SCALE: float = 0.7
"""Field font size (px) as a fraction of field_strip_height."""

DATE_FORMAT: str = "%a %d"

# ----- Rendering (preview tooling) -----
RENDER_DPI: int = 100
DEFAULT_PREVIEW_TIME: str = "10:10"

DEVICE_SCREEN_SIZES: tuple[tuple[int, int], ...] = (
    (208, 208),
    (218, 218),
    (240, 240),
    (260, 260),
    (280, 280),
    (360, 360),
    (390, 390),
    (416, 416),
    (454, 454),
)
"""Round-screen sizes covered by batch previews."""

# ----- Debug flags -----
GEOMETRY_DEBUG: bool = os.environ.get("WATCHFACE_DEBUG", "").lower() in ("1", "true", "yes")
"""Enable verbose geometry logging. Set env WATCHFACE_DEBUG=1 to enable."""
