# watchface/core/types.py
"""
Dataclasses and enums for screen dimensions, layout, time, sensors and settings codes.
Records are immutable; layout is rebuilt wholesale, everything else lives for one frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NamedTuple


class HandBehavior(IntEnum):
    """Hour-hand motion: continuous with minutes, or jumping once per hour."""
    SMOOTH = 0
    DISCRETE = 1


class GaugeMode(IntEnum):
    """Data shown by the middle gauge. Values are settings codes."""
    BATTERY = 0
    STEPS = 1
    ACTIVE_MINUTES = 2
    STAIRS = 3
    CALORIES = 4
    ACTIVE_CALORIES = 5


class FieldMode(IntEnum):
    """Text field content. DEFAULT is the date (top) or notification count (bottom)."""
    DEFAULT = 0
    STEPS = 1
    HEART_RATE = 2
    BATTERY = 3
    CALORIES = 4
    ACTIVE_CALORIES = 5


class ColorScheme(IntEnum):
    DARK = 0
    LIGHT = 1


class ColorRole(str, Enum):
    BACKGROUND = "background"
    TEXT = "text"
    MINUTE_HAND = "minuteHand"
    HOUR_HAND_CONNECTED = "hourHandConnected"
    HOUR_HAND_DISCONNECTED = "hourHandDisconnected"
    ARBOR_NORMAL = "arborNormal"
    ARBOR_ALERT = "arborAlert"
    HOUR_HASH = "hourHash"
    MINUTE_HASH = "minuteHash"
    GAUGE_LINE = "gaugeLine"
    GAUGE_GREEN = "gaugeGreen"
    GAUGE_RED = "gaugeRed"
    GAUGE_YELLOW = "gaugeYellow"
    GAUGE_BLUE = "gaugeBlue"


class Point2D(NamedTuple):
    """Pixel coordinate; may be fractional before final truncation."""
    x: float
    y: float


Polygon = tuple[Point2D, ...]
BoundingBox = tuple[Point2D, Point2D]


class Segment(NamedTuple):
    start: Point2D
    end: Point2D


@dataclass(frozen=True)
class ScreenDimensions:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Screen dimensions must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class LayoutConfig:
    """
    Every layout constant for one screen size. Pixel lengths are truncated ints,
    ratios are floats in [0, 1]. Built only by layout.create_layout_config.
    """
    width: int
    height: int
    scale_factor: float

    center_x: int
    center_y: int
    outer_radius: int

    hour_hand_width: int
    hour_hand_length: int
    hour_hand_tail: int
    minute_hand_width: int
    minute_hand_length: int
    minute_tail: int

    hour_hash_length: int
    minute_hash_length: int

    gauge_bar_height: int
    gauge_indicator_radius: int
    gauge_top: int
    arbor_radius: int

    notification_multiplier: float
    field_strip_height: int

    date_y_ratio: float
    notification_y_ratio: float
    gauge_y_ratio: float

    battery_left: int
    battery_right: int

    @property
    def center(self) -> Point2D:
        return Point2D(float(self.center_x), float(self.center_y))


@dataclass(frozen=True)
class ClockTime:
    hour: int
    minute: int
    second: int = 0


@dataclass(frozen=True)
class HandAngles:
    """Radians in [0, 2*pi); 0 = 12 o'clock, increasing clockwise."""
    hour: float
    minute: float


@dataclass(frozen=True)
class SensorSnapshot:
    """
    Read-only device state for one frame. None means the value is unavailable
    (sensor missing, capability absent, or the host read failed).
    """
    battery: float | None = None
    charging: bool | None = None
    phone_connected: bool | None = None
    notification_count: int | None = None
    steps: int | None = None
    step_goal: int | None = None
    active_minutes_week: int | None = None
    active_minutes_week_goal: int | None = None
    floors_climbed: int | None = None
    floors_climbed_goal: int | None = None
    calories: int | None = None
    active_calories: int | None = None
    heart_rate: int | None = None
    move_bar_level: int | None = None


@dataclass(frozen=True)
class VisibilityFlags:
    top_field: bool = True
    middle_gauge: bool = True
    bottom_field: bool = True
    minute_hand: bool = True


@dataclass(frozen=True)
class ProgressReading:
    """Gauge input: clamped percent plus colour-mode flags."""
    percent: int
    multi_color: bool = False
    charging: bool = False
