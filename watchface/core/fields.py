"""
Text fields: top (date by default) and bottom (notification count by default),
either of which can show a metric instead. Missing data renders as an empty string.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from watchface.core.config import DATE_FORMAT, FIELD_FONT_SCALE
from watchface.core.draw import DrawText
from watchface.core.layout import field_strip_top
from watchface.core.types import FieldMode, LayoutConfig, SensorSnapshot

FieldPosition = Literal["top", "bottom"]


def _num(value: float | None, suffix: str = "") -> str:
    if value is None:
        return ""
    return f"{int(round(value))}{suffix}"


def field_text(
    mode: FieldMode,
    position: FieldPosition,
    snapshot: SensorSnapshot,
    now: datetime,
) -> str:
    """Text for one field. DEFAULT means date on top, notification count at the bottom."""
    mode = FieldMode(mode)
    if mode == FieldMode.DEFAULT:
        if position == "top":
            return now.strftime(DATE_FORMAT).upper()
        count = snapshot.notification_count
        return str(count) if count else ""
    if mode == FieldMode.STEPS:
        return _num(snapshot.steps)
    if mode == FieldMode.HEART_RATE:
        return _num(snapshot.heart_rate)
    if mode == FieldMode.BATTERY:
        return _num(snapshot.battery, "%")
    if mode == FieldMode.CALORIES:
        return _num(snapshot.calories)
    if mode == FieldMode.ACTIVE_CALORIES:
        return _num(snapshot.active_calories)
    return ""


def field_font_size(layout: LayoutConfig) -> int:
    return max(1, int(layout.field_strip_height * FIELD_FONT_SCALE))


def field_strip(layout: LayoutConfig, position: FieldPosition) -> tuple[int, int, int, int]:
    """(x, y, w, h) of the full-width strip holding the field."""
    ratio = layout.date_y_ratio if position == "top" else layout.notification_y_ratio
    return (0, field_strip_top(layout, ratio), layout.width, layout.field_strip_height)


def field_command(layout: LayoutConfig, position: FieldPosition, text: str, color: str) -> DrawText:
    """Text centred in its strip."""
    _, y, _, h = field_strip(layout, position)
    return DrawText(
        x=layout.center_x,
        y=y + h / 2.0,
        text=text,
        color=color,
        font_size=field_font_size(layout),
        justify="center",
    )
