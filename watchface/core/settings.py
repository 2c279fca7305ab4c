# watchface/core/settings.py
"""
User settings snapshot and validation. The host settings store supplies raw values;
validation runs once per load and never raises: out-of-range enum codes reset to
index 0, unusable goals reset to their default, goals under the floor are raised to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from enum import IntEnum
from typing import Any, Mapping

from watchface.core.config import (
    CALORIE_GOAL_ACTIVE_DEFAULT,
    CALORIE_GOAL_ACTIVE_MIN,
    CALORIE_GOAL_OVERALL_DEFAULT,
    CALORIE_GOAL_OVERALL_MIN,
)
from watchface.core.error_codes import SETTING_RESET, with_detail
from watchface.core.types import (
    ColorScheme,
    FieldMode,
    GaugeMode,
    HandBehavior,
    VisibilityFlags,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    hand_behavior: HandBehavior = HandBehavior.SMOOTH
    gauge_mode: GaugeMode = GaugeMode.BATTERY
    top_field: FieldMode = FieldMode.DEFAULT
    bottom_field: FieldMode = FieldMode.DEFAULT
    color_scheme: ColorScheme = ColorScheme.DARK
    calorie_goal_overall: int = CALORIE_GOAL_OVERALL_DEFAULT
    calorie_goal_active: int = CALORIE_GOAL_ACTIVE_DEFAULT
    show_top_field: bool = True
    show_middle_gauge: bool = True
    show_bottom_field: bool = True
    show_minute_hand: bool = True

    @property
    def visibility(self) -> VisibilityFlags:
        return VisibilityFlags(
            top_field=self.show_top_field,
            middle_gauge=self.show_middle_gauge,
            bottom_field=self.show_bottom_field,
            minute_hand=self.show_minute_hand,
        )


ENUM_FIELDS: dict[str, type[IntEnum]] = {
    "hand_behavior": HandBehavior,
    "gauge_mode": GaugeMode,
    "top_field": FieldMode,
    "bottom_field": FieldMode,
    "color_scheme": ColorScheme,
}

# name: (default, floor)
GOAL_FIELDS: dict[str, tuple[int, int]] = {
    "calorie_goal_overall": (CALORIE_GOAL_OVERALL_DEFAULT, CALORIE_GOAL_OVERALL_MIN),
    "calorie_goal_active": (CALORIE_GOAL_ACTIVE_DEFAULT, CALORIE_GOAL_ACTIVE_MIN),
}

FLAG_FIELDS: tuple[str, ...] = (
    "show_top_field",
    "show_middle_gauge",
    "show_bottom_field",
    "show_minute_hand",
)


def _as_int(value: Any) -> int | None:
    """Integer value of value, or None when it is not an integral number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _validate_enum(value: Any, enum_cls: type[IntEnum]) -> IntEnum | None:
    code = _as_int(value)
    if code is None:
        return None
    try:
        return enum_cls(code)
    except ValueError:
        return None


def _validate_goal(value: Any, default: int, floor: int) -> tuple[int, bool]:
    """(goal, changed). Non-numeric -> default; below floor -> floor."""
    goal = _as_int(value)
    if goal is None:
        return default, True
    if goal < floor:
        return floor, True
    return goal, False


def validate_settings(settings: Settings) -> tuple[Settings, list[str]]:
    """
    Return (validated settings, warning codes). Valid in-range values are never altered.
    """
    changes: dict[str, Any] = {}
    warnings: list[str] = []

    for name, enum_cls in ENUM_FIELDS.items():
        raw = getattr(settings, name)
        member = _validate_enum(raw, enum_cls)
        if member is None:
            member = enum_cls(0)
            warnings.append(with_detail(SETTING_RESET, name))
            logger.warning("Setting %s=%r out of range; reset to %s", name, raw, member.name)
        if member is not raw:
            changes[name] = member

    for name, (default, floor) in GOAL_FIELDS.items():
        raw = getattr(settings, name)
        goal, changed = _validate_goal(raw, default, floor)
        if changed:
            warnings.append(with_detail(SETTING_RESET, name))
            logger.warning("Setting %s=%r invalid; using %d", name, raw, goal)
        if goal is not raw:
            changes[name] = goal

    for name in FLAG_FIELDS:
        raw = getattr(settings, name)
        if not isinstance(raw, bool):
            changes[name] = True
            warnings.append(with_detail(SETTING_RESET, name))
            logger.warning("Setting %s=%r is not a flag; reset to True", name, raw)

    return (replace(settings, **changes) if changes else settings), warnings


def load_settings(raw: Mapping[str, Any] | None) -> tuple[Settings, list[str]]:
    """
    Build Settings from a raw host mapping (unknown keys ignored, missing keys default)
    and validate it.
    """
    known = {f.name for f in fields(Settings)}
    values = {k: v for k, v in (raw or {}).items() if k in known}
    return validate_settings(Settings(**values))
