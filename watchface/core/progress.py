"""
Progress data sources for the middle gauge. Each variant reports (current, goal)
or None when the data is unavailable; the percentage/clamp math lives in one place.
Missing sensor, zero goal and unsupported capability all read as 0.
"""

from __future__ import annotations

import logging

from watchface.core.settings import Settings
from watchface.core.types import GaugeMode, ProgressReading, SensorSnapshot

logger = logging.getLogger(__name__)


def progress_percent(current: float | None, goal: float | None) -> int:
    """min(100, round(100 * current / goal)); 0 when either value is missing or goal <= 0."""
    if current is None or goal is None or goal <= 0:
        return 0
    pct = round(100.0 * current / goal)
    return max(0, min(100, int(pct)))


class ProgressSource:
    """Base variant. Subclasses override current_and_goal."""

    mode: GaugeMode = GaugeMode.BATTERY
    multi_color: bool = False

    def current_and_goal(self, snapshot: SensorSnapshot) -> tuple[float, float] | None:
        raise NotImplementedError

    def read(self, snapshot: SensorSnapshot) -> ProgressReading:
        pair = self.current_and_goal(snapshot)
        if pair is None:
            logger.debug("Progress source %s unavailable; reading 0", self.mode.name)
            return ProgressReading(percent=0, multi_color=self.multi_color, charging=False)
        return ProgressReading(
            percent=progress_percent(*pair),
            multi_color=self.multi_color,
            charging=bool(snapshot.charging) and self.multi_color,
        )


def _pair(current: float | None, goal: float | None) -> tuple[float, float] | None:
    if current is None or goal is None:
        return None
    return (current, goal)


class BatterySource(ProgressSource):
    mode = GaugeMode.BATTERY
    multi_color = True

    def current_and_goal(self, snapshot: SensorSnapshot) -> tuple[float, float] | None:
        return _pair(snapshot.battery, 100)


class StepsSource(ProgressSource):
    mode = GaugeMode.STEPS

    def current_and_goal(self, snapshot: SensorSnapshot) -> tuple[float, float] | None:
        return _pair(snapshot.steps, snapshot.step_goal)


class ActiveMinutesSource(ProgressSource):
    mode = GaugeMode.ACTIVE_MINUTES

    def current_and_goal(self, snapshot: SensorSnapshot) -> tuple[float, float] | None:
        return _pair(snapshot.active_minutes_week, snapshot.active_minutes_week_goal)


class StairsSource(ProgressSource):
    mode = GaugeMode.STAIRS

    def current_and_goal(self, snapshot: SensorSnapshot) -> tuple[float, float] | None:
        return _pair(snapshot.floors_climbed, snapshot.floors_climbed_goal)


class CaloriesSource(ProgressSource):
    """Calories against the user-configured overall goal (not a device goal)."""
    mode = GaugeMode.CALORIES

    def __init__(self, goal: int) -> None:
        self.goal = goal

    def current_and_goal(self, snapshot: SensorSnapshot) -> tuple[float, float] | None:
        return _pair(snapshot.calories, self.goal)


class ActiveCaloriesSource(ProgressSource):
    """Active calories against the user-configured active goal."""
    mode = GaugeMode.ACTIVE_CALORIES

    def __init__(self, goal: int) -> None:
        self.goal = goal

    def current_and_goal(self, snapshot: SensorSnapshot) -> tuple[float, float] | None:
        return _pair(snapshot.active_calories, self.goal)


def source_for_mode(mode: GaugeMode, settings: Settings | None = None) -> ProgressSource:
    """Select the variant once per settings load."""
    settings = settings or Settings()
    mode = GaugeMode(mode)
    if mode == GaugeMode.STEPS:
        return StepsSource()
    if mode == GaugeMode.ACTIVE_MINUTES:
        return ActiveMinutesSource()
    if mode == GaugeMode.STAIRS:
        return StairsSource()
    if mode == GaugeMode.CALORIES:
        return CaloriesSource(settings.calorie_goal_overall)
    if mode == GaugeMode.ACTIVE_CALORIES:
        return ActiveCaloriesSource(settings.calorie_goal_active)
    return BatterySource()
