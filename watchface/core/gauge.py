"""
Middle gauge: a fixed 11-tick scale across [battery_left, battery_right] plus one
indicator circle whose position and colour follow the progress reading.
The gauge does not know where the percentage comes from.
"""

from __future__ import annotations

from watchface.core.config import (
    GAUGE_LINE_STROKE_PX,
    GAUGE_RED_THRESHOLD,
    GAUGE_TICK_COUNT,
    GAUGE_YELLOW_THRESHOLD,
)
from watchface.core.draw import DrawCommand, DrawLine, FillCircle
from watchface.core.theme import resolve
from watchface.core.types import ColorRole, ColorScheme, LayoutConfig


def gauge_tick_xs(layout: LayoutConfig) -> list[float]:
    """x of each tick at i/10 of the span, i = 0..10."""
    span = layout.battery_right - layout.battery_left
    last = GAUGE_TICK_COUNT - 1
    return [layout.battery_left + span * i / last for i in range(GAUGE_TICK_COUNT)]


def gauge_indicator_x(percentage: float, layout: LayoutConfig) -> float:
    """battery_left + (battery_right - battery_left) / 10 * (percentage / 10)."""
    span = layout.battery_right - layout.battery_left
    return layout.battery_left + span / 10.0 * (percentage / 10.0)


def indicator_role(percentage: float, multi_color: bool, charging: bool = False) -> ColorRole:
    """Threshold colours in multi-colour mode, otherwise always green."""
    if not multi_color:
        return ColorRole.GAUGE_GREEN
    if charging:
        return ColorRole.GAUGE_BLUE
    if percentage <= GAUGE_RED_THRESHOLD:
        return ColorRole.GAUGE_RED
    if percentage <= GAUGE_YELLOW_THRESHOLD:
        return ColorRole.GAUGE_YELLOW
    return ColorRole.GAUGE_GREEN


def render_gauge(
    percentage: float,
    multi_color: bool,
    layout: LayoutConfig,
    scheme: ColorScheme,
    charging: bool = False,
) -> list[DrawCommand]:
    """
    Draw commands for the gauge: exactly 11 tick lines (independent of percentage)
    followed by one filled indicator circle centred on the bar.
    Percentages outside [0, 100] are clamped.
    """
    pct = max(0.0, min(100.0, float(percentage)))
    top = layout.gauge_top
    bottom = top + layout.gauge_bar_height
    mid_y = top + layout.gauge_bar_height / 2.0

    line_color = resolve(ColorRole.GAUGE_LINE, scheme)
    commands: list[DrawCommand] = [
        DrawLine(x, top, x, bottom, line_color, GAUGE_LINE_STROKE_PX)
        for x in gauge_tick_xs(layout)
    ]
    commands.append(
        FillCircle(
            cx=gauge_indicator_x(pct, layout),
            cy=mid_y,
            r=layout.gauge_indicator_radius,
            color=resolve(indicator_role(pct, multi_color, charging), scheme),
        )
    )
    return commands
