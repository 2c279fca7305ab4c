"""
Frame compositor against a recording display: draw order, layer use, partial updates,
the power-budget latch and the per-element colour rules.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from watchface.core.compositor import CompositorState, FrameCompositor
from watchface.core.draw import (
    Blit,
    ClearClip,
    DrawLine,
    DrawText,
    FillCircle,
    FillPolygon,
    FillRect,
    RecordingCanvas,
    SetClip,
)
from watchface.core.error_codes import LAYERS_UNAVAILABLE, PARTIAL_UPDATES_DISABLED, SENSOR_UNAVAILABLE
from watchface.core.types import SensorSnapshot

SENSORS = SensorSnapshot(battery=64.0, phone_connected=True, notification_count=3, move_bar_level=0)
START = datetime(2024, 3, 5, 10, 10)


class Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class LayerFactory:
    def __init__(self) -> None:
        self.layers: list[RecordingCanvas] = []

    def __call__(self, width: int, height: int, name: str) -> RecordingCanvas:
        layer = RecordingCanvas(width, height, name)
        self.layers.append(layer)
        return layer


def make(
    buffered: bool = True,
    sensors: SensorSnapshot = SENSORS,
    raw_settings: dict | None = None,
    size: tuple[int, int] = (260, 260),
):
    display = RecordingCanvas(*size)
    factory = LayerFactory() if buffered else None
    clock = Clock(START)
    comp = FrameCompositor(
        display,
        layer_factory=factory,
        clock=clock,
        sensors=lambda: sensors,
        raw_settings=raw_settings,
    )
    comp.on_layout(*size)
    return comp, display, factory, clock


def kinds(commands) -> list[type]:
    return [type(c) for c in commands]


def test_direct_full_draw_order() -> None:
    comp, display, _, _ = make(buffered=False)
    report = comp.on_update()

    cmds = display.commands
    assert report.kind == "full"
    assert report.commands_drawn == len(cmds) == 90
    assert LAYERS_UNAVAILABLE in report.warnings

    assert isinstance(cmds[0], FillRect)
    assert kinds(cmds[1:73]) == [DrawLine] * 72
    assert kinds(cmds[73:84]) == [DrawLine] * 11
    assert isinstance(cmds[84], FillCircle)
    assert isinstance(cmds[85], FillPolygon) and len(cmds[85].points) == 3
    assert isinstance(cmds[86], FillPolygon) and len(cmds[86].points) == 4
    assert isinstance(cmds[87], FillCircle)
    assert kinds(cmds[88:]) == [DrawText, DrawText]
    assert cmds[88].text == "TUE 05"
    assert cmds[89].text == "3"


def test_hour_marks_drawn_after_minute_marks() -> None:
    comp, display, _, _ = make(buffered=False)
    comp.on_update()
    lines = display.of_type(DrawLine)[:72]
    assert {line.width for line in lines[:60]} == {1}
    assert {line.width for line in lines[60:]} == {3}
    assert lines[0].color == "#AAAAAA"
    assert lines[60].color == "#FFFFFF"


def test_buffered_full_uses_layers() -> None:
    comp, display, factory, _ = make()
    report = comp.on_update()

    background, top, bottom = factory.layers
    assert (background.name, top.name, bottom.name) == ("background", "top", "bottom")
    assert (top.width, top.height) == (260, comp.layout.field_strip_height)
    assert len(background.commands) == 73 + 12 + 1

    cmds = display.commands
    assert isinstance(cmds[0], Blit) and cmds[0].source is background
    assert isinstance(cmds[1], FillPolygon) and len(cmds[1].points) == 4
    assert isinstance(cmds[2], FillCircle)
    assert kinds(cmds[3:]) == [Blit, Blit]
    assert cmds[3].source is top and cmds[4].source is bottom

    assert kinds(top.commands) == [Blit, DrawText]
    assert top.commands[1].y == pytest.approx(top.height / 2)
    assert report.warnings == []
    assert report.commands_drawn == 86 + 1 + 2 + 6


def test_partial_update_while_sleeping() -> None:
    comp, display, factory, clock = make()
    comp.on_update()
    comp.on_enter_sleep()
    assert comp.state == CompositorState.AWAKE_SLEEPING

    display.clear()
    clock.now = START + timedelta(minutes=1)
    report = comp.on_partial_update()

    assert report.kind == "partial"
    assert report.dirty is not None
    x, y, w, h = report.dirty
    assert 0 <= x and 0 <= y and x + w <= 260 and y + h <= 260

    cmds = display.commands
    assert isinstance(cmds[0], SetClip)
    assert (cmds[0].x, cmds[0].y, cmds[0].w, cmds[0].h) == report.dirty
    assert isinstance(cmds[1], Blit) and cmds[1].source is factory.layers[0]
    assert (cmds[1].x, cmds[1].y) == (cmds[1].sx, cmds[1].sy) == (x, y)
    assert isinstance(cmds[2], FillPolygon)
    assert isinstance(cmds[3], FillCircle)
    assert isinstance(cmds[-1], ClearClip)
    assert not display.of_type(DrawLine)
    assert report.commands_drawn == len(cmds)


def test_partial_while_awake_is_full() -> None:
    comp, display, _, _ = make()
    comp.on_update()
    display.clear()
    report = comp.on_partial_update()
    assert report.kind == "full"
    assert not display.of_type(SetClip)


def test_partial_before_first_frame_is_full() -> None:
    comp, _, _, _ = make()
    comp.on_enter_sleep()
    assert comp.on_partial_update().kind == "full"


def test_direct_partial_is_full() -> None:
    comp, _, _, _ = make(buffered=False)
    comp.on_update()
    comp.on_enter_sleep()
    report = comp.on_partial_update()
    assert report.kind == "full"
    assert LAYERS_UNAVAILABLE in report.warnings


def test_power_budget_latch_is_permanent() -> None:
    comp, _, _, _ = make()
    comp.on_update()
    comp.on_enter_sleep()
    comp.on_power_budget_exceeded()
    assert comp.partial_updates_enabled is False

    report = comp.on_partial_update()
    assert report.kind == "full"
    assert PARTIAL_UPDATES_DISABLED in report.warnings

    comp.on_exit_sleep()
    comp.on_update()
    comp.on_enter_sleep()
    assert comp.on_partial_update().kind == "full"
    assert comp.partial_updates_enabled is False


def test_exit_sleep_returns_to_full() -> None:
    comp, _, _, _ = make()
    comp.on_enter_sleep()
    comp.on_exit_sleep()
    assert comp.state == CompositorState.AWAKE_FULL


@pytest.mark.parametrize("connected,expected", [(True, "#FF5500"), (False, "#AAAAAA"), (None, "#AAAAAA")])
def test_hour_hand_colour_tracks_phone_connection(connected, expected) -> None:
    comp, display, _, _ = make(buffered=False, sensors=SensorSnapshot(battery=50, phone_connected=connected))
    comp.on_update()
    hour = [c for c in display.of_type(FillPolygon) if len(c.points) == 3]
    assert hour[0].color == expected


@pytest.mark.parametrize("level,expected", [(0, "#FFFFFF"), (None, "#FFFFFF"), (1, "#FF0000"), (4, "#FF0000")])
def test_arbor_alert_on_move_bar(level, expected) -> None:
    comp, display, _, _ = make(buffered=False, sensors=SensorSnapshot(battery=50, move_bar_level=level))
    comp.on_update()
    arbor = display.of_type(FillCircle)[-1]
    assert arbor.r == comp.layout.arbor_radius
    assert arbor.color == expected


def test_light_theme() -> None:
    comp, display, _, _ = make(buffered=False, raw_settings={"color_scheme": 1})
    comp.on_update()
    assert display.commands[0].color == "#FFFFFF"
    assert display.of_type(DrawText)[0].color == "#000000"


def test_hidden_elements_are_skipped() -> None:
    raw = {"show_top_field": False, "show_middle_gauge": False, "show_minute_hand": False}
    comp, display, _, _ = make(buffered=False, raw_settings=raw)
    comp.on_update()
    assert len(display.of_type(DrawLine)) == 72
    assert len(display.of_type(FillCircle)) == 0
    assert [len(c.points) for c in display.of_type(FillPolygon)] == [3]
    assert [c.text for c in display.of_type(DrawText)] == ["3"]


def test_hidden_minute_hand_partial_draws_nothing() -> None:
    comp, display, _, _ = make(raw_settings={"show_minute_hand": False})
    comp.on_update()
    comp.on_enter_sleep()
    display.clear()
    report = comp.on_partial_update()
    assert report.kind == "partial"
    assert report.dirty is None
    assert display.commands == []


def test_missing_sensor_warns_and_reads_zero() -> None:
    comp, display, _, _ = make(buffered=False, sensors=SensorSnapshot())
    report = comp.on_update()
    assert f"{SENSOR_UNAVAILABLE}:battery" in report.warnings
    indicator = display.of_type(FillCircle)[0]
    assert indicator.cx == pytest.approx(comp.layout.battery_left)


def test_three_oclock_hour_hand_points_right() -> None:
    comp, display, _, clock = make(buffered=False)
    clock.now = datetime(2024, 3, 5, 3, 0)
    comp.on_update()
    hour = [c for c in display.of_type(FillPolygon) if len(c.points) == 3][0]
    xs = [p.x for p in hour.points]
    assert max(xs) > comp.layout.center_x + 50
    assert min(xs) < comp.layout.center_x


def test_settings_change_validates_and_forces_full() -> None:
    comp, _, _, _ = make()
    comp.on_update()
    warnings = comp.on_settings_changed({"gauge_mode": 9, "calorie_goal_overall": 10})
    assert sorted(warnings) == ["setting_reset:calorie_goal_overall", "setting_reset:gauge_mode"]
    assert comp.settings.calorie_goal_overall == 1000
    comp.on_enter_sleep()
    assert comp.on_partial_update().kind == "full"


def test_layout_change_reallocates_layers() -> None:
    comp, _, factory, _ = make()
    assert len(factory.layers) == 3
    comp.on_layout(260, 260)
    assert len(factory.layers) == 3
    layout = comp.on_layout(416, 416)
    assert len(factory.layers) == 6
    assert layout.width == 416
    assert factory.layers[3].width == 416


def test_update_before_layout_uses_display_size() -> None:
    display = RecordingCanvas(218, 218)
    comp = FrameCompositor(display, clock=lambda: START, sensors=lambda: SENSORS)
    assert comp.layout is None
    comp.on_update()
    assert comp.layout.width == 218
