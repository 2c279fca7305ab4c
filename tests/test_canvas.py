"""
Pillow canvas: clip and blit primitives, then pixel checks on real composited frames.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from watchface.core.canvas import PillowCanvas, pillow_layer_factory
from watchface.core.compositor import FrameCompositor
from watchface.core.draw import Blit, ClearClip, FillRect, RecordingCanvas, SetClip
from watchface.core.types import SensorSnapshot

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
RED = (255, 0, 0)
ORANGE = (255, 85, 0)


def test_fill_rect_and_pixel() -> None:
    canvas = PillowCanvas(20, 20)
    canvas.execute(FillRect(5, 5, 5, 5, "#FF0000"))
    assert canvas.pixel(5, 5) == RED
    assert canvas.pixel(9, 9) == RED
    assert canvas.pixel(10, 10) == BLACK
    assert canvas.executed == 1


def test_clip_limits_drawing() -> None:
    canvas = PillowCanvas(20, 20)
    canvas.execute(SetClip(0, 0, 10, 10))
    assert canvas.clip == (0, 0, 10, 10)
    canvas.execute(FillRect(0, 0, 20, 20, "#FF0000"))
    assert canvas.pixel(5, 5) == RED
    assert canvas.pixel(15, 15) == BLACK
    canvas.execute(ClearClip())
    assert canvas.clip is None
    canvas.execute(FillRect(0, 0, 20, 20, "#FFFFFF"))
    assert canvas.pixel(15, 15) == WHITE


def test_blit_copies_region() -> None:
    source = PillowCanvas(10, 10, name="layer")
    source.execute(FillRect(0, 0, 10, 10, "#FF0000"))
    target = PillowCanvas(20, 20)
    target.execute(Blit(source, 5, 5, 0, 0, 4, 4))
    assert target.pixel(5, 5) == RED
    assert target.pixel(8, 8) == RED
    assert target.pixel(9, 9) == BLACK
    assert target.pixel(4, 4) == BLACK


def test_blit_from_non_raster_source_fails() -> None:
    target = PillowCanvas(10, 10)
    with pytest.raises(TypeError):
        target.execute(Blit(RecordingCanvas(10, 10), 0, 0, 0, 0, 5, 5))


def test_layer_factory() -> None:
    layer = pillow_layer_factory(40, 12, "top")
    assert (layer.width, layer.height, layer.name) == (40, 12, "top")
    assert layer.image.size == (40, 12)


def _frame(start: datetime, sensors: SensorSnapshot, raw_settings: dict | None = None):
    clock = {"now": start}
    display = PillowCanvas(260, 260)
    comp = FrameCompositor(
        display,
        layer_factory=pillow_layer_factory,
        clock=lambda: clock["now"],
        sensors=lambda: sensors,
        raw_settings=raw_settings,
    )
    comp.on_layout(260, 260)
    return comp, display, clock


def test_full_frame_pixels_dark() -> None:
    comp, display, _ = _frame(datetime(2024, 3, 5, 0, 0), SensorSnapshot(battery=80, phone_connected=True))
    comp.on_update()
    assert display.pixel(0, 0) == BLACK
    # 12 o'clock hour mark, above the minute hand tip
    assert display.pixel(130, 2) == WHITE
    # minute hand covers the hour hand at midnight
    assert display.pixel(130, 100) == WHITE


def test_partial_update_restores_background_under_old_minute_hand() -> None:
    comp, display, clock = _frame(datetime(2024, 3, 5, 0, 0), SensorSnapshot(battery=80, phone_connected=True))
    comp.on_update()
    comp.on_enter_sleep()
    clock["now"] += timedelta(minutes=1)
    report = comp.on_partial_update()
    assert report.kind == "partial"
    # hour hand from the background layer shows where the minute hand was
    assert display.pixel(130, 100) == ORANGE
    assert display.pixel(0, 0) == BLACK


def test_light_scheme_background() -> None:
    comp, display, _ = _frame(datetime(2024, 3, 5, 0, 0), SensorSnapshot(battery=80), {"color_scheme": 1})
    comp.on_update()
    assert display.pixel(0, 0) == WHITE


def test_save_png(tmp_path) -> None:
    comp, display, _ = _frame(datetime(2024, 3, 5, 10, 10), SensorSnapshot(battery=80))
    comp.on_update()
    path = display.save(tmp_path / "out" / "frame.png")
    assert path.exists()
    assert path.stat().st_size > 0
