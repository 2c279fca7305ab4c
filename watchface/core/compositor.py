# watchface/core/compositor.py
"""
Frame compositor: host callbacks (layout, update, partial update, sleep/wake,
settings change, power budget) and the per-frame draw order.

Full redraw order: background, tick marks, gauge, hour hand, minute hand + arbor,
top field, bottom field. With offscreen layers the background layer holds
everything below the minute hand; each field has a thin strip layer made from a
copy of the background strip plus its text. A partial update blits the background
layer inside the minute hand's dirty region and redraws only the minute hand and
arbor. Without layers every tick is a full direct redraw.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Literal, Mapping

from watchface.core.config import (
    HOUR_HASH_MAJOR_COUNT,
    HOUR_HASH_MINOR_DIVISIONS,
    HOUR_HASH_STROKE_PX,
    MINUTE_HASH_MAJOR_COUNT,
    MINUTE_HASH_MINOR_DIVISIONS,
    MINUTE_HASH_STROKE_PX,
    MOVE_BAR_ALERT_LEVEL,
)
from watchface.core.draw import (
    Blit,
    Canvas,
    ClearClip,
    DrawCommand,
    DrawLine,
    DrawText,
    FillCircle,
    FillPolygon,
    FillRect,
    SetClip,
    blit_region,
    draw_all,
)
from watchface.core.error_codes import (
    LAYERS_UNAVAILABLE,
    PARTIAL_UPDATES_DISABLED,
    SENSOR_UNAVAILABLE,
    with_detail,
)
from watchface.core.fields import FieldPosition, field_command, field_font_size, field_strip, field_text
from watchface.core.gauge import render_gauge
from watchface.core.geometry import (
    dirty_region,
    generate_hash_mark_segments,
    get_bounding_box,
    hand_angles,
    hour_hand_polygon,
    minute_hand_polygon,
)
from watchface.core.layout import LayoutCache
from watchface.core.progress import ProgressSource, source_for_mode
from watchface.core.settings import Settings, load_settings
from watchface.core.text_metrics import measure_text_px
from watchface.core.theme import ThemeResolver
from watchface.core.types import (
    BoundingBox,
    ClockTime,
    ColorRole,
    LayoutConfig,
    Point2D,
    SensorSnapshot,
)

logger = logging.getLogger(__name__)

LayerFactory = Callable[[int, int, str], Canvas]
FIELD_POSITIONS: tuple[FieldPosition, ...] = ("top", "bottom")
FIELD_TEXT_PAD_PX = 2


class CompositorState(str, Enum):
    AWAKE_FULL = "awake_full"
    AWAKE_SLEEPING = "awake_sleeping"


@dataclass
class FrameReport:
    """What one callback drew."""
    kind: Literal["full", "partial"]
    commands_drawn: int
    dirty: tuple[int, int, int, int] | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class FramePlan:
    """Draw commands for one frame, grouped by layer."""
    layout: LayoutConfig
    background: list[DrawCommand]
    gauge: list[DrawCommand]
    hour_hand: list[DrawCommand]
    minute_hand: list[DrawCommand]
    fields: dict[str, str]
    minute_box: BoundingBox | None
    text_color: str
    warnings: list[str] = field(default_factory=list)


def clock_time_from_datetime(now: datetime) -> ClockTime:
    return ClockTime(hour=now.hour, minute=now.minute, second=now.second)


def _text_region(plan: FramePlan, position: FieldPosition) -> tuple[int, int, int, int] | None:
    """(x, y, w, h) on screen actually covered by a field's text."""
    text = plan.fields.get(position, "")
    if not text:
        return None
    layout = plan.layout
    _, y, _, h = field_strip(layout, position)
    text_w, _ = measure_text_px(text, field_font_size(layout))
    w = min(layout.width, text_w + 2 * FIELD_TEXT_PAD_PX)
    x = max(0, layout.center_x - w // 2)
    return (x, y, min(w, layout.width - x), h)


class DirectStrategy:
    """Every element drawn straight onto the display; no partial updates."""

    supports_partial = False

    def allocate(self, layout: LayoutConfig) -> None:
        return None

    def full(self, display: Canvas, plan: FramePlan) -> int:
        commands = plan.background + plan.gauge + plan.hour_hand + plan.minute_hand
        for position in FIELD_POSITIONS:
            text = plan.fields.get(position, "")
            if text:
                commands.append(field_command(plan.layout, position, text, plan.text_color))
        return draw_all(display, commands)

    def partial(self, display: Canvas, plan: FramePlan, dirty: tuple[int, int, int, int]) -> int:
        raise RuntimeError("DirectStrategy has no partial update path")


class BufferedStrategy:
    """Background and field strips cached in offscreen layers."""

    supports_partial = True

    def __init__(self, layer_factory: LayerFactory) -> None:
        self._factory = layer_factory
        self.layers: dict[str, Canvas] = {}
        self._field_regions: dict[str, tuple[int, int, int, int]] = {}

    def allocate(self, layout: LayoutConfig) -> None:
        self.layers = {
            "background": self._factory(layout.width, layout.height, "background"),
            "top": self._factory(layout.width, layout.field_strip_height, "top"),
            "bottom": self._factory(layout.width, layout.field_strip_height, "bottom"),
        }
        self._field_regions = {}
        logger.debug("Allocated offscreen layers for %dx%d", layout.width, layout.height)

    def full(self, display: Canvas, plan: FramePlan) -> int:
        layout = plan.layout
        background = self.layers["background"]
        drawn = draw_all(background, plan.background + plan.gauge + plan.hour_hand)

        display.execute(Blit(background, 0, 0, 0, 0, layout.width, layout.height))
        drawn += 1
        drawn += draw_all(display, plan.minute_hand)

        self._field_regions = {}
        for position in FIELD_POSITIONS:
            region = _text_region(plan, position)
            if region is None:
                continue
            layer = self.layers[position]
            _, strip_y, strip_w, strip_h = field_strip(layout, position)
            # Strip copy of the composited background, then text in layer coordinates.
            layer.execute(Blit(background, 0, 0, 0, strip_y, strip_w, strip_h))
            cmd = field_command(layout, position, plan.fields[position], plan.text_color)
            layer.execute(DrawText(cmd.x, strip_h / 2.0, cmd.text, cmd.color, cmd.font_size, cmd.justify))
            x, y, w, h = region
            display.execute(Blit(layer, x, y, x, 0, w, h))
            self._field_regions[position] = region
            drawn += 3
        return drawn

    def partial(self, display: Canvas, plan: FramePlan, dirty: tuple[int, int, int, int]) -> int:
        x, y, w, h = dirty
        background = self.layers["background"]
        commands: list[DrawCommand] = [SetClip(x, y, w, h), blit_region(background, x, y, w, h)]
        commands.extend(plan.minute_hand)
        for position, (fx, fy, fw, fh) in self._field_regions.items():
            commands.append(Blit(self.layers[position], fx, fy, fx, 0, fw, fh))
        commands.append(ClearClip())
        return draw_all(display, commands)


class FrameCompositor:
    """
    Owns the rendering session: cached layout, validated settings, theme,
    progress source, sleep state and the partial-update latch.
    Settings and layout are replaced wholesale, only inside their callbacks.
    """

    def __init__(
        self,
        display: Canvas,
        layer_factory: LayerFactory | None = None,
        clock: Callable[[], datetime] | None = None,
        sensors: Callable[[], SensorSnapshot] | None = None,
        raw_settings: Mapping[str, Any] | None = None,
    ) -> None:
        self.display = display
        self._clock = clock or datetime.now
        self._sensors = sensors or SensorSnapshot
        if layer_factory is not None:
            self._strategy: DirectStrategy | BufferedStrategy = BufferedStrategy(layer_factory)
        else:
            self._strategy = DirectStrategy()
            logger.debug("No layer factory; using direct drawing")
        self._layout_cache = LayoutCache()
        self._state = CompositorState.AWAKE_FULL
        self._partial_enabled = True
        self._frame_ready = False
        self._last_minute_box: BoundingBox | None = None
        self._dial: list[DrawCommand] = []
        self.settings_warnings: list[str] = []
        self._apply_settings(raw_settings)

    # ----- session state -----

    @property
    def state(self) -> CompositorState:
        return self._state

    @property
    def layout(self) -> LayoutConfig | None:
        return self._layout_cache.current

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def buffered(self) -> bool:
        return self._strategy.supports_partial

    @property
    def partial_updates_enabled(self) -> bool:
        return self._partial_enabled

    def disable_partial_updates(self) -> None:
        """One-way latch for the rest of the session."""
        if self._partial_enabled:
            logger.info("Partial updates disabled for this session")
        self._partial_enabled = False

    # ----- host callbacks -----

    def on_layout(self, width: int, height: int) -> LayoutConfig:
        previous = self._layout_cache.current
        layout = self._layout_cache.get(width, height)
        if layout is not previous:
            self._strategy.allocate(layout)
            self._dial = self._dial_commands(layout)
            self._frame_ready = False
            self._last_minute_box = None
        return layout

    def on_settings_changed(self, raw_settings: Mapping[str, Any] | None) -> list[str]:
        self._apply_settings(raw_settings)
        return list(self.settings_warnings)

    def on_enter_sleep(self) -> None:
        self._state = CompositorState.AWAKE_SLEEPING

    def on_exit_sleep(self) -> None:
        self._state = CompositorState.AWAKE_FULL

    def on_power_budget_exceeded(self) -> None:
        self.disable_partial_updates()

    def on_update(self) -> FrameReport:
        """Full redraw."""
        plan = self._plan()
        drawn = self._strategy.full(self.display, plan)
        self._frame_ready = True
        self._last_minute_box = plan.minute_box
        warnings = list(plan.warnings)
        if not self.buffered:
            warnings.append(LAYERS_UNAVAILABLE)
        return FrameReport(kind="full", commands_drawn=drawn, warnings=warnings)

    def on_partial_update(self) -> FrameReport:
        """
        Minute hand + arbor only, while sleeping with layers available and the latch open.
        Any other situation falls back to a full redraw.
        """
        if not self._can_partial():
            report = self.on_update()
            if not self._partial_enabled:
                report.warnings.append(PARTIAL_UPDATES_DISABLED)
            return report

        plan = self._plan(minute_only=True)
        layout = plan.layout
        boxes = [b for b in (self._last_minute_box, plan.minute_box) if b is not None]
        dirty = dirty_region(boxes, layout.width, layout.height)
        drawn = 0
        if dirty is not None:
            drawn = self._strategy.partial(self.display, plan, dirty)
        self._last_minute_box = plan.minute_box
        return FrameReport(kind="partial", commands_drawn=drawn, dirty=dirty, warnings=plan.warnings)

    # ----- internals -----

    def _can_partial(self) -> bool:
        return (
            self._state == CompositorState.AWAKE_SLEEPING
            and self._partial_enabled
            and self._strategy.supports_partial
            and self._frame_ready
        )

    def _apply_settings(self, raw_settings: Mapping[str, Any] | None) -> None:
        settings, warnings = load_settings(raw_settings)
        self._settings = settings
        self.settings_warnings = warnings
        self._theme = ThemeResolver(settings.color_scheme)
        self._source: ProgressSource = source_for_mode(settings.gauge_mode, settings)
        layout = self._layout_cache.current
        self._dial = self._dial_commands(layout) if layout is not None else []
        self._frame_ready = False

    def _ensure_layout(self) -> LayoutConfig:
        layout = self._layout_cache.current
        if layout is None:
            logger.debug("Update before layout; laying out for %dx%d", self.display.width, self.display.height)
            layout = self.on_layout(self.display.width, self.display.height)
        return layout

    def _dial_commands(self, layout: LayoutConfig) -> list[DrawCommand]:
        """Background fill and tick marks; depends only on layout and theme."""
        theme = self._theme
        commands: list[DrawCommand] = [
            FillRect(0, 0, layout.width, layout.height, theme(ColorRole.BACKGROUND)),
        ]
        marks = (
            (MINUTE_HASH_MAJOR_COUNT, MINUTE_HASH_MINOR_DIVISIONS, layout.minute_hash_length,
             ColorRole.MINUTE_HASH, MINUTE_HASH_STROKE_PX),
            (HOUR_HASH_MAJOR_COUNT, HOUR_HASH_MINOR_DIVISIONS, layout.hour_hash_length,
             ColorRole.HOUR_HASH, HOUR_HASH_STROKE_PX),
        )
        for major, minor, length, role, stroke in marks:
            color = theme(role)
            for seg in generate_hash_mark_segments(layout.center, layout.outer_radius, major, minor, length):
                commands.append(DrawLine(seg.start.x, seg.start.y, seg.end.x, seg.end.y, color, stroke))
        return commands

    def _minute_commands(self, layout: LayoutConfig, angle: float, snapshot: SensorSnapshot) -> tuple[list[DrawCommand], BoundingBox | None]:
        if not self._settings.visibility.minute_hand:
            return [], None
        theme = self._theme
        polygon = minute_hand_polygon(layout, angle)
        alert = (snapshot.move_bar_level or 0) >= MOVE_BAR_ALERT_LEVEL
        arbor_role = ColorRole.ARBOR_ALERT if alert else ColorRole.ARBOR_NORMAL
        commands: list[DrawCommand] = [
            FillPolygon(polygon, theme(ColorRole.MINUTE_HAND)),
            FillCircle(layout.center_x, layout.center_y, layout.arbor_radius, theme(arbor_role)),
        ]
        r = layout.arbor_radius
        arbor_box = (
            Point2D(layout.center_x - r, layout.center_y - r),
            Point2D(layout.center_x + r, layout.center_y + r),
        )
        minute_box = get_bounding_box(list(polygon) + list(arbor_box))
        return commands, minute_box

    def _plan(self, minute_only: bool = False) -> FramePlan:
        layout = self._ensure_layout()
        settings = self._settings
        theme = self._theme
        now = self._clock()
        snapshot = self._sensors()
        angles = hand_angles(clock_time_from_datetime(now), settings.hand_behavior)
        warnings: list[str] = []

        minute, minute_box = self._minute_commands(layout, angles.minute, snapshot)
        plan = FramePlan(
            layout=layout,
            background=[],
            gauge=[],
            hour_hand=[],
            minute_hand=minute,
            fields={},
            minute_box=minute_box,
            text_color=theme(ColorRole.TEXT),
            warnings=warnings,
        )
        if minute_only:
            return plan

        plan.background = list(self._dial)
        visibility = settings.visibility
        if visibility.middle_gauge:
            reading = self._source.read(snapshot)
            if self._source.current_and_goal(snapshot) is None:
                warnings.append(with_detail(SENSOR_UNAVAILABLE, self._source.mode.name.lower()))
            plan.gauge = render_gauge(
                reading.percent, reading.multi_color, layout, theme.scheme, charging=reading.charging
            )

        hour_role = ColorRole.HOUR_HAND_CONNECTED if snapshot.phone_connected else ColorRole.HOUR_HAND_DISCONNECTED
        plan.hour_hand = [FillPolygon(hour_hand_polygon(layout, angles.hour), theme(hour_role))]

        if visibility.top_field:
            plan.fields["top"] = field_text(settings.top_field, "top", snapshot, now)
        if visibility.bottom_field:
            plan.fields["bottom"] = field_text(settings.bottom_field, "bottom", snapshot, now)
        return plan
