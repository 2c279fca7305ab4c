"""
CLI entrypoint: lay out a screen size, render a full frame and a follow-up partial
frame with the Pillow backend, plus a geometry debug plot and JSON reports.
Output: reports/<run_name>/frame.png, partial.png, debug.png, layout.json, run_metadata.json.
"""

from __future__ import annotations

import argparse
import logging
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Mapping

from watchface.core.canvas import PillowCanvas, pillow_layer_factory
from watchface.core.compositor import FrameCompositor, FrameReport, clock_time_from_datetime
from watchface.core.config import DEFAULT_PREVIEW_TIME, REPORTS_DIR
from watchface.core.render import render_debug
from watchface.core.reporting import ensure_report_dir, write_layout_json, write_run_metadata_json
from watchface.core.types import ColorScheme, GaugeMode, HandBehavior, SensorSnapshot

logger = logging.getLogger(__name__)

DEMO_SENSORS = SensorSnapshot(
    battery=64.0,
    charging=False,
    phone_connected=True,
    notification_count=3,
    steps=6400,
    step_goal=10000,
    active_minutes_week=95,
    active_minutes_week_goal=150,
    floors_climbed=7,
    floors_climbed_goal=10,
    calories=1450,
    active_calories=320,
    heart_rate=68,
    move_bar_level=0,
)


def parse_time(text: str, base: datetime | None = None) -> datetime:
    """'HH:MM' -> datetime on base's date. Raises ValueError on bad input."""
    hour_s, _, minute_s = (text or "").strip().partition(":")
    hour, minute = int(hour_s), int(minute_s or 0)
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Time out of range: {text!r}")
    base = base or datetime.now()
    return base.replace(hour=hour, minute=minute, second=0, microsecond=0)


def _report_dict(report: FrameReport) -> dict:
    return {
        "kind": report.kind,
        "commands_drawn": report.commands_drawn,
        "dirty": list(report.dirty) if report.dirty else None,
        "warnings": report.warnings,
    }


def render_preview(
    width: int,
    height: int,
    report_dir: Path,
    when: datetime,
    raw_settings: Mapping[str, Any] | None = None,
    sensors: SensorSnapshot = DEMO_SENSORS,
    run_name: str = "run",
    buffered: bool = True,
) -> dict[str, FrameReport]:
    """Render frame.png (full) and partial.png (one minute later, asleep) into report_dir."""
    clock = {"now": when}
    display = PillowCanvas(width, height)
    compositor = FrameCompositor(
        display,
        layer_factory=pillow_layer_factory if buffered else None,
        clock=lambda: clock["now"],
        sensors=lambda: sensors,
        raw_settings=raw_settings,
    )
    layout = compositor.on_layout(width, height)

    full = compositor.on_update()
    display.save(report_dir / "frame.png")

    compositor.on_enter_sleep()
    clock["now"] = when + timedelta(minutes=1)
    partial = compositor.on_partial_update()
    display.save(report_dir / "partial.png")

    render_debug(layout, clock_time_from_datetime(when), report_dir / "debug.png",
                 behavior=compositor.settings.hand_behavior)
    write_layout_json(report_dir, layout)
    frames = {"full": _report_dict(full), "partial": _report_dict(partial)}
    if compositor.settings_warnings:
        frames["full"]["warnings"] = list(compositor.settings_warnings) + frames["full"]["warnings"]
    write_run_metadata_json(report_dir, run_name, when.strftime("%H:%M"), compositor.settings, frames)
    return {"full": full, "partial": partial}


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render watchface preview frames.")
    p.add_argument("--width", type=int, default=260, help="Screen width (px)")
    p.add_argument("--height", type=int, default=260, help="Screen height (px)")
    p.add_argument("--time", type=str, default=DEFAULT_PREVIEW_TIME, help="Wall-clock time HH:MM")
    p.add_argument("--scheme", type=str, default="dark", choices=["dark", "light"], help="Colour scheme")
    p.add_argument("--gauge-mode", type=str, default="battery", dest="gauge_mode",
                   choices=[m.name.lower() for m in GaugeMode], help="Gauge data source")
    p.add_argument("--hand-behavior", type=str, default="smooth", dest="hand_behavior",
                   choices=[b.name.lower() for b in HandBehavior], help="Hour-hand motion")
    p.add_argument("--direct", action="store_true", help="Draw without offscreen layers")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--batch", action="store_true", help="Render every size in DEVICE_SCREEN_SIZES")
    return p.parse_args()


def main() -> None:
    logging.basicConfig(level=getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO))
    args = _parse_args()
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()
    raw_settings = {
        "color_scheme": ColorScheme[args.scheme.upper()].value,
        "gauge_mode": GaugeMode[args.gauge_mode.upper()].value,
        "hand_behavior": HandBehavior[args.hand_behavior.upper()].value,
    }
    when = parse_time(args.time)

    if args.batch:
        from watchface.core.batch import run_batch
        out = run_batch(
            run_name=args.run_name,
            when=when,
            raw_settings=raw_settings,
            repo_root=repo_root,
            output_dir=args.output_dir,
            buffered=not args.direct,
        )
        print(out / "index.csv")
        return

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    reports = render_preview(
        args.width,
        args.height,
        report_dir,
        when,
        raw_settings=raw_settings,
        run_name=args.run_name,
        buffered=not args.direct,
    )
    for name in ("frame.png", "partial.png", "debug.png", "layout.json", "run_metadata.json"):
        print(report_dir / name)
    print("Partial update:", reports["partial"].kind, reports["partial"].dirty)


if __name__ == "__main__":
    main()
