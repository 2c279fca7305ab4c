# watchface/core/reporting.py
"""
Create reports/<run_name>/ and write layout.json and run_metadata.json for preview runs.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from watchface.core.config import (
    GAUGE_TICK_COUNT,
    REFERENCE_EDGE_PX,
    REPORTS_DIR,
    ROTATION_PIXEL_BIAS,
)
from watchface.core.settings import Settings
from watchface.core.types import LayoutConfig

SCHEMA_VERSION = "1.0"


def layout_to_dict(layout: LayoutConfig) -> dict:
    """Exact structure for layout.json."""
    values = asdict(layout)
    return {
        "schema_version": SCHEMA_VERSION,
        "screen": {"width": layout.width, "height": layout.height},
        "scale_factor": layout.scale_factor,
        "lengths_px": {k: v for k, v in values.items() if isinstance(v, int) and k not in ("width", "height")},
        "ratios": {k: v for k, v in values.items() if isinstance(v, float) and k != "scale_factor"},
    }


def settings_to_dict(settings: Settings) -> dict:
    out: dict = {}
    for key, value in asdict(settings).items():
        out[key] = value.name.lower() if hasattr(value, "name") else value
    return out


def run_metadata_dict(
    run_name: str,
    time_text: str,
    settings: Settings,
    frames: dict[str, dict],
) -> dict:
    """Timestamp, settings and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "time": time_text,
        "settings": settings_to_dict(settings),
        "frames": frames,
        "config": {
            "REFERENCE_EDGE_PX": REFERENCE_EDGE_PX,
            "ROTATION_PIXEL_BIAS": ROTATION_PIXEL_BIAS,
            "GAUGE_TICK_COUNT": GAUGE_TICK_COUNT,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_layout_json(report_dir: Path, layout: LayoutConfig) -> Path:
    """Write layout.json to report_dir. Returns path to file."""
    path = report_dir / "layout.json"
    path.write_text(json.dumps(layout_to_dict(layout), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    time_text: str,
    settings: Settings,
    frames: dict[str, dict],
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, time_text, settings, frames)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
