# watchface/core/batch.py
"""
Multi-size batch mode: render previews for a catalogue of screen sizes.
Output: reports/batch_<run_name>/index.csv and cases/<case_id>/ with frames and reports.
"""

from __future__ import annotations

import csv
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Mapping

from watchface.core.config import DEVICE_SCREEN_SIZES, REPORTS_DIR
from watchface.core.layout import create_layout_config
from watchface.core.reporting import ensure_report_dir
from watchface.core.runner import DEMO_SENSORS, render_preview
from watchface.core.types import SensorSnapshot

logger = logging.getLogger(__name__)


def run_batch(
    run_name: str,
    when: datetime,
    sizes: Iterable[tuple[int, int]] = DEVICE_SCREEN_SIZES,
    raw_settings: Mapping[str, Any] | None = None,
    sensors: SensorSnapshot = DEMO_SENSORS,
    repo_root: Path | None = None,
    output_dir: str = REPORTS_DIR,
    buffered: bool = True,
) -> Path:
    """
    Render every (width, height) in sizes. Returns the batch report dir containing index.csv.
    A size that fails validation is recorded as an error row; the batch continues.
    """
    root = repo_root or Path.cwd().resolve()
    batch_dir = ensure_report_dir(root, f"batch_{run_name}", output_dir=output_dir)
    cases_dir = batch_dir / "cases"
    cases_dir.mkdir(parents=True, exist_ok=True)

    rows: list[dict] = []
    for i, (width, height) in enumerate(sizes):
        case_id = f"case_{i:04d}_{width}x{height}"
        t0 = time.perf_counter()
        try:
            layout = create_layout_config(width, height)
        except ValueError as e:
            logger.warning("Skipping %s: %s", case_id, e)
            rows.append({
                "case_id": case_id, "width": width, "height": height, "status": "error",
                "scale_factor": "", "hour_hand_width": "", "minute_hash_length": "",
                "battery_left": "", "battery_right": "", "full_commands": 0,
                "partial_commands": 0, "duration_ms": int((time.perf_counter() - t0) * 1000),
                "warnings_count": 0,
            })
            continue
        case_dir = cases_dir / case_id
        case_dir.mkdir(parents=True, exist_ok=True)
        reports = render_preview(
            width, height, case_dir, when,
            raw_settings=raw_settings, sensors=sensors, run_name=run_name, buffered=buffered,
        )
        rows.append({
            "case_id": case_id, "width": width, "height": height, "status": "ok",
            "scale_factor": round(layout.scale_factor, 4),
            "hour_hand_width": layout.hour_hand_width,
            "minute_hash_length": layout.minute_hash_length,
            "battery_left": layout.battery_left,
            "battery_right": layout.battery_right,
            "full_commands": reports["full"].commands_drawn,
            "partial_commands": reports["partial"].commands_drawn,
            "duration_ms": int((time.perf_counter() - t0) * 1000),
            "warnings_count": sum(len(r.warnings) for r in reports.values()),
        })

    index_path = batch_dir / "index.csv"
    if rows:
        with open(index_path, "w", newline="", encoding="utf-8") as f:
            w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            w.writeheader()
            w.writerows(rows)
    return batch_dir
