# tests/test_batch.py
"""
Batch mode: a few screen sizes (one invalid) into a temp directory; index.csv has one row per size.
"""

from __future__ import annotations

import csv
import tempfile
from datetime import datetime
from pathlib import Path

from watchface.core.batch import run_batch


def test_batch_produces_index_csv() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        report_dir = run_batch(
            run_name="test_batch",
            when=datetime(2024, 3, 5, 10, 10),
            sizes=[(218, 218), (260, 260), (0, 10)],
            repo_root=root,
        )
        index_csv = report_dir / "index.csv"
        assert index_csv.exists()
        with open(index_csv, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 3
        assert [r["status"] for r in rows] == ["ok", "ok", "error"]
        assert rows[0]["case_id"] == "case_0000_218x218"
        assert rows[1]["hour_hand_width"] == "160"
        assert int(rows[0]["hour_hand_width"]) < 160
        assert rows[1]["partial_commands"] != "0"

        case_dir = report_dir / "cases" / "case_0001_260x260"
        for name in ("frame.png", "partial.png", "debug.png", "layout.json", "run_metadata.json"):
            assert (case_dir / name).exists(), name
        assert not (report_dir / "cases" / "case_0002_0x10").exists()


def test_batch_direct_mode_has_no_partial_frames() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        report_dir = run_batch(
            run_name="direct",
            when=datetime(2024, 3, 5, 10, 10),
            sizes=[(240, 240)],
            repo_root=Path(tmp),
            buffered=False,
        )
        with open(report_dir / "index.csv", newline="", encoding="utf-8") as f:
            row = next(csv.DictReader(f))
        assert row["status"] == "ok"
        assert int(row["partial_commands"]) == int(row["full_commands"])
