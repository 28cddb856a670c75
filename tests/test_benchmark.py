from __future__ import annotations

import csv
import json
from pathlib import Path

from sort_viz.io import BenchmarkRunner


def test_benchmark_runs_all_algorithms_on_same_input(tmp_path: Path) -> None:
    values = [30, 10, 20, 50, 40, 5, 25]
    summary = BenchmarkRunner().run(
        values,
        summary_csv=str(tmp_path / "summary.csv"),
        summary_json=str(tmp_path / "summary.json"),
    )

    assert summary.total_runs == 5
    assert summary.succeeded_runs == 5
    assert summary.failed_runs == 0
    assert all(row["sorted"] for row in summary.rows)
    assert all(row["total_operations"] == row["comparisons"] + row["swaps"] for row in summary.rows)
    by_id = {row["algorithm"]: row for row in summary.rows}
    assert by_id["selection_sort"]["comparisons"] == 21
    assert by_id["merge_sort"]["name"] == "Merge Sort"

    with summary.summary_csv.open(encoding="utf-8", newline="") as f:
        assert len(list(csv.DictReader(f))) == 5
    payload = json.loads(summary.summary_json.read_text(encoding="utf-8"))
    assert payload["input"] == values
    assert payload["succeeded_runs"] == 5


def test_benchmark_records_failures_per_row() -> None:
    summary = BenchmarkRunner().run([2, 1], ["quick", "nope"])

    assert summary.total_runs == 2
    assert summary.failed_runs == 1
    assert summary.rows[0]["algorithm"] == "quick_sort"
    assert summary.rows[1]["status"] == "error"
    assert "unknown algorithm nope" in summary.rows[1]["error"]
    assert summary.summary_csv is None
