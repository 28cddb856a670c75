"""Run several algorithms headless on one sequence and persist a summary."""

from __future__ import annotations

import csv
from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any, Iterable

from sort_viz.algorithms import ALGORITHM_IDS, get_descriptor, resolve_algorithm_id
from sort_viz.core import sort_headless
from sort_viz.errors import SortVizError


@dataclass(slots=True)
class BenchmarkSummary:
    summary_csv: Path | None
    summary_json: Path | None
    total_runs: int
    succeeded_runs: int
    failed_runs: int
    rows: list[dict[str, Any]]


class BenchmarkRunner:
    """Sort the same input with every requested algorithm and tabulate the counts."""

    def run(
        self,
        values: Iterable[int],
        algorithms: Iterable[str] | None = None,
        *,
        summary_csv: str | None = None,
        summary_json: str | None = None,
    ) -> BenchmarkSummary:
        sequence = list(values)
        rows: list[dict[str, Any]] = []
        for name in algorithms or ALGORITHM_IDS:
            row: dict[str, Any] = {"algorithm": name, "n": len(sequence)}
            try:
                algorithm_id = resolve_algorithm_id(name)
                controller = sort_headless(algorithm_id, sequence)
                report = controller.report
                descriptor = get_descriptor(algorithm_id)
                row.update(
                    {
                        "algorithm": algorithm_id,
                        "name": descriptor.name if descriptor else algorithm_id,
                        "status": "ok",
                        "sorted": list(controller.sequence) == sorted(sequence),
                        "comparisons": controller.counters.comparisons,
                        "swaps": controller.counters.swaps,
                        "total_operations": controller.counters.total,
                        "steps": controller.steps_emitted,
                        "actual_complexity": report.label if report else "",
                        "efficiency": report.efficiency if report else "",
                    }
                )
            except SortVizError as exc:
                row["status"] = "error"
                row["error"] = str(exc)
            rows.append(row)

        csv_path = Path(summary_csv) if summary_csv else None
        json_path = Path(summary_json) if summary_json else None
        if csv_path is not None:
            self._write_summary_csv(csv_path, rows)
        if json_path is not None:
            self._write_json(
                json_path,
                {
                    "input": sequence,
                    "total_runs": len(rows),
                    "succeeded_runs": sum(1 for row in rows if row.get("status") == "ok"),
                    "failed_runs": sum(1 for row in rows if row.get("status") != "ok"),
                    "runs": rows,
                },
            )

        return BenchmarkSummary(
            summary_csv=csv_path,
            summary_json=json_path,
            total_runs=len(rows),
            succeeded_runs=sum(1 for row in rows if row.get("status") == "ok"),
            failed_runs=sum(1 for row in rows if row.get("status") != "ok"),
            rows=rows,
        )

    def _write_summary_csv(self, path: Path, rows: list[dict[str, Any]]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fieldnames: list[str] = []
        for row in rows:
            for key in row:
                if key not in fieldnames:
                    fieldnames.append(key)
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)

    def _write_json(self, path: Path, payload: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
