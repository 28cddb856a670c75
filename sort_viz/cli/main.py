"""CLI entrypoint for headless runs, validation and benchmarks."""

from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Any

from sort_viz.algorithms import ALGORITHM_IDS, load_catalog
from sort_viz.core import RunController
from sort_viz.errors import SortVizError
from sort_viz.events import StepEvent
from sort_viz.io import BenchmarkRunner, ConfigError, ConfigLoader, resolve_sequence
from sort_viz.model import DEFAULT_SIZE, DEFAULT_SPEED, RunState


def _write_jsonl(path: str, rows: list[dict[str, Any]]) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row, ensure_ascii=False) + "\n")


def _write_json(path: str, payload: dict[str, Any]) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _write_events_csv(path: str, rows: list[dict[str, Any]]) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    fieldnames = [
        "seq",
        "run_id",
        "algorithm",
        "kind",
        "indices",
        "pivot_index",
        "comparisons",
        "swaps",
        "operation",
        "sequence",
    ]
    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(
                {
                    "seq": row.get("seq"),
                    "run_id": row.get("run_id"),
                    "algorithm": row.get("algorithm"),
                    "kind": row.get("kind"),
                    "indices": " ".join(str(i) for i in row.get("indices", [])),
                    "pivot_index": row.get("pivot_index"),
                    "comparisons": row.get("comparisons"),
                    "swaps": row.get("swaps"),
                    "operation": row.get("operation"),
                    "sequence": json.dumps(row.get("sequence", [])),
                }
            )


def _parse_values(raw: str) -> list[int]:
    try:
        return [int(item.strip()) for item in raw.split(",") if item.strip()]
    except ValueError as exc:
        raise ConfigError(f"--values must be comma separated integers: {exc}") from exc


def _payload_from_args(args: argparse.Namespace) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "version": ConfigLoader.SUPPORTED_VERSION,
        "algorithm": args.algorithm,
        "sequence": {"size": args.size, "seed": args.seed},
        "animation": {"speed": args.speed, "realtime": args.realtime},
    }
    if args.values:
        payload["sequence"] = {"values": _parse_values(args.values)}
    return payload


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def cmd_list(args: argparse.Namespace) -> int:  # noqa: ARG001
    for descriptor in load_catalog().values():
        table = descriptor.complexities
        print(
            f"{descriptor.id:<15} {descriptor.name:<15} "
            f"best={table.best.time:<11} avg={table.average.time:<11} "
            f"worst={table.worst.time:<11} space={table.worst.space}"
        )
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    issues = ConfigLoader().validate(args.config)
    for issue in issues:
        print(f"[ERROR] {args.config} {issue.path}: {issue.message}")
    if issues:
        return 1
    print("[OK] config validation passed")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    _configure_logging(args.verbose)
    loader = ConfigLoader()
    try:
        spec = loader.load(args.config) if args.config else loader.load_data(_payload_from_args(args))
    except ConfigError as exc:
        print(f"[ERROR] {exc}")
        return 1

    if args.pause_at is not None and args.pause_at < 0:
        print("[ERROR] --pause-at must be >= 0")
        return 1

    values = resolve_sequence(spec)
    controller = RunController(
        values,
        realtime=spec.animation.realtime,
        speed=spec.animation.speed,
        record_events=True,
    )
    if args.trace:

        def _trace(event: StepEvent) -> None:
            print(f"[{event.seq:05d}] {event.kind.value:<10} {event.operation}")

        controller.subscribe(_trace)

    try:
        controller.start(spec.algorithm)
    except SortVizError as exc:
        print(f"[ERROR] {exc}")
        return 1

    if args.pause_at is not None:
        controller.advance(args.pause_at)
        if controller.state == RunState.RUNNING:
            controller.toggle_pause()
    else:
        controller.run()

    events = [event.model_dump(mode="json") for event in controller.events]
    metrics = controller.metric_report()
    metrics["input"] = values
    metrics["output"] = list(controller.sequence)

    events_out = args.events_out or "artifacts/events.jsonl"
    metrics_out = args.metrics_out or "artifacts/metrics.json"
    _write_jsonl(events_out, events)
    _write_json(metrics_out, metrics)
    if args.events_csv_out:
        _write_events_csv(args.events_csv_out, events)

    if args.check and controller.state == RunState.FINISHED and list(controller.sequence) != sorted(values):
        print(f"[ERROR] output is not sorted, metrics={metrics_out}")
        return 2

    complexity = metrics.get("complexity") or {}
    print(
        f"[OK] {spec.algorithm} {controller.state.value}, n={len(values)}, "
        f"comparisons={controller.counters.comparisons}, swaps={controller.counters.swaps}, "
        f"complexity={complexity.get('label', '-')}, metrics={metrics_out}"
    )
    return 0


def cmd_bench(args: argparse.Namespace) -> int:
    _configure_logging(args.verbose)
    loader = ConfigLoader()
    try:
        payload: dict[str, Any] = {
            "version": ConfigLoader.SUPPORTED_VERSION,
            "algorithm": ALGORITHM_IDS[0],
            "sequence": {"values": _parse_values(args.values)} if args.values else {"size": args.size, "seed": args.seed},
        }
        values = resolve_sequence(loader.load_data(payload))
    except ConfigError as exc:
        print(f"[ERROR] {exc}")
        return 1

    algorithms = [name for name in (args.algorithms or "").split(",") if name.strip()] or None
    summary = BenchmarkRunner().run(
        values,
        algorithms,
        summary_csv=args.summary_csv,
        summary_json=args.summary_json,
    )
    for row in summary.rows:
        if row.get("status") != "ok":
            print(f"  {row['algorithm']:<15} error: {row.get('error')}")
            continue
        print(
            f"  {row['algorithm']:<15} comparisons={row['comparisons']:<6} swaps={row['swaps']:<6} "
            f"{row['actual_complexity']} [{row['efficiency']}]"
        )
    print(
        "[OK] benchmark completed, "
        f"runs={summary.total_runs}, success={summary.succeeded_runs}, failed={summary.failed_runs}, "
        f"csv={summary.summary_csv or '-'}, json={summary.summary_json or '-'}"
    )
    if summary.failed_runs > 0:
        return 1
    return 0


def cmd_ui(args: argparse.Namespace) -> int:
    try:
        from sort_viz.ui.app import run_ui
    except ImportError as exc:  # pragma: no cover - environment dependent
        print(f"[ERROR] UI dependencies missing: {exc}")
        return 1
    run_ui(config_path=args.config)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sort-viz", description="Sorting algorithm visualizer CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="list available algorithms")
    list_parser.set_defaults(func=cmd_list)

    validate_parser = subparsers.add_parser("validate", help="validate run config file")
    validate_parser.add_argument("-c", "--config", required=True, help="path to config YAML/JSON")
    validate_parser.set_defaults(func=cmd_validate)

    run_parser = subparsers.add_parser("run", help="run one algorithm headless")
    run_parser.add_argument("-c", "--config", default=None, help="path to config YAML/JSON")
    run_parser.add_argument("-a", "--algorithm", default=ALGORITHM_IDS[0], help="algorithm id")
    run_parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="generated sequence size")
    run_parser.add_argument("--seed", type=int, default=None, help="seed for the generated sequence")
    run_parser.add_argument("--values", default=None, help="explicit comma separated input values")
    run_parser.add_argument("--speed", type=int, default=DEFAULT_SPEED, help="animation speed (10-200)")
    run_parser.add_argument("--realtime", action="store_true", help="sleep the per-step delay for real")
    run_parser.add_argument("--trace", action="store_true", help="print every step")
    run_parser.add_argument("--events-out", default=None, help="path to write JSONL step events")
    run_parser.add_argument("--events-csv-out", default=None, help="path to write CSV step events")
    run_parser.add_argument("--metrics-out", default=None, help="path to write metric JSON")
    run_parser.add_argument(
        "--pause-at",
        type=int,
        default=None,
        help="pause after this many steps and keep partial results",
    )
    run_parser.add_argument("--check", action="store_true", help="return 2 when the output is not sorted")
    run_parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    run_parser.set_defaults(func=cmd_run)

    bench_parser = subparsers.add_parser("bench", help="compare algorithms on one sequence")
    bench_parser.add_argument("--algorithms", default=None, help="comma separated ids (default: all)")
    bench_parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="generated sequence size")
    bench_parser.add_argument("--seed", type=int, default=None, help="seed for the generated sequence")
    bench_parser.add_argument("--values", default=None, help="explicit comma separated input values")
    bench_parser.add_argument("--summary-csv", default=None, help="summary CSV output path")
    bench_parser.add_argument("--summary-json", default=None, help="summary JSON output path")
    bench_parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    bench_parser.set_defaults(func=cmd_bench)

    ui_parser = subparsers.add_parser("ui", help="launch PyQt UI")
    ui_parser.add_argument("-c", "--config", default=None, help="path to initial config")
    ui_parser.set_defaults(func=cmd_ui)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
