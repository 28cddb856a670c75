from __future__ import annotations

import os
import time

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from sort_viz.core import virtual_environment
from sort_viz.ui.worker import SortWorker


APP = QApplication.instance() or QApplication([])

VALUES = [42, 7, 93, 15, 64, 28, 81, 5, 50, 36]


def _wait_until(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        APP.processEvents()
        if predicate():
            return True
        time.sleep(0.01)
    return False


def test_worker_streams_batches_and_emits_finished_report() -> None:
    worker = SortWorker(VALUES, "quick_sort", speed=200)
    batches: list[list[dict]] = []
    finished: list[tuple[dict, list]] = []
    failed: list[str] = []
    worker.steps_batch.connect(lambda rows: batches.append(rows))
    worker.finished_report.connect(lambda metrics, events: finished.append((metrics, events)))
    worker.failed.connect(lambda message: failed.append(message))

    worker.start()
    assert _wait_until(lambda: bool(finished) or bool(failed), timeout=10.0)
    worker.wait(2000)

    assert failed == []
    metrics, tail = finished[0]
    assert metrics["state"] == "finished"
    streamed = [row for batch in batches for row in batch] + tail
    assert streamed[-1]["operation"] == "Array is fully sorted"
    assert streamed[-1]["sequence"] == sorted(VALUES)
    assert len(streamed) == metrics["event_count"]


def test_worker_execute_direct_mode_resumes_paused_run() -> None:
    worker = SortWorker(VALUES, "bubble_sort", start_paused=True, env_factory=virtual_environment)
    states: list[str] = []
    finished: list[tuple[dict, list]] = []
    worker.state_changed.connect(states.append)
    worker.finished_report.connect(lambda metrics, events: finished.append((metrics, events)))

    worker.set_speed(10)
    worker.toggle_pause()
    worker._execute()

    assert states[0] == "paused"
    assert "running" in states
    assert states[-1] == "finished"
    metrics, _ = finished[0]
    assert metrics["comparisons"] == len(VALUES) * (len(VALUES) - 1) // 2
    # Every step waited the slowest delay on the virtual clock.
    assert metrics["animated_ms"] >= 200 * metrics["comparisons"]


def test_worker_execute_stopped_before_loop_returns_partial_report() -> None:
    worker = SortWorker(VALUES, "merge_sort", env_factory=virtual_environment)
    finished: list[tuple[dict, list]] = []
    failed: list[str] = []
    worker.finished_report.connect(lambda metrics, events: finished.append((metrics, events)))
    worker.failed.connect(lambda message: failed.append(message))

    worker.stop()
    worker._execute()

    assert failed == []
    metrics, _ = finished[0]
    assert metrics["state"] == "cancelled"
    assert metrics["comparisons"] == 0
    assert metrics["complexity"] is None


def test_worker_unknown_algorithm_emits_failed() -> None:
    worker = SortWorker(VALUES, "bogo_sort", env_factory=virtual_environment)
    failed: list[str] = []
    worker.failed.connect(lambda message: failed.append(message))
    worker.run()
    assert failed
    assert "bogo_sort" in failed[0]


def test_worker_toggle_enqueues_command() -> None:
    worker = SortWorker(VALUES, "bubble_sort")
    worker.toggle_pause()
    command, value = worker._commands.get_nowait()
    assert command == "toggle"
    assert value is None
