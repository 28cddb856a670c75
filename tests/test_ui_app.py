from __future__ import annotations

from collections import Counter
import os
from pathlib import Path
import time

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication
import pytest

from sort_viz.core import RunController, sort_headless
from sort_viz.ui.app import MainWindow


APP = QApplication.instance() or QApplication([])

BUBBLE_SMALL = str(Path(__file__).resolve().parents[1] / "examples" / "bubble_small.yaml")


def _wait_until(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        APP.processEvents()
        if predicate():
            return True
        time.sleep(0.01)
    return False


def test_window_loads_config_and_shows_descriptor() -> None:
    window = MainWindow(config_path=BUBBLE_SMALL)

    assert window._algorithm_id == "bubble_sort"
    assert window._values == [5, 3, 8, 1]
    assert window._current_size.text() == "4"
    assert window._speed_value.text() == "Fast"
    assert window._current_algo.text() == "Bubble Sort"
    row = window._complexity_table.item(0, 0)
    assert row is not None and row.text() == "Bubble Sort"
    window.close()


def test_window_renders_replayed_run() -> None:
    window = MainWindow(config_path=BUBBLE_SMALL)
    controller = sort_headless("bubble_sort", [5, 3, 8, 1], record_events=True)
    rows = [event.model_dump(mode="json") for event in controller.events]

    window._on_steps_batch(rows[:3])
    assert window._comparisons.text() == "2"
    assert window._current_operation.text() == rows[2]["operation"]

    window._on_finished(controller.metric_report(), rows[3:])
    assert window._status.text() == "Sorted"
    assert window._values == [1, 3, 5, 8]
    assert window._comparisons.text() == "6"
    assert window._swaps.text() == "4"
    assert window._actual_complexity.text() == controller.report.label
    window.close()


@pytest.mark.parametrize("algorithm_id", ["bubble_sort", "selection_sort", "insertion_sort", "merge_sort", "quick_sort"])
@pytest.mark.parametrize("k", [1, 2, 5, 8, 13])
def test_window_keeps_permutation_after_cancelled_run(algorithm_id: str, k: int) -> None:
    values = [8, 7, 6, 5, 4, 3, 2, 1]
    window = MainWindow(config_path=BUBBLE_SMALL)
    controller = RunController(values, record_events=True)
    controller.start(algorithm_id)
    controller.advance(k)
    controller.cancel()
    controller.run()
    rows = [event.model_dump(mode="json") for event in controller.events]

    window._on_steps_batch(rows)
    window._on_finished(controller.metric_report(), [])
    assert window._status.text() == "Stopped"
    assert window._actual_complexity.text() == "-"
    assert tuple(window._values) == controller.sequence
    assert Counter(window._values) == Counter(values)
    window.close()


def test_window_pause_state_updates_controls() -> None:
    window = MainWindow()
    window._set_controls_running(True)
    window._on_state_changed("paused")
    assert window._pause_button.text() == "Resume"
    assert window._status.text() == "Paused"
    window._on_state_changed("running")
    assert window._pause_button.text() == "Pause"
    window.close()


def test_window_sort_runs_worker_to_completion() -> None:
    window = MainWindow(config_path=BUBBLE_SMALL)
    window._on_sort()
    assert window._sorting
    assert not window._sort_button.isEnabled()

    assert _wait_until(lambda: not window._sorting, timeout=10.0)
    assert window._status.text() == "Sorted"
    assert window._values == [1, 3, 5, 8]
    window.close()


def test_window_generate_while_sorting_cancels_run() -> None:
    window = MainWindow()
    window._speed_slider.setValue(10)
    window._on_sort()
    assert window._sorting

    window._on_generate()
    assert not window._sorting
    assert window._sort_button.isEnabled()
    assert window._status.text() == "Ready"
    assert len(window._values) == window._size_slider.value()
    window.close()
