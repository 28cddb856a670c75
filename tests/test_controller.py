from __future__ import annotations

from collections import Counter
import logging

import pytest

from sort_viz.algorithms import ISortAlgorithm, register_algorithm
from sort_viz.core import PAUSE_POLL_MS, RunController, sort_headless
from sort_viz.errors import InvalidStateError, UnknownAlgorithmError
from sort_viz.events import StepEvent, StepKind, render_handler
from sort_viz.model import RunState
from sort_viz.runtime import RunContext, StepStream


VALUES = [42, 7, 93, 15, 64, 28, 81, 5, 50, 36, 77, 12]


class _FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_empty_input_finishes_immediately() -> None:
    controller = RunController([])
    controller.start("bubble_sort")

    assert controller.state == RunState.FINISHED
    assert controller.counters.comparisons == 0
    assert controller.counters.swaps == 0
    assert controller.report is not None
    assert controller.operation == "Array is fully sorted"


def test_finish_marks_every_index_sorted_in_last_event() -> None:
    controller = RunController(VALUES, record_events=True)
    controller.start("selection_sort")
    controller.run()

    last = controller.events[-1]
    assert last.kind == StepKind.MARK_SORTED
    assert last.sorted_indices == tuple(range(len(VALUES)))
    assert last.operation == "Array is fully sorted"
    assert [event.seq for event in controller.events] == list(range(len(controller.events)))


def test_start_while_active_raises_without_restart() -> None:
    controller = RunController(VALUES)
    controller.start("bubble_sort")
    controller.advance(3)

    with pytest.raises(InvalidStateError, match="cannot start while running"):
        controller.start("quick_sort")
    assert controller.algorithm_id == "bubble_sort"


def test_restart_cancels_active_run_and_resets_counters() -> None:
    controller = RunController(VALUES)
    controller.start("bubble_sort")
    controller.advance(5)
    assert controller.counters.comparisons > 0

    controller.start("merge_sort", restart=True)
    assert controller.state == RunState.RUNNING
    assert controller.algorithm_id == "merge_sort"
    assert controller.counters.total == 0

    controller.run()
    assert controller.state == RunState.FINISHED
    assert list(controller.sequence) == sorted(VALUES)


def test_unknown_algorithm_is_rejected() -> None:
    controller = RunController(VALUES)
    with pytest.raises(UnknownAlgorithmError):
        controller.start("bogo_sort")
    assert controller.state == RunState.IDLE


def test_toggle_pause_requires_active_run() -> None:
    controller = RunController(VALUES)
    with pytest.raises(InvalidStateError):
        controller.toggle_pause()


def test_pause_holds_counters_and_events_until_resumed() -> None:
    controller = RunController(VALUES, record_events=True)
    controller.start("insertion_sort")
    assert controller.advance(6) == 6

    assert controller.toggle_pause() == RunState.PAUSED
    assert controller.operation == "Paused"
    held_counters = (controller.counters.comparisons, controller.counters.swaps)
    held_events = len(controller.events)
    held_sequence = controller.sequence

    assert controller.run() == RunState.PAUSED
    # Stepping a paused run only consumes pause polls.
    before = controller.now
    for _ in range(5):
        assert controller.step()
    assert controller.now >= before + 4 * PAUSE_POLL_MS
    assert (controller.counters.comparisons, controller.counters.swaps) == held_counters
    assert len(controller.events) == held_events
    assert controller.sequence == held_sequence

    assert controller.toggle_pause() == RunState.RUNNING
    controller.run()
    assert controller.state == RunState.FINISHED
    assert list(controller.sequence) == sorted(VALUES)


def test_paused_run_matches_uninterrupted_run() -> None:
    reference = sort_headless("quick_sort", VALUES, record_events=True)

    controller = RunController(VALUES, record_events=True)
    controller.start("quick_sort")
    controller.advance(10)
    controller.toggle_pause()
    for _ in range(3):
        controller.step()
    controller.toggle_pause()
    controller.run()

    assert controller.counters == reference.counters
    assert [event.sequence for event in controller.events] == [event.sequence for event in reference.events]


@pytest.mark.parametrize("algorithm_id", ["bubble_sort", "selection_sort", "insertion_sort", "merge_sort", "quick_sort"])
@pytest.mark.parametrize("k", [1, 7, 20])
def test_cancel_after_k_steps_keeps_permutation(algorithm_id: str, k: int) -> None:
    controller = RunController(VALUES, record_events=True)
    controller.start(algorithm_id)
    controller.advance(k)

    assert controller.cancel() is True
    controller.run()

    assert controller.state == RunState.CANCELLED
    assert Counter(controller.sequence) == Counter(VALUES)
    assert controller.steps_emitted == k
    assert len(controller.events) == k
    assert controller.report is None
    assert controller.step() is False


def test_cancel_while_paused_stops_waiting() -> None:
    controller = RunController(VALUES)
    controller.start("merge_sort")
    controller.advance(9)
    controller.toggle_pause()

    controller.cancel()
    assert controller.run() == RunState.CANCELLED
    assert controller.steps_emitted == 9
    assert Counter(controller.sequence) == Counter(VALUES)


def test_cancel_without_active_run_is_ignored() -> None:
    controller = RunController(VALUES)
    assert controller.cancel() is False
    controller.start("bubble_sort")
    controller.run()
    assert controller.cancel() is False
    assert controller.state == RunState.FINISHED


def test_load_during_run_cancels_it() -> None:
    controller = RunController(VALUES)
    controller.start("bubble_sort")
    controller.advance(4)

    controller.load([3, 1, 2])
    assert controller.state == RunState.CANCELLED
    assert controller.sequence == (3, 1, 2)
    assert controller.counters.total == 0

    controller.start("insertion_sort")
    controller.run()
    assert controller.sequence == (1, 2, 3)


def test_generate_is_seeded_and_resets_to_idle() -> None:
    controller = RunController()
    first = controller.generate(20, seed=11)
    second = RunController().generate(20, seed=11)

    assert first == second
    assert len(controller.sequence) == 20
    assert all(5 <= value <= 100 for value in first)
    assert controller.state == RunState.IDLE


def test_speed_controls_virtual_delay() -> None:
    controller = RunController([2, 1], speed=200)
    assert controller.delay_ms == 10
    controller.start("bubble_sort")
    controller.advance(1)
    controller.speed = 10
    assert controller.delay_ms == 200
    controller.run()
    # compare at t=0 (10 ms), swap at t=10 (200 ms after the speed change).
    assert controller.now == pytest.approx(210.0)


def test_elapsed_seconds_uses_whole_seconds() -> None:
    clock = _FakeClock()
    controller = RunController(VALUES, clock=clock)
    assert controller.elapsed_seconds == 0

    controller.start("bubble_sort")
    clock.now += 2.7
    assert controller.elapsed_seconds == 2
    controller.run()
    clock.now += 10
    assert controller.elapsed_seconds == 2


def test_render_sink_receives_immutable_snapshots() -> None:
    calls: list[tuple] = []

    def sink(sequence, highlight, sorted_indices, pivot, swapping) -> None:
        calls.append((sequence, highlight, sorted_indices, pivot, swapping))

    controller = RunController([2, 1])
    controller.subscribe(render_handler(sink))
    controller.start("bubble_sort")
    controller.run()

    assert calls[0] == ((2, 1), (0, 1), (), None, False)
    assert calls[1] == ((1, 2), (0, 1), (), None, True)
    assert calls[-1][2] == (0, 1)
    assert all(isinstance(call[0], tuple) for call in calls)


def test_subscribers_survive_across_runs() -> None:
    seen: list[StepEvent] = []
    controller = RunController([3, 1, 2])
    controller.subscribe(seen.append)
    controller.subscribe(seen.append)

    controller.start("bubble_sort")
    controller.run()
    first_run = len(seen)
    controller.start("bubble_sort")
    controller.run()

    assert first_run > 0
    assert len(seen) > first_run
    assert {event.run_id for event in seen} == {"run-0001", "run-0002"}


def test_metric_report_merges_counters_and_complexity() -> None:
    controller = sort_headless("merge_sort", VALUES)
    report = controller.metric_report()

    assert report["algorithm"] == "merge_sort"
    assert report["state"] == "finished"
    assert report["n"] == len(VALUES)
    assert report["total_operations"] == report["comparisons"] + report["swaps"]
    assert report["observed_comparisons"] == report["comparisons"]
    assert report["step_counts"]["Overwrite"] == report["swaps"]
    assert report["complexity"]["label"] == controller.report.label


def test_recording_controller_captures_first_run() -> None:
    controller = RunController([8, 7, 6, 5, 4, 3, 2, 1], record_events=True)
    controller.start("merge_sort")
    controller.run()

    assert controller.events
    assert controller.events[0].seq == 0
    assert len(controller.events) == controller.metric_report()["event_count"]


@pytest.mark.parametrize("k", [2, 5, 8])
def test_cancelled_merge_reports_restored_sequence(k: int) -> None:
    values = [8, 7, 6, 5, 4, 3, 2, 1]
    controller = RunController(values, record_events=True)
    controller.start("merge_sort")
    controller.advance(k)
    controller.cancel()
    controller.run()

    report = controller.metric_report()
    assert report["state"] == "cancelled"
    assert report["sequence"] == list(controller.sequence)
    assert Counter(report["sequence"]) == Counter(values)


class _FailingSort(ISortAlgorithm):
    algorithm_id = "failing_sort"

    def steps(self, ctx: RunContext) -> StepStream:
        yield from ctx.compare(0, 1)
        raise RuntimeError("comparator exploded")


def test_algorithm_error_ends_run_as_cancelled(caplog: pytest.LogCaptureFixture) -> None:
    register_algorithm("failing_sort", _FailingSort)
    controller = RunController([3, 1, 2])
    controller.start("failing_sort")

    with caplog.at_level(logging.ERROR, logger="sort_viz.core.controller"):
        assert controller.run() == RunState.CANCELLED
    assert controller.step() is False
    assert controller.operation == "Cancelled"
    assert controller.report is None
    assert "comparator exploded" in caplog.text
