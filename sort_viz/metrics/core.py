"""Default step-stream metrics."""

from __future__ import annotations

from collections import Counter

from sort_viz.events import StepEvent, StepKind

from .base import IMetric


class StepMetrics(IMetric):
    """Aggregate per-kind step counts from the event stream."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._kind_counts: Counter[str] = Counter()
        self._event_count = 0
        self._pivot_count = 0
        self._last_operation = ""
        self._last_comparisons = 0
        self._last_swaps = 0

    def consume(self, event: StepEvent) -> None:
        self._event_count += 1
        self._kind_counts[event.kind.value] += 1
        if event.kind == StepKind.MARK_PIVOT:
            self._pivot_count += 1
        if event.operation:
            self._last_operation = event.operation
        self._last_comparisons = event.comparisons
        self._last_swaps = event.swaps

    def report(self) -> dict:
        return {
            "event_count": self._event_count,
            "step_counts": {kind.value: self._kind_counts.get(kind.value, 0) for kind in StepKind},
            "partition_count": self._pivot_count,
            "last_operation": self._last_operation,
            "observed_comparisons": self._last_comparisons,
            "observed_swaps": self._last_swaps,
        }
