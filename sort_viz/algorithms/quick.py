"""Quick sort with Lomuto partitioning."""

from __future__ import annotations

from typing import Generator

from sort_viz.runtime import RunContext, Step, StepStream

from .base import ISortAlgorithm


class QuickSort(ISortAlgorithm):
    algorithm_id = "quick_sort"

    def steps(self, ctx: RunContext) -> StepStream:
        yield from self._sort(ctx, 0, len(ctx) - 1)

    def _sort(self, ctx: RunContext, low: int, high: int) -> StepStream:
        if ctx.cancelled:
            return
        if low < high:
            pivot_index = yield from self._partition(ctx, low, high)
            if pivot_index is None:
                return
            yield from self._sort(ctx, low, pivot_index - 1)
            yield from self._sort(ctx, pivot_index + 1, high)
        elif low == high:
            yield from ctx.mark_sorted(low)

    def _partition(self, ctx: RunContext, low: int, high: int) -> Generator[Step, None, int | None]:
        """Return the pivot's final index, or None when cancelled mid-scan."""
        yield from ctx.mark_pivot(high)
        i = low - 1
        for j in range(low, high):
            if ctx.cancelled:
                return None
            order = yield from ctx.compare(
                j,
                high,
                pivot=high,
                operation=f"Comparing element at index {j} with pivot",
            )
            if order < 0:
                i += 1
                yield from ctx.swap(i, j, pivot=high)
        yield from ctx.swap(i + 1, high)
        ctx.note_sorted(i + 1)
        return i + 1
