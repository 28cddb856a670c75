"""Selection sort."""

from __future__ import annotations

from sort_viz.runtime import RunContext, StepStream

from .base import ISortAlgorithm


class SelectionSort(ISortAlgorithm):
    algorithm_id = "selection_sort"

    def steps(self, ctx: RunContext) -> StepStream:
        n = len(ctx)
        for i in range(n - 1):
            min_idx = i
            for j in range(i + 1, n):
                if ctx.cancelled:
                    return
                order = yield from ctx.compare(
                    j,
                    min_idx,
                    operation="Finding minimum element in unsorted portion",
                )
                if order < 0:
                    min_idx = j
            if min_idx != i:
                yield from ctx.swap(i, min_idx)
            ctx.note_sorted(i)
        if n:
            ctx.note_sorted(n - 1)
