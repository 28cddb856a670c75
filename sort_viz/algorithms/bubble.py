"""Bubble sort."""

from __future__ import annotations

from sort_viz.runtime import RunContext, StepStream

from .base import ISortAlgorithm


class BubbleSort(ISortAlgorithm):
    algorithm_id = "bubble_sort"

    def steps(self, ctx: RunContext) -> StepStream:
        n = len(ctx)
        for i in range(n - 1):
            for j in range(n - i - 1):
                if ctx.cancelled:
                    return
                order = yield from ctx.compare(j, j + 1)
                if order > 0:
                    yield from ctx.swap(j, j + 1)
            ctx.note_sorted(n - i - 1)
        if n:
            ctx.note_sorted(0)
