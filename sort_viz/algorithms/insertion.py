"""Insertion sort."""

from __future__ import annotations

from sort_viz.runtime import RunContext, StepStream

from .base import ISortAlgorithm


class InsertionSort(ISortAlgorithm):
    """Shift each key left by adjacent swaps.

    Swapping instead of overwriting keeps the sequence a permutation of the
    input at every suspension point.
    """

    algorithm_id = "insertion_sort"

    def steps(self, ctx: RunContext) -> StepStream:
        n = len(ctx)
        if n:
            ctx.note_sorted(0)
        for i in range(1, n):
            j = i - 1
            while j >= 0:
                if ctx.cancelled:
                    return
                order = yield from ctx.compare(
                    j,
                    j + 1,
                    operation=f"Comparing key at index {j + 1} with element at index {j}",
                )
                if order <= 0:
                    break
                yield from ctx.swap(j, j + 1, operation=f"Shifting element at index {j} to the right")
                j -= 1
            yield from ctx.mark_sorted(i, operation=f"Inserted key at index {j + 1}")
