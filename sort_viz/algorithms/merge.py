"""Top-down merge sort."""

from __future__ import annotations

from sort_viz.runtime import RunContext, StepStream

from .base import ISortAlgorithm


class MergeSort(ISortAlgorithm):
    algorithm_id = "merge_sort"

    def steps(self, ctx: RunContext) -> StepStream:
        yield from self._sort(ctx, 0, len(ctx) - 1)

    def _sort(self, ctx: RunContext, left: int, right: int) -> StepStream:
        if left >= right or ctx.cancelled:
            return
        mid = (left + right) // 2
        yield from self._sort(ctx, left, mid)
        yield from self._sort(ctx, mid + 1, right)
        yield from self._merge(ctx, left, mid, right)

    def _merge(self, ctx: RunContext, left: int, mid: int, right: int) -> StepStream:
        left_run = [ctx[k] for k in range(left, mid + 1)]
        right_run = [ctx[k] for k in range(mid + 1, right + 1)]
        i = j = 0
        k = left
        try:
            while i < len(left_run) and j < len(right_run):
                if ctx.cancelled:
                    return
                order = yield from ctx.compare_values(
                    left_run[i],
                    right_run[j],
                    highlight=(k,),
                    operation="Merging sorted subarrays",
                )
                # <= keeps equal keys in input order.
                if order <= 0:
                    value = left_run[i]
                    i += 1
                else:
                    value = right_run[j]
                    j += 1
                target, k = k, k + 1
                yield from ctx.overwrite(target, value, operation="Merging sorted subarrays")

            while i < len(left_run):
                if ctx.cancelled:
                    return
                value = left_run[i]
                i += 1
                target, k = k, k + 1
                yield from ctx.overwrite(target, value, operation="Copying remaining elements from left subarray")

            while j < len(right_run):
                if ctx.cancelled:
                    return
                value = right_run[j]
                j += 1
                target, k = k, k + 1
                yield from ctx.overwrite(target, value, operation="Copying remaining elements from right subarray")
        finally:
            # Interrupted merge: put unconsumed buffer values back so the range
            # stays a permutation of its input.
            if i < len(left_run) or j < len(right_run):
                ctx.store.restore(k, left_run[i:] + right_run[j:])
