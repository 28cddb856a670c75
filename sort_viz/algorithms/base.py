"""Sorting algorithm interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sort_viz.runtime import RunContext, StepStream


class ISortAlgorithm(ABC):
    """A sort expressed as a stream of steps over a ``RunContext``.

    Implementations hold no state between invocations; everything a run needs
    lives in the context or in local variables of ``steps``. They must check
    ``ctx.cancelled`` at the top of every inner-loop iteration and return
    without finishing when it is set.
    """

    algorithm_id: str = ""

    @abstractmethod
    def steps(self, ctx: RunContext) -> StepStream:
        """Yield one ``Step`` per comparison, swap or marker."""
