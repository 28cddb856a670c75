"""Cooperative step scheduler on a SimPy clock."""

from __future__ import annotations

import logging
from typing import Any, Generator

import simpy

from sort_viz.events import EventBus, StepEvent

from sort_viz.runtime import RunContext, Step, StepStream


logger = logging.getLogger(__name__)

PAUSE_POLL_MS = 100.0


class StepScheduler:
    """Turn an algorithm's step stream into timed, pausable suspension points.

    Each step is published to the bus (and so rendered) synchronously, then the
    driver process waits ``ctx.delay_ms`` on the environment clock and keeps
    waiting in ``PAUSE_POLL_MS`` slices while the run is paused. The
    cancellation flag is checked every time the driver resumes; a cancelled
    run closes the algorithm generator so every pending ``yield from`` frame
    unwinds without doing further work.
    """

    def __init__(self, env: simpy.Environment, bus: EventBus, ctx: RunContext) -> None:
        self._env = env
        self._bus = bus
        self._ctx = ctx
        self._emitted = 0

    @property
    def emitted(self) -> int:
        return self._emitted

    def emit(self, step: Step) -> StepEvent:
        ctx = self._ctx
        ctx.operation = step.operation or ctx.operation
        event = self._bus.publish(
            run_id=ctx.run_id,
            algorithm=ctx.algorithm,
            kind=step.kind,
            sequence=ctx.store.snapshot(),
            comparisons=ctx.store.counters.comparisons,
            swaps=ctx.store.counters.swaps,
            indices=step.indices,
            sorted_indices=sorted(ctx.sorted_indices),
            pivot_index=step.pivot_index,
            operation=ctx.operation,
        )
        self._emitted += 1
        return event

    def drive(self, steps: StepStream) -> Generator[simpy.Event, Any, bool]:
        """SimPy process body; its value is True on natural completion."""
        ctx = self._ctx
        try:
            for step in steps:
                self.emit(step)
                yield self._env.timeout(max(0.0, float(ctx.delay_ms)))
                while ctx.paused and not ctx.cancelled:
                    yield self._env.timeout(PAUSE_POLL_MS)
                if ctx.cancelled:
                    logger.debug("run %s cancelled after %d steps", ctx.run_id, self._emitted)
                    return False
        finally:
            steps.close()
        return not ctx.cancelled
