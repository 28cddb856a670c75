"""Run lifecycle orchestration on top of the step scheduler."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterable

import simpy
from simpy.core import Infinity
from simpy.rt import RealtimeEnvironment

from sort_viz.algorithms import create_algorithm, get_descriptor
from sort_viz.errors import InvalidStateError
from sort_viz.events import EventBus, EventHandler, StepEvent, StepKind
from sort_viz.metrics import ComplexityReport, IMetric, MetricsAnalyzer, StepMetrics
from sort_viz.model import DEFAULT_SPEED, Counters, RunState, speed_to_delay_ms
from sort_viz.runtime import RunContext, SequenceStore, generate_sequence

from .interfaces import IRunController
from .scheduler import StepScheduler


logger = logging.getLogger(__name__)

EnvFactory = Callable[[], simpy.Environment]

# One environment time unit is one millisecond of animation delay.
REALTIME_FACTOR = 0.001


def virtual_environment() -> simpy.Environment:
    return simpy.Environment()


def realtime_environment() -> simpy.Environment:
    return RealtimeEnvironment(factor=REALTIME_FACTOR, strict=False)


class RunController(IRunController):
    """Owns the sequence, the run state and the counters of the active run.

    The controller is driven from one thread: ``step()``/``run()`` advance the
    SimPy environment, and every state-changing command (``toggle_pause``,
    ``cancel``) is expected to arrive from the same thread between two
    ``step()`` calls. With a realtime environment each delay is slept for
    real; with the default virtual environment runs complete instantly.
    """

    def __init__(
        self,
        values: Iterable[int] = (),
        *,
        realtime: bool = False,
        env_factory: EnvFactory | None = None,
        metrics: list[IMetric] | None = None,
        analyzer: MetricsAnalyzer | None = None,
        clock: Callable[[], float] = time.monotonic,
        speed: int = DEFAULT_SPEED,
        record_events: bool = False,
    ) -> None:
        self._store = SequenceStore(values)
        self._env_factory = env_factory or (realtime_environment if realtime else virtual_environment)
        self._metrics = metrics or [StepMetrics()]
        self._analyzer = analyzer or MetricsAnalyzer()
        self._clock = clock
        self._speed = speed
        self._record_events = record_events
        self._subscribers: list[EventHandler] = []

        self._state = RunState.IDLE
        self._events: list[StepEvent] = []
        self._bus = self._create_bus()
        self._env: simpy.Environment | None = None
        self._process: simpy.Process | None = None
        self._context: RunContext | None = None
        self._scheduler: StepScheduler | None = None
        self._algorithm_id: str | None = None
        self._run_seq = 0
        self._started_at: float | None = None
        self._stopped_at: float | None = None
        self._report: ComplexityReport | None = None
        self._operation = "Ready"

    # ------------------------------------------------------------------ queries

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def counters(self) -> Counters:
        return self._store.counters

    @property
    def sequence(self) -> tuple[int, ...]:
        return self._store.snapshot()

    @property
    def algorithm_id(self) -> str | None:
        return self._algorithm_id

    @property
    def operation(self) -> str:
        if self._context is not None and self._state.active:
            return self._context.operation
        return self._operation

    @property
    def report(self) -> ComplexityReport | None:
        return self._report

    @property
    def events(self) -> list[StepEvent]:
        return list(self._events)

    @property
    def steps_emitted(self) -> int:
        return self._scheduler.emitted if self._scheduler is not None else 0

    @property
    def elapsed_seconds(self) -> int:
        if self._started_at is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return int(max(0.0, end - self._started_at))

    @property
    def now(self) -> float:
        return float(self._env.now) if self._env is not None else 0.0

    @property
    def speed(self) -> int:
        return self._speed

    @speed.setter
    def speed(self, value: int) -> None:
        self._speed = int(value)
        if self._context is not None:
            self._context.delay_ms = self.delay_ms

    @property
    def delay_ms(self) -> int:
        return speed_to_delay_ms(self._speed)

    def metric_report(self) -> dict:
        merged: dict = {}
        for metric in self._metrics:
            merged.update(metric.report())
        merged.update(
            {
                "algorithm": self._algorithm_id,
                "state": self._state.value,
                "n": len(self._store),
                "comparisons": self.counters.comparisons,
                "swaps": self.counters.swaps,
                "total_operations": self.counters.total,
                "elapsed_seconds": self.elapsed_seconds,
                "sequence": list(self._store.snapshot()),
                "animated_ms": self.now,
                "complexity": self._report.to_dict() if self._report is not None else None,
            }
        )
        return merged

    # ------------------------------------------------------------------ commands

    def subscribe(self, handler: EventHandler) -> None:
        if handler in self._subscribers:
            return
        self._subscribers.append(handler)
        self._bus.subscribe(handler)

    def load(self, values: Iterable[int]) -> None:
        """Replace the sequence; an active run is cancelled first and stays CANCELLED."""
        interrupted = self._state.active
        if interrupted:
            self._cancel_and_drain()
        self._store.load(values)
        self._reset_run_state()
        if not interrupted:
            self._set_state(RunState.IDLE)

    def generate(self, size: int, seed: int | None = None) -> list[int]:
        values = generate_sequence(size, random.Random(seed))
        self.load(values)
        return values

    def start(self, algorithm_id: str, *, restart: bool = False) -> None:
        if self._state.active:
            if not restart:
                raise InvalidStateError("start", self._state.value)
            self._cancel_and_drain()

        algorithm = create_algorithm(algorithm_id)
        self._reset_run_state()
        self._algorithm_id = algorithm.algorithm_id
        self._run_seq += 1
        self._bus = self._create_bus()
        self._env = self._env_factory()
        self._context = RunContext(
            self._store,
            run_id=f"run-{self._run_seq:04d}",
            algorithm=algorithm.algorithm_id,
            delay_ms=self.delay_ms,
        )
        self._scheduler = StepScheduler(self._env, self._bus, self._context)
        self._started_at = self._clock()
        self._set_state(RunState.RUNNING)
        logger.info("start %s on %d values", algorithm.algorithm_id, len(self._store))

        if len(self._store) == 0:
            self.finish()
            return

        self._process = self._env.process(self._scheduler.drive(algorithm.steps(self._context)))
        self._process.callbacks.append(self._on_driver_done)

    def toggle_pause(self) -> RunState:
        if self._state == RunState.RUNNING:
            self._set_state(RunState.PAUSED)
        elif self._state == RunState.PAUSED:
            self._set_state(RunState.RUNNING)
        else:
            raise InvalidStateError("toggle pause", self._state.value)
        return self._state

    def cancel(self) -> bool:
        if not self._state.active or self._context is None:
            logger.debug("cancel ignored while %s", self._state.value)
            return False
        self._context.cancelled = True
        return True

    def step(self) -> bool:
        """Process one scheduler event; False once the run is over.

        While paused this processes the scheduler's pause polls, so a
        realtime environment blocks for at most one poll interval.
        """
        if not self._state.active or self._env is None:
            return False
        if self._env.peek() == Infinity:
            return False
        self._env.step()
        return self._state.active

    def run(self, max_events: int | None = None) -> RunState:
        """Drive until the run ends; returns early, still paused, on pause."""
        processed = 0
        while max_events is None or processed < max_events:
            if self._held_by_pause() or not self.step():
                break
            processed += 1
        return self._state

    def advance(self, steps: int) -> int:
        """Advance until ``steps`` more step events were emitted; returns how many were."""
        start = self.steps_emitted
        while self.steps_emitted < start + steps:
            if self._held_by_pause() or not self.step():
                break
        return self.steps_emitted - start

    def finish(self) -> None:
        """Natural completion: mark everything sorted and analyse the run."""
        if self._context is None or not self._state.active:
            return
        ctx = self._context
        ctx.note_sorted(*range(len(self._store)))
        ctx.operation = "Array is fully sorted"
        self._publish_final(ctx)
        self._stopped_at = self._clock()
        self._report = self._analyzer.analyze(
            self._store.counters,
            len(self._store),
            get_descriptor(ctx.algorithm),
        )
        self._operation = ctx.operation
        self._set_state(RunState.FINISHED)
        logger.info(
            "finished %s: comparisons=%d swaps=%d (%s)",
            ctx.algorithm,
            self.counters.comparisons,
            self.counters.swaps,
            self._report.label,
        )

    # ------------------------------------------------------------------ internals

    def _create_bus(self) -> EventBus:
        bus = EventBus()
        for metric in self._metrics:
            bus.subscribe(metric.consume)
        if self._record_events:
            bus.subscribe(self._events.append)
        for handler in self._subscribers:
            bus.subscribe(handler)
        return bus

    def _reset_run_state(self) -> None:
        for metric in self._metrics:
            metric.reset()
        self._store.counters.reset()
        self._events.clear()
        self._report = None
        self._started_at = None
        self._stopped_at = None
        self._env = None
        self._process = None
        self._context = None
        self._scheduler = None
        self._operation = "Ready"

    def _set_state(self, state: RunState) -> None:
        if state != self._state:
            logger.debug("state %s -> %s", self._state.value, state.value)
        self._state = state
        if self._context is not None:
            self._context.state = state
            if state == RunState.PAUSED:
                self._context.operation = "Paused"

    def _held_by_pause(self) -> bool:
        # A paused run is still driven when it has to observe a cancellation.
        return self._state == RunState.PAUSED and not (self._context is not None and self._context.cancelled)

    def _cancel_and_drain(self) -> None:
        self.cancel()
        while self._state.active:
            if not self.step():
                break
        if self._state.active:
            self._mark_cancelled()

    def _on_driver_done(self, event: simpy.Event) -> None:
        if event.ok and event.value:
            self.finish()
            return
        if not event.ok:
            # Handled here; env.step() would otherwise re-raise it.
            event.defused = True
            logger.error("run %s aborted by error: %s", self._algorithm_id, event.value)
        self._mark_cancelled()

    def _mark_cancelled(self) -> None:
        self._stopped_at = self._clock()
        self._operation = "Cancelled"
        self._set_state(RunState.CANCELLED)
        logger.info("cancelled %s after %d steps", self._algorithm_id, self.steps_emitted)

    def _publish_final(self, ctx: RunContext) -> None:
        self._bus.publish(
            run_id=ctx.run_id,
            algorithm=ctx.algorithm,
            kind=StepKind.MARK_SORTED,
            sequence=self._store.snapshot(),
            comparisons=self._store.counters.comparisons,
            swaps=self._store.counters.swaps,
            sorted_indices=sorted(ctx.sorted_indices),
            operation=ctx.operation,
        )


def sort_headless(algorithm_id: str, values: Iterable[int], **kwargs) -> RunController:
    """Run ``algorithm_id`` to completion on a virtual clock."""
    controller = RunController(values, **kwargs)
    controller.start(algorithm_id)
    controller.run()
    return controller
