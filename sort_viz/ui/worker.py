"""Background sort worker for PyQt UI."""

from __future__ import annotations

import logging
from queue import Empty, SimpleQueue
import time
from typing import Any, Sequence

from PyQt6.QtCore import QThread, pyqtSignal

from sort_viz.core import EnvFactory, RunController
from sort_viz.errors import InvalidStateError
from sort_viz.events import StepEvent
from sort_viz.model import DEFAULT_SPEED, RunState


logger = logging.getLogger(__name__)


class SortWorker(QThread):
    """Drive one run in the background and stream step batches to the UI thread.

    Commands from the UI are queued and applied between two scheduler events,
    so the controller is only ever touched from this thread.
    """

    steps_batch = pyqtSignal(list)
    state_changed = pyqtSignal(str)
    finished_report = pyqtSignal(dict, list)
    failed = pyqtSignal(str)

    FLUSH_INTERVAL_S = 0.03
    FLUSH_BATCH_SIZE = 32

    def __init__(
        self,
        values: Sequence[int],
        algorithm_id: str,
        *,
        speed: int = DEFAULT_SPEED,
        start_paused: bool = False,
        env_factory: EnvFactory | None = None,
    ) -> None:
        super().__init__()
        self._values = list(values)
        self._algorithm_id = algorithm_id
        self._speed = speed
        self._start_paused = start_paused
        self._env_factory = env_factory
        self._stop_requested = False
        self._controller: RunController | None = None
        self._commands: SimpleQueue[tuple[str, int | None]] = SimpleQueue()

    def stop(self) -> None:
        self._stop_requested = True
        self._commands.put(("stop", None))

    def toggle_pause(self) -> None:
        self._commands.put(("toggle", None))

    def set_speed(self, speed: int) -> None:
        self._commands.put(("speed", speed))

    def run(self) -> None:  # noqa: D401
        self._execute()

    def _execute(self) -> None:
        controller = RunController(
            self._values,
            realtime=self._env_factory is None,
            env_factory=self._env_factory,
            speed=self._speed,
        )
        self._controller = controller
        pending: list[dict[str, Any]] = []
        last_flush = time.monotonic()

        def on_step(event: StepEvent) -> None:
            nonlocal last_flush
            pending.append(event.model_dump(mode="json"))
            now = time.monotonic()
            if len(pending) >= self.FLUSH_BATCH_SIZE or now - last_flush >= self.FLUSH_INTERVAL_S:
                self.steps_batch.emit(list(pending))
                pending.clear()
                last_flush = now

        controller.subscribe(on_step)

        try:
            controller.start(self._algorithm_id)
            if self._start_paused and controller.state == RunState.RUNNING:
                controller.toggle_pause()
            self.state_changed.emit(controller.state.value)
            if self._stop_requested:
                controller.cancel()

            while controller.state.active:
                self._apply_commands(controller)
                # Paused runs still step: the scheduler's pause poll is what blocks here.
                if not controller.step():
                    break

            tail = list(pending)
            pending.clear()
            self.state_changed.emit(controller.state.value)
            self.finished_report.emit(controller.metric_report(), tail)
        except Exception as exc:  # noqa: BLE001
            logger.exception("sort worker failed")
            self.failed.emit(str(exc))

    def _apply_commands(self, controller: RunController) -> None:
        while True:
            try:
                command, value = self._commands.get_nowait()
            except Empty:
                return
            if command == "stop":
                controller.cancel()
            elif command == "toggle":
                try:
                    state = controller.toggle_pause()
                except InvalidStateError as exc:
                    logger.warning("ignored pause toggle: %s", exc)
                    continue
                self.state_changed.emit(state.value)
            elif command == "speed" and value is not None:
                controller.speed = value
