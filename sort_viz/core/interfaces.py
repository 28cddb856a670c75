"""Run controller interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sort_viz.events import EventHandler
from sort_viz.model import RunState


class IRunController(ABC):
    """Lifecycle contract used by the UI worker and the CLI."""

    @abstractmethod
    def start(self, algorithm_id: str, *, restart: bool = False) -> None:
        """Begin sorting the loaded sequence with the given algorithm."""

    @abstractmethod
    def toggle_pause(self) -> RunState:
        """Flip between running and paused."""

    @abstractmethod
    def cancel(self) -> bool:
        """Request cooperative cancellation of the active run."""

    @abstractmethod
    def step(self) -> bool:
        """Process one scheduler event."""

    @abstractmethod
    def run(self, max_events: int | None = None) -> RunState:
        """Advance until the run finishes, pauses or is cancelled."""

    @abstractmethod
    def subscribe(self, handler: EventHandler) -> None:
        """Subscribe a step event handler (render sink)."""
