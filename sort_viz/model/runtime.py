"""Runtime types shared by the controller, scheduler and algorithms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"
    CANCELLED = "cancelled"

    @property
    def active(self) -> bool:
        return self in (RunState.RUNNING, RunState.PAUSED)


@dataclass(slots=True)
class Counters:
    """Per-run operation counters. Reset at start, never decremented."""

    comparisons: int = 0
    swaps: int = 0

    @property
    def total(self) -> int:
        return self.comparisons + self.swaps

    def reset(self) -> None:
        self.comparisons = 0
        self.swaps = 0
