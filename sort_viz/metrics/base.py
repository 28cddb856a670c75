"""Step-stream metric contract."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sort_viz.events import StepEvent


class IMetric(ABC):
    """Subscribed to the run's event bus; reset at every start."""

    @abstractmethod
    def consume(self, event: StepEvent) -> None:
        """Fold one step into the running aggregate."""

    @abstractmethod
    def report(self) -> dict:
        """JSON-ready summary merged into ``RunController.metric_report()``."""

    @abstractmethod
    def reset(self) -> None:
        """Forget everything seen for the previous run."""
