"""Exception hierarchy shared by controller, loader and CLI."""

from __future__ import annotations


class SortVizError(Exception):
    """Base error for sort-viz."""


class InvalidStateError(SortVizError):
    """Operation requested in a run state that forbids it."""

    def __init__(self, operation: str, state: str) -> None:
        super().__init__(f"cannot {operation} while {state}")
        self.operation = operation
        self.state = state


class UnknownAlgorithmError(SortVizError, ValueError):
    """Algorithm id not present in the registry."""


class ConfigError(SortVizError):
    """Configuration loading/validation error."""
