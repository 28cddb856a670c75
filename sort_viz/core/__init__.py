"""Run driver exports."""

from .controller import (
    EnvFactory,
    RunController,
    realtime_environment,
    sort_headless,
    virtual_environment,
)
from .interfaces import IRunController
from .scheduler import PAUSE_POLL_MS, StepScheduler

__all__ = [
    "EnvFactory",
    "IRunController",
    "PAUSE_POLL_MS",
    "RunController",
    "StepScheduler",
    "realtime_environment",
    "sort_headless",
    "virtual_environment",
]
