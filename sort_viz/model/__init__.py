"""Model package exports."""

from .runtime import Counters, RunState
from .spec import (
    DEFAULT_SIZE,
    DEFAULT_SPEED,
    SIZE_MAX,
    SIZE_MIN,
    SPEED_MAX,
    SPEED_MIN,
    VALUE_MAX,
    VALUE_MIN,
    AlgorithmDescriptor,
    AnimationSpec,
    ComplexitySpec,
    ComplexityTable,
    RunSpec,
    SequenceSpec,
    speed_label,
    speed_to_delay_ms,
)

__all__ = [
    "AlgorithmDescriptor",
    "AnimationSpec",
    "ComplexitySpec",
    "ComplexityTable",
    "Counters",
    "DEFAULT_SIZE",
    "DEFAULT_SPEED",
    "RunSpec",
    "RunState",
    "SIZE_MAX",
    "SIZE_MIN",
    "SPEED_MAX",
    "SPEED_MIN",
    "SequenceSpec",
    "VALUE_MAX",
    "VALUE_MIN",
    "speed_label",
    "speed_to_delay_ms",
]
