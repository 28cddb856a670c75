"""Run-scoped state: the sequence store and the context algorithms step through."""

from .context import RunContext, Step, StepStream
from .store import SequenceStore, generate_sequence

__all__ = ["RunContext", "SequenceStore", "Step", "StepStream", "generate_sequence"]
