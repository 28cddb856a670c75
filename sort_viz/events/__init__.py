"""Event exports."""

from .bus import EventBus, EventHandler, RenderSink, render_handler
from .types import StepEvent, StepKind

__all__ = ["EventBus", "EventHandler", "RenderSink", "StepEvent", "StepKind", "render_handler"]
