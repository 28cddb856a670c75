"""Event bus with sequence assignment."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from .types import StepEvent, StepKind


EventHandler = Callable[[StepEvent], None]
RenderSink = Callable[[tuple[int, ...], tuple[int, ...], tuple[int, ...], Optional[int], bool], None]


class EventBus:
    """Simple in-process pub/sub event bus."""

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []
        self._seq = 0

    def subscribe(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    @property
    def seq(self) -> int:
        return self._seq

    def publish(
        self,
        *,
        run_id: str,
        algorithm: str,
        kind: StepKind,
        sequence: Sequence[int],
        comparisons: int,
        swaps: int,
        indices: Sequence[int] = (),
        sorted_indices: Sequence[int] = (),
        pivot_index: int | None = None,
        operation: str = "",
    ) -> StepEvent:
        event = StepEvent(
            seq=self._seq,
            run_id=run_id,
            algorithm=algorithm,
            kind=kind,
            indices=tuple(indices),
            sequence=tuple(sequence),
            sorted_indices=tuple(sorted_indices),
            pivot_index=pivot_index,
            comparisons=comparisons,
            swaps=swaps,
            operation=operation,
        )
        self._seq += 1
        for handler in list(self._handlers):
            handler(event)
        return event

    def reset(self) -> None:
        self._seq = 0
        self._handlers.clear()


def render_handler(sink: RenderSink) -> EventHandler:
    """Adapt a five-argument render sink to an event subscription."""

    def _on_event(event: StepEvent) -> None:
        sink(event.sequence, event.indices, event.sorted_indices, event.pivot_index, event.swapping)

    return _on_event
