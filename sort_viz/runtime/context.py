"""Per-run context shared by the scheduler and algorithm generators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generator, Iterable

from sort_viz.events import StepKind
from sort_viz.model import RunState

from .store import SequenceStore


@dataclass(slots=True, frozen=True)
class Step:
    """What an algorithm hands to the scheduler at a suspension point."""

    kind: StepKind
    indices: tuple[int, ...] = ()
    pivot_index: int | None = None
    operation: str = ""


StepStream = Generator[Step, None, None]


class RunContext:
    """Run-scoped state passed by reference to one algorithm invocation.

    Step primitives are generators: ``yield from ctx.compare(i, j)`` mutates
    the counters, hands one ``Step`` to the scheduler and, once the scheduler
    resumes the algorithm, returns the comparison result.
    """

    def __init__(
        self,
        store: SequenceStore,
        *,
        run_id: str,
        algorithm: str,
        delay_ms: float = 100.0,
    ) -> None:
        self.store = store
        self.run_id = run_id
        self.algorithm = algorithm
        self.delay_ms = delay_ms
        self.state = RunState.IDLE
        self.cancelled = False
        self.sorted_indices: set[int] = set()
        self.operation = "Ready"

    @property
    def paused(self) -> bool:
        return self.state == RunState.PAUSED

    def __len__(self) -> int:
        return len(self.store)

    def __getitem__(self, index: int) -> int:
        return self.store[index]

    def compare(
        self,
        i: int,
        j: int,
        *,
        pivot: int | None = None,
        operation: str | None = None,
    ) -> Generator[Step, None, int]:
        order = self.store.compare(i, j)
        yield Step(
            StepKind.COMPARE,
            (i, j),
            pivot,
            operation or f"Comparing elements at indices {i} and {j}",
        )
        return order

    def compare_values(
        self,
        lhs: int,
        rhs: int,
        *,
        highlight: Iterable[int] = (),
        operation: str = "",
    ) -> Generator[Step, None, int]:
        order = self.store.compare_values(lhs, rhs)
        yield Step(StepKind.COMPARE, tuple(highlight), None, operation)
        return order

    def swap(self, i: int, j: int, *, pivot: int | None = None, operation: str | None = None) -> StepStream:
        self.store.swap(i, j)
        yield Step(
            StepKind.SWAP,
            (i, j),
            pivot,
            operation or f"Swapping elements at indices {i} and {j}",
        )

    def overwrite(self, index: int, value: int, *, operation: str = "") -> StepStream:
        self.store.overwrite(index, value)
        yield Step(StepKind.OVERWRITE, (index,), None, operation or f"Writing element at index {index}")

    def note_sorted(self, *indices: int) -> None:
        self.sorted_indices.update(indices)

    def mark_sorted(self, index: int, *, operation: str | None = None) -> StepStream:
        self.sorted_indices.add(index)
        yield Step(StepKind.MARK_SORTED, (), None, operation or f"Element at index {index} is in place")

    def mark_pivot(self, index: int, *, operation: str | None = None) -> StepStream:
        yield Step(StepKind.MARK_PIVOT, (), index, operation or f"Partitioning with pivot at index {index}")
