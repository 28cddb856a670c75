"""Sequence ownership and operation counting."""

from __future__ import annotations

import random
from typing import Iterable

from sort_viz.model import SIZE_MAX, VALUE_MAX, VALUE_MIN, Counters


def generate_sequence(size: int, rng: random.Random | None = None) -> list[int]:
    """Random integers in [VALUE_MIN, VALUE_MAX]."""
    if size < 0 or size > SIZE_MAX:
        raise ValueError(f"size must be within 0..{SIZE_MAX}, got {size}")
    source = rng or random.Random()
    return [source.randint(VALUE_MIN, VALUE_MAX) for _ in range(size)]


def _order(lhs: int, rhs: int) -> int:
    return (lhs > rhs) - (lhs < rhs)


class SequenceStore:
    """Mutable sequence under sort together with its running counters.

    The length is fixed once loaded; every mutation is a permutation
    (``swap``) or a write of a value taken from the same range
    (``overwrite``), so the multiset of values only changes transiently
    inside a merge.
    """

    def __init__(self, values: Iterable[int] = ()) -> None:
        self._values: list[int] = list(values)
        self.counters = Counters()

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> int:
        return self._values[index]

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._values)

    def load(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self.counters.reset()

    def compare(self, i: int, j: int) -> int:
        self.counters.comparisons += 1
        return _order(self._values[i], self._values[j])

    def compare_values(self, lhs: int, rhs: int) -> int:
        self.counters.comparisons += 1
        return _order(lhs, rhs)

    def swap(self, i: int, j: int) -> None:
        self.counters.swaps += 1
        self._values[i], self._values[j] = self._values[j], self._values[i]

    def overwrite(self, index: int, value: int) -> None:
        self.counters.swaps += 1
        self._values[index] = value

    def restore(self, start: int, values: Iterable[int]) -> None:
        """Write ``values`` from ``start`` without counting."""
        for offset, value in enumerate(values):
            self._values[start + offset] = value
