"""Algorithm registry and factory."""

from __future__ import annotations

from collections.abc import Callable

from sort_viz.errors import UnknownAlgorithmError

from .base import ISortAlgorithm
from .bubble import BubbleSort
from .insertion import InsertionSort
from .merge import MergeSort
from .quick import QuickSort
from .selection import SelectionSort


AlgorithmFactory = Callable[[], ISortAlgorithm]


_REGISTRY: dict[str, AlgorithmFactory] = {
    "bubble_sort": BubbleSort,
    "bubble": BubbleSort,
    "bubblesort": BubbleSort,
    "selection_sort": SelectionSort,
    "selection": SelectionSort,
    "selectionsort": SelectionSort,
    "insertion_sort": InsertionSort,
    "insertion": InsertionSort,
    "insertionsort": InsertionSort,
    "merge_sort": MergeSort,
    "merge": MergeSort,
    "mergesort": MergeSort,
    "quick_sort": QuickSort,
    "quick": QuickSort,
    "quicksort": QuickSort,
}

ALGORITHM_IDS: tuple[str, ...] = (
    "bubble_sort",
    "selection_sort",
    "insertion_sort",
    "merge_sort",
    "quick_sort",
)


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def register_algorithm(name: str, factory: AlgorithmFactory) -> None:
    _REGISTRY[_normalize(name)] = factory


def resolve_algorithm_id(name: str) -> str:
    return create_algorithm(name).algorithm_id


def create_algorithm(name: str) -> ISortAlgorithm:
    key = _normalize(name)
    if key not in _REGISTRY:
        raise UnknownAlgorithmError(f"unknown algorithm {name}")
    return _REGISTRY[key]()
