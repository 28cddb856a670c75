"""Algorithm package exports."""

from .base import ISortAlgorithm
from .bubble import BubbleSort
from .catalog import get_descriptor, load_catalog, parse_catalog
from .insertion import InsertionSort
from .merge import MergeSort
from .quick import QuickSort
from .registry import ALGORITHM_IDS, create_algorithm, register_algorithm, resolve_algorithm_id
from .selection import SelectionSort

__all__ = [
    "ALGORITHM_IDS",
    "BubbleSort",
    "ISortAlgorithm",
    "InsertionSort",
    "MergeSort",
    "QuickSort",
    "SelectionSort",
    "create_algorithm",
    "get_descriptor",
    "load_catalog",
    "parse_catalog",
    "register_algorithm",
    "resolve_algorithm_id",
]
