"""I/O exports."""

from sort_viz.errors import ConfigError

from .benchmark import BenchmarkRunner, BenchmarkSummary
from .loader import ConfigLoader, ValidationIssue, resolve_sequence, schema_issues
from .schema import RUN_SCHEMA

__all__ = [
    "BenchmarkRunner",
    "BenchmarkSummary",
    "ConfigError",
    "ConfigLoader",
    "RUN_SCHEMA",
    "ValidationIssue",
    "resolve_sequence",
    "schema_issues",
]
