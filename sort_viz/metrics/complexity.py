"""Empirical complexity classification from operation counts."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import math

from sort_viz.model import AlgorithmDescriptor, Counters


LINEAR = "linear"
LOG_LINEAR = "log-linear"
QUADRATIC = "quadratic"

LINEAR_FACTOR = 1.5
LOG_LINEAR_FACTOR = 1.5
QUADRATIC_FACTOR = 0.5


def complexity_family(notation: str) -> str | None:
    """Map big-O notation such as ``O(n log n)`` or ``O(n^2)`` to a family."""
    compact = notation.replace(" ", "").lower()
    if "nlogn" in compact:
        return LOG_LINEAR
    if "n²" in compact or "n^2" in compact or "n*n" in compact:
        return QUADRATIC
    if compact == "o(n)":
        return LINEAR
    return None


@dataclass(slots=True, frozen=True)
class ComplexityReport:
    n: int
    total_operations: int
    family: str
    actual_complexity: str
    operations_scale: str
    efficiency: str
    theoretical_note: str = ""

    @property
    def label(self) -> str:
        return self.actual_complexity + self.theoretical_note

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["label"] = self.label
        return payload


class MetricsAnalyzer:
    """Classify a finished run against n, n log n and n² thresholds."""

    def analyze(
        self,
        counters: Counters,
        n: int,
        descriptor: AlgorithmDescriptor | None = None,
    ) -> ComplexityReport:
        total = counters.comparisons + counters.swaps
        n_log_n = n * math.log2(n) if n > 1 else 0.0

        if total <= n * LINEAR_FACTOR:
            family, actual, scale, efficiency = LINEAR, "O(n) - Linear", "Linear", "Excellent"
        elif total <= n_log_n * LOG_LINEAR_FACTOR:
            family, actual, scale, efficiency = LOG_LINEAR, "O(n log n) - Log-linear", "Log-linear", "Very Good"
        elif total <= n * n * QUADRATIC_FACTOR:
            family, actual, scale, efficiency = QUADRATIC, "O(n²) - Quadratic", "Quadratic", "Average"
        else:
            family, actual, scale, efficiency = QUADRATIC, "O(n²) - Quadratic", "Quadratic", "Poor"

        return ComplexityReport(
            n=n,
            total_operations=total,
            family=family,
            actual_complexity=actual,
            operations_scale=scale,
            efficiency=efficiency,
            theoretical_note=self._theoretical_note(family, descriptor),
        )

    @staticmethod
    def _theoretical_note(family: str, descriptor: AlgorithmDescriptor | None) -> str:
        if descriptor is None:
            return ""
        best = complexity_family(descriptor.complexities.best.time)
        worst = complexity_family(descriptor.complexities.worst.time)
        # Only the linear best case and the quadratic worst case are annotated.
        if family == LINEAR and best == LINEAR:
            return " (Matches best case)"
        if family == QUADRATIC and worst == QUADRATIC:
            return " (Matches worst case)"
        return ""
