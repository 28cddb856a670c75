"""Metrics exports."""

from .base import IMetric
from .complexity import ComplexityReport, MetricsAnalyzer, complexity_family
from .core import StepMetrics

__all__ = ["ComplexityReport", "IMetric", "MetricsAnalyzer", "StepMetrics", "complexity_family"]
