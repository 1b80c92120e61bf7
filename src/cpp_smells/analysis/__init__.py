"""Code smell analysis for C/C++ sources.

This package holds the data model, the metric collectors and the metrics
calculator. The orchestrator lives in ``analysis.engine``, detectors in
``analysis.smells`` and reporters in ``analysis.reporters``; import those
modules directly.
"""

from .calculator import DEFAULT_COLLECTORS, MetricsCalculator
from .models import (
    AnalysisResult,
    AnalysisStats,
    CodeMetrics,
    CodeSmell,
    FileSmellCount,
    MetricAverages,
    Severity,
    SmellKind,
)

__all__ = [
    "DEFAULT_COLLECTORS",
    "MetricsCalculator",
    "AnalysisResult",
    "AnalysisStats",
    "CodeMetrics",
    "CodeSmell",
    "FileSmellCount",
    "MetricAverages",
    "Severity",
    "SmellKind",
]
