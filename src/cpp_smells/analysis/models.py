"""Data model for analysis output.

Every type here is a frozen dataclass: a detector creates a ``CodeSmell``
once, the orchestrator composes an ``AnalysisResult`` once, and the
aggregator derives ``AnalysisStats`` from a batch of results. Consumers
(reporters, the CLI, exporters) only read these values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class SmellKind(StrEnum):
    """Closed set of detectable smell kinds."""

    LONG_FUNCTION = "LongFunction"
    LARGE_CLASS = "LargeClass"
    DUPLICATE_CODE = "DuplicateCode"
    PRIMITIVE_OBSESSION = "PrimitiveObsession"
    LONG_PARAMETER_LIST = "LongParameterList"
    INAPPROPRIATE_INTIMACY = "InappropriateIntimacy"
    GLOBAL_VARIABLES = "GlobalVariables"
    COMPLEX_CONDITION = "ComplexCondition"
    DEEP_NESTING = "DeepNesting"


class Severity(StrEnum):
    """Severity level of a finding."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Ordinal used for sorting and minimum-severity filters (low=1)."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3}


@dataclass(frozen=True)
class CodeMetrics:
    """Metrics for one analyzable unit (a file, function or class).

    Attributes:
        cyclomatic_complexity: 1 + number of decision points
        lines_of_code: Newline-delimited lines in the unit's source span
        method_count: Function definitions at or below the unit
        inheritance_depth: Longest base-class chain (0 without bases)
        coupling_count: Distinct non-std external symbol roots referenced
        cohesion_score: Fraction of method pairs sharing a field, in [0, 1]
    """

    cyclomatic_complexity: int = 1
    lines_of_code: int = 0
    method_count: int = 0
    inheritance_depth: int = 0
    coupling_count: int = 0
    cohesion_score: float = 1.0

    @classmethod
    def zero(cls) -> CodeMetrics:
        """Neutral metrics attached to a file whose analysis failed."""
        return cls(
            cyclomatic_complexity=0,
            lines_of_code=0,
            method_count=0,
            inheritance_depth=0,
            coupling_count=0,
            cohesion_score=0.0,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "cyclomatic_complexity": self.cyclomatic_complexity,
            "lines_of_code": self.lines_of_code,
            "method_count": self.method_count,
            "inheritance_depth": self.inheritance_depth,
            "coupling_count": self.coupling_count,
            "cohesion_score": self.cohesion_score,
        }


@dataclass(frozen=True)
class MetricAverages:
    """Arithmetic mean of each ``CodeMetrics`` field across a corpus."""

    cyclomatic_complexity: float = 0.0
    lines_of_code: float = 0.0
    method_count: float = 0.0
    inheritance_depth: float = 0.0
    coupling_count: float = 0.0
    cohesion_score: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "cyclomatic_complexity": round(self.cyclomatic_complexity, 3),
            "lines_of_code": round(self.lines_of_code, 3),
            "method_count": round(self.method_count, 3),
            "inheritance_depth": round(self.inheritance_depth, 3),
            "coupling_count": round(self.coupling_count, 3),
            "cohesion_score": round(self.cohesion_score, 3),
        }


@dataclass(frozen=True)
class CodeSmell:
    """A single detected smell."""

    id: str
    kind: SmellKind
    file_name: str
    line_number: int  # 1-based
    code_snippet: str
    entity_name: str  # function, class, variable or "condition"
    description: str
    refactoring_tip: str
    severity: Severity
    end_line_number: int | None = None
    metrics: CodeMetrics | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind.value,
            "file_name": self.file_name,
            "line_number": self.line_number,
            "end_line_number": self.end_line_number,
            "code_snippet": self.code_snippet,
            "entity_name": self.entity_name,
            "description": self.description,
            "refactoring_tip": self.refactoring_tip,
            "severity": self.severity.value,
            "metrics": self.metrics.to_dict() if self.metrics else None,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Per-file analysis result.

    ``failed`` marks a degraded result: the file could not be parsed or a
    detector crashed, so ``smells`` is empty and ``metrics`` is zeroed. Such
    results still take part in aggregation so the file never vanishes from
    a report.
    """

    file_name: str
    file_size: int
    smells: tuple[CodeSmell, ...]
    metrics: CodeMetrics
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    failed: bool = False
    error: str | None = None

    @property
    def total_smells(self) -> int:
        return len(self.smells)

    @classmethod
    def failure(cls, file_name: str, file_size: int, error: str) -> AnalysisResult:
        """Build the degraded result for a file whose analysis failed."""
        return cls(
            file_name=file_name,
            file_size=file_size,
            smells=(),
            metrics=CodeMetrics.zero(),
            failed=True,
            error=error,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_name": self.file_name,
            "file_size": self.file_size,
            "total_smells": self.total_smells,
            "analyzed_at": self.analyzed_at.isoformat(),
            "failed": self.failed,
            "error": self.error,
            "metrics": self.metrics.to_dict(),
            "smells": [smell.to_dict() for smell in self.smells],
        }


@dataclass(frozen=True)
class FileSmellCount:
    file_name: str
    smell_count: int


@dataclass(frozen=True)
class AnalysisStats:
    """Corpus-level statistics derived from a batch of ``AnalysisResult``."""

    total_files: int
    total_smells: int
    smells_by_type: dict[SmellKind, int]
    smells_by_file: dict[str, int]
    worst_files: list[FileSmellCount]
    average_metrics: MetricAverages
    failed_files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_smells": self.total_smells,
            "smells_by_type": {
                kind.value: count for kind, count in self.smells_by_type.items()
            },
            "smells_by_file": dict(self.smells_by_file),
            "worst_files": [
                {"file_name": w.file_name, "smell_count": w.smell_count}
                for w in self.worst_files
            ],
            "average_metrics": self.average_metrics.to_dict(),
            "failed_files": list(self.failed_files),
        }
