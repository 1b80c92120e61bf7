"""Shared helpers for smell detectors."""

from __future__ import annotations

import uuid

from ..models import CodeMetrics, CodeSmell, Severity, SmellKind
from .catalog import get_refactoring_tip


def truncate_snippet(text: str, limit: int) -> str:
    """Bound a code excerpt to ``limit`` characters, marking the cut with '...'."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def line_at(content: str, index: int) -> int:
    """1-based line number of a character offset."""
    return content.count("\n", 0, index) + 1


def new_smell(
    kind: SmellKind,
    *,
    file_name: str,
    line_number: int,
    code_snippet: str,
    entity_name: str,
    description: str,
    severity: Severity,
    end_line_number: int | None = None,
    metrics: CodeMetrics | None = None,
) -> CodeSmell:
    """Create a finding with a fresh id and the catalog's refactoring tip."""
    return CodeSmell(
        id=uuid.uuid4().hex,
        kind=kind,
        file_name=file_name,
        line_number=line_number,
        end_line_number=end_line_number,
        code_snippet=code_snippet,
        entity_name=entity_name,
        description=description,
        refactoring_tip=get_refactoring_tip(kind),
        severity=severity,
        metrics=metrics,
    )
