"""Typed exception hierarchy for cpp-smells.

Hierarchy
---------
CppSmellsError (base)
├── ParserError                – syntax tree provider errors
│   ├── ParserUnavailableError – grammar missing / provider not initialized
│   └── ParseFailureError      – tree construction failed for one file
├── AnalysisError              – unexpected detector failure for one file
└── ConfigError                – threshold configuration errors

``ParserUnavailableError`` is batch-fatal: without a grammar no file can be
analyzed.  ``ParseFailureError`` and ``AnalysisError`` are per-file and are
turned into degraded results by the orchestrator.

Metric degradation (a tree without an expected field) is deliberately *not*
an exception: the affected metric falls back to zero or its neutral value.
"""

from typing import Any


class CppSmellsError(Exception):
    """Base exception for cpp-smells."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


# ── Parser layer ────────────────────────────────────────────────────────


class ParserError(CppSmellsError):
    """Syntax tree provider errors."""

    pass


class ParserUnavailableError(ParserError):
    """Grammar could not be loaded or the provider was never initialized."""

    pass


class ParseFailureError(ParserError):
    """Tree construction failed for a specific file."""

    pass


# Short aliases matching the names used in reports and logs
ParserUnavailable = ParserUnavailableError
ParseFailure = ParseFailureError


# ── Analysis layer ──────────────────────────────────────────────────────


class AnalysisError(CppSmellsError):
    """A detector or metric collector failed unexpectedly on one file."""

    pass


# ── Configuration layer ─────────────────────────────────────────────────


class ConfigError(CppSmellsError):
    """Configuration / validation errors."""

    pass
