"""Tests for the typed exception hierarchy.

Validates:
- Class hierarchy is correct (isinstance checks)
- Short aliases point at the same classes
- Context dictionaries are carried on every error
"""

from __future__ import annotations

import pytest

from cpp_smells.core.exceptions import (
    AnalysisError,
    ConfigError,
    CppSmellsError,
    ParseFailure,
    ParseFailureError,
    ParserError,
    ParserUnavailable,
    ParserUnavailableError,
)


class TestExceptionHierarchy:
    """Verify the class hierarchy defined in core/exceptions.py."""

    def test_base_error_is_exception(self):
        assert isinstance(CppSmellsError("base"), Exception)

    @pytest.mark.parametrize(
        "exc_class", [ParserError, AnalysisError, ConfigError]
    )
    def test_layer_errors_inherit_from_base(self, exc_class):
        assert isinstance(exc_class("boom"), CppSmellsError)

    def test_parser_errors_inherit_from_parser_error(self):
        assert isinstance(ParserUnavailableError("x"), ParserError)
        assert isinstance(ParseFailureError("x"), ParserError)

    def test_parse_failure_is_not_parser_unavailable(self):
        """The orchestrator distinguishes the two, so neither may subclass the other."""
        assert not isinstance(ParseFailureError("x"), ParserUnavailableError)
        assert not isinstance(ParserUnavailableError("x"), ParseFailureError)

    def test_aliases(self):
        assert ParserUnavailable is ParserUnavailableError
        assert ParseFailure is ParseFailureError

    def test_exported_from_package_root(self):
        from cpp_smells import CppSmellsError as exported

        assert exported is CppSmellsError


class TestExceptionContext:
    """Verify error context handling."""

    def test_context_defaults_to_empty_dict(self):
        err = ConfigError("bad")
        assert err.context == {}
        assert str(err) == "bad"

    def test_context_is_kept(self):
        err = ParserUnavailableError("no grammar", {"language": "cpp"})
        assert err.context["language"] == "cpp"

    def test_catchable_as_base(self):
        with pytest.raises(CppSmellsError):
            raise AnalysisError("detector crashed", {"file": "a.cpp"})
