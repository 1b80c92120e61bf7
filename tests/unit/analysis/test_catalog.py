"""Unit tests for smell descriptions and refactoring tips."""

from cpp_smells.analysis.models import SmellKind
from cpp_smells.analysis.smells.catalog import (
    GENERIC_DESCRIPTION,
    GENERIC_TIP,
    get_refactoring_tip,
    get_smell_description,
)


class TestSmellCatalog:
    """Test catalog lookups."""

    def test_every_kind_has_guidance(self):
        for kind in SmellKind:
            assert get_refactoring_tip(kind) != GENERIC_TIP
            assert get_smell_description(kind) != GENERIC_DESCRIPTION

    def test_lookup_by_value(self):
        assert get_refactoring_tip("DeepNesting") == get_refactoring_tip(
            SmellKind.DEEP_NESTING
        )
        assert "early returns" in get_refactoring_tip("DeepNesting")

    def test_unknown_kind_falls_back(self):
        assert get_refactoring_tip("NotASmell") == GENERIC_TIP
        assert get_smell_description("NotASmell") == GENERIC_DESCRIPTION
