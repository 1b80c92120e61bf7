"""Unit tests for the metrics calculator."""

import pytest

from cpp_smells.analysis.calculator import MetricsCalculator
from cpp_smells.analysis.collectors.complexity import CyclomaticComplexityCollector
from cpp_smells.analysis.models import CodeMetrics
from cpp_smells.parsers.base import walk_tree

HIERARCHY = """\
class Base {
public:
    virtual ~Base() {}
};

class Mid : public Base {};

class Leaf : public Mid {
    int count;
public:
    void inc() { count++; }
    int get() const { return count; }
};
"""


def find_class(root, name):
    for node in walk_tree(root):
        if node.type == "class_specifier":
            name_node = node.child_by_field_name("name")
            if name_node is not None and name_node.text.decode() == name:
                return node
    raise AssertionError(f"class {name} not found")


class TestMetricsCalculator:
    """Test MetricsCalculator on files and sub-trees."""

    def test_file_metrics(self, parse_cpp):
        root = parse_cpp(HIERARCHY)

        metrics = MetricsCalculator().calculate(root, source=HIERARCHY)

        assert metrics.cyclomatic_complexity == 1
        assert metrics.method_count == 3
        assert metrics.inheritance_depth == 2
        assert metrics.lines_of_code == HIERARCHY.count("\n") + 1
        # ~Base shares nothing with inc/get; inc and get share count
        assert metrics.cohesion_score == pytest.approx(1 / 3)

    def test_class_metrics_resolve_bases_through_file_index(self, parse_cpp):
        root = parse_cpp(HIERARCHY)
        leaf = find_class(root, "Leaf")
        calculator = MetricsCalculator()

        isolated = calculator.calculate(leaf)
        with_index = calculator.calculate(
            leaf, class_index={"Base": (), "Mid": ("Base",), "Leaf": ("Mid",)}
        )

        assert isolated.inheritance_depth == 1
        assert with_index.inheritance_depth == 2
        assert with_index.method_count == 2
        assert with_index.cohesion_score == 1.0

    def test_empty_source(self, parse_cpp):
        metrics = MetricsCalculator().calculate(parse_cpp(""), source="")

        assert metrics == CodeMetrics(
            cyclomatic_complexity=1,
            lines_of_code=0,
            method_count=0,
            inheritance_depth=0,
            coupling_count=0,
            cohesion_score=1.0,
        )

    def test_complexity_is_at_least_one(self, parse_cpp):
        for source in ["", "int x;", "void f() {}", "class A {};"]:
            metrics = MetricsCalculator().calculate(parse_cpp(source))
            assert metrics.cyclomatic_complexity >= 1

    def test_missing_collectors_fall_back_to_neutral_values(self, parse_cpp):
        """A calculator without some collectors reports their neutral values."""
        calculator = MetricsCalculator(collectors=(CyclomaticComplexityCollector,))
        metrics = calculator.calculate(parse_cpp("void f() { if (1) {} }"))

        assert metrics.cyclomatic_complexity == 2
        assert metrics.method_count == 0
        assert metrics.cohesion_score == 1.0

    def test_calculator_is_reusable(self, parse_cpp):
        calculator = MetricsCalculator()
        root = parse_cpp(HIERARCHY)
        assert calculator.calculate(root) == calculator.calculate(root)
