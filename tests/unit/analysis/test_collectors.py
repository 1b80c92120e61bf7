"""Unit tests for metric collectors."""

import pytest

from cpp_smells.analysis.collectors import (
    CohesionCollector,
    CollectorContext,
    CouplingCollector,
    CyclomaticComplexityCollector,
    InheritanceDepthCollector,
    MethodCountCollector,
    build_class_index,
    cohesion_score,
    declared_field_names,
    inheritance_depth,
    is_stdlib_reference,
    simple_class_name,
    symbol_root,
)
from cpp_smells.parsers.base import walk_tree, walk_with_depth


class MockNode:
    """Mock tree-sitter node for testing."""

    def __init__(self, node_type: str, text: str = "", children=None, fields=None):
        self.type = node_type
        self._text = text.encode("utf-8")
        self.children = children or []
        self.fields = fields or {}
        self.start_point = (0, 0)
        self.end_point = (0, len(text))

    @property
    def text(self) -> bytes:
        """Return node text as bytes."""
        return self._text

    def child_by_field_name(self, field: str):
        """Mock field-based child lookup."""
        return self.fields.get(field)


def run_collector(collector, root, context=None):
    context = context or CollectorContext()
    for node, depth in walk_with_depth(root):
        collector.collect_node(node, context, depth)
    return collector.finalize(root, context)


def first_of_type(root, node_type):
    return next(node for node in walk_tree(root) if node.type == node_type)


class TestCyclomaticComplexityCollector:
    """Test CyclomaticComplexityCollector."""

    def test_empty_unit_has_base_complexity(self):
        result = run_collector(CyclomaticComplexityCollector(), MockNode("translation_unit"))
        assert result["cyclomatic_complexity"] == 1

    def test_decision_nodes_and_logical_operators(self):
        logical = MockNode("binary_expression", fields={"operator": MockNode("&&")})
        relational = MockNode("binary_expression", fields={"operator": MockNode("<")})
        root = MockNode(
            "compound_statement",
            children=[
                MockNode("if_statement", children=[logical]),
                MockNode("for_statement", children=[relational]),
                MockNode("case_statement"),
                MockNode("catch_clause"),
            ],
        )

        result = run_collector(CyclomaticComplexityCollector(), root)

        # if + && + for + case + catch
        assert result["cyclomatic_complexity"] == 6

    def test_reset(self):
        collector = CyclomaticComplexityCollector()
        run_collector(collector, MockNode("if_statement"))
        collector.reset()
        assert collector.finalize(MockNode("x"), CollectorContext()) == {
            "cyclomatic_complexity": 1
        }

    def test_real_function(self, parse_cpp):
        root = parse_cpp(
            """
int f(int a, int b) {
    if (a && b) { return 1; }
    for (int i = 0; i < a; ++i) {}
    while (b > 0) { b--; }
    return 0;
}
"""
        )
        result = run_collector(CyclomaticComplexityCollector(), root)
        assert result["cyclomatic_complexity"] == 5

    def test_do_loop_counts_but_ternary_does_not(self, parse_cpp):
        root = parse_cpp("int g(int a) { do { a--; } while (a); return a ? 1 : 2; }\n")
        result = run_collector(CyclomaticComplexityCollector(), root)
        # base + do; the conditional expression is not a decision point
        assert result["cyclomatic_complexity"] == 2

    def test_rvalue_reference_is_not_a_decision(self, parse_cpp):
        root = parse_cpp("void take(int&& value) { }\n")
        result = run_collector(CyclomaticComplexityCollector(), root)
        assert result["cyclomatic_complexity"] == 1


class TestMethodCountCollector:
    """Test MethodCountCollector."""

    def test_counts_definitions_not_declarations(self, parse_cpp):
        root = parse_cpp(
            """
class Shape {
public:
    double area() const { return 0.0; }
    double perimeter() const;
};
void helper() {}
"""
        )
        result = run_collector(MethodCountCollector(), root)
        assert result["method_count"] == 2


class TestInheritanceHelpers:
    """Test class-index helpers and depth resolution."""

    def test_simple_class_name(self):
        assert simple_class_name("ns::Base<int>") == "Base"
        assert simple_class_name("Widget") == "Widget"

    def test_inheritance_depth_follows_known_bases(self):
        index = {"Base": (), "Mid": ("Base",), "Leaf": ("Mid",)}
        assert inheritance_depth(("Mid",), index) == 2
        assert inheritance_depth((), index) == 0

    def test_unknown_base_counts_one_level(self):
        assert inheritance_depth(("QObject",), {}) == 1

    def test_cycle_terminates(self):
        index = {"A": ("B",), "B": ("A",)}
        assert inheritance_depth(("A",), index) == 2

    def test_multiple_inheritance_takes_longest_chain(self):
        index = {"Base": (), "Mid": ("Base",)}
        assert inheritance_depth(("Mid", "Mixin"), index) == 2

    def test_build_class_index_skips_forward_declarations(self, parse_cpp):
        root = parse_cpp(
            """
class Later;
class Base {};
class Derived : public Base, private ns::Helper<int> {};
"""
        )
        index = build_class_index(root)
        assert index == {"Base": (), "Derived": ("Base", "Helper")}


class TestInheritanceDepthCollector:
    """Test InheritanceDepthCollector."""

    def test_no_classes(self):
        result = run_collector(InheritanceDepthCollector(), MockNode("translation_unit"))
        assert result["inheritance_depth"] == 0

    def test_file_reports_deepest_class(self, parse_cpp):
        root = parse_cpp(
            """
class Base { };
class Mid : public Base { };
class Leaf : public Mid { };
"""
        )
        context = CollectorContext(class_index=build_class_index(root))
        result = run_collector(InheritanceDepthCollector(), root, context)
        assert result["inheritance_depth"] == 2


class TestCouplingCollector:
    """Test CouplingCollector."""

    def test_is_stdlib_reference(self):
        assert is_stdlib_reference("std") is True
        assert is_stdlib_reference("boost") is False

    def test_symbol_root_of_mock_qualified_name(self):
        scope = MockNode("namespace_identifier", "config")
        node = MockNode(
            "qualified_identifier",
            "config::load",
            fields={"scope": scope, "name": MockNode("identifier", "load")},
        )
        assert symbol_root(node) == "config"

    def test_counts_distinct_external_roots(self, parse_cpp):
        root = parse_cpp(
            """
void run() {
    std::vector<int> values;
    config::load();
    engine->start();
    engine->stop();
    log_line("x");
}
"""
        )
        result = run_collector(CouplingCollector(), root)

        assert result == {"coupling_count": 3}

    def test_nested_qualified_name_counts_outer_root_only(self, parse_cpp):
        nested = parse_cpp("void wait() { std::chrono::seconds delay(1); }\n")
        flat = parse_cpp("void wait() { std::seconds delay(1); }\n")
        # std::chrono::seconds adds nothing beyond std::seconds
        assert run_collector(CouplingCollector(), nested) == run_collector(
            CouplingCollector(), flat
        )

    def test_this_is_not_external(self, parse_cpp):
        root = parse_cpp("struct S { int n; void bump() { this->n++; } };\n")
        result = run_collector(CouplingCollector(), root)
        assert result["coupling_count"] == 0


class TestCohesion:
    """Test cohesion scoring and CohesionCollector."""

    def test_fewer_than_two_methods_is_fully_cohesive(self):
        assert cohesion_score([]) == 1.0
        assert cohesion_score([{"a"}]) == 1.0
        assert cohesion_score([set()]) == 1.0

    def test_pair_fraction(self):
        assert cohesion_score([{"a"}, {"a", "b"}, {"c"}]) == pytest.approx(1 / 3)
        assert cohesion_score([{"a"}, {"b"}]) == 0.0
        assert cohesion_score([{"a"}, {"a"}]) == 1.0

    def test_declared_field_names(self, parse_cpp):
        root = parse_cpp(
            """
class Account {
    int balance;
    char* owner, *bank;
    int history[8];
    void deposit(int amount);
};
"""
        )
        assert declared_field_names(root) == frozenset(
            {"balance", "owner", "bank", "history"}
        )

    def test_collector_on_class(self, parse_cpp):
        root = parse_cpp(
            """
class Counter {
    int count;
    int step;
public:
    void inc() { count += step; }
    int get() const { return count; }
    void log() const { }
};
"""
        )
        context = CollectorContext(field_names=declared_field_names(root))
        result = run_collector(CohesionCollector(), root, context)

        # (inc, get) share count; log shares nothing
        assert result["cohesion_score"] == pytest.approx(1 / 3)

    def test_collector_counts_explicit_member_access(self, parse_cpp):
        root = parse_cpp(
            """
struct Point {
    void move() { this->x = 1; }
    int read() { return this->x; }
};
"""
        )
        result = run_collector(CohesionCollector(), root)
        assert result["cohesion_score"] == 1.0

    def test_score_stays_in_unit_interval(self, parse_cpp):
        root = parse_cpp("class A { void a() {} void b() {} void c() {} };\n")
        result = run_collector(CohesionCollector(), root)
        assert 0.0 <= result["cohesion_score"] <= 1.0
