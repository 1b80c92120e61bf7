"""Complexity and size collectors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import CollectorContext, MetricCollector

if TYPE_CHECKING:
    from ...parsers.base import SyntaxNode

# tree-sitter-cpp node types that open an extra execution path
DECISION_NODE_TYPES = frozenset(
    {
        "if_statement",
        "while_statement",
        "do_statement",
        "for_statement",
        "for_range_loop",
        "case_statement",
        "catch_clause",
    }
)

LOGICAL_OPERATORS = frozenset({"&&", "||", "and", "or"})

FUNCTION_DEFINITION = "function_definition"


class CyclomaticComplexityCollector(MetricCollector):
    """Cyclomatic complexity: 1 + number of decision points.

    Decision points are conditional statements, loops, ``case`` labels,
    ``catch`` clauses and every short-circuit ``&&`` / ``||`` operator. The
    ``?:`` conditional expression does not count.

    Example:
        void f(int a, int b) {
            if (a && b) {        // +1 if, +1 &&
                for (;;) {}      // +1 for
            }
        }
        // complexity = 4
    """

    def __init__(self) -> None:
        self._decisions = 0

    @property
    def name(self) -> str:
        return "cyclomatic_complexity"

    def collect_node(self, node: SyntaxNode, context: CollectorContext, depth: int) -> None:
        if node.type in DECISION_NODE_TYPES:
            self._decisions += 1
        elif node.type == "binary_expression":
            operator = node.child_by_field_name("operator")
            if operator is not None and operator.type in LOGICAL_OPERATORS:
                self._decisions += 1

    def finalize(self, node: SyntaxNode, context: CollectorContext) -> dict[str, Any]:
        return {"cyclomatic_complexity": 1 + self._decisions}

    def reset(self) -> None:
        self._decisions = 0


class MethodCountCollector(MetricCollector):
    """Counts function definitions at or below the unit root.

    On a class this is its inline method count; on a file it counts free and
    member functions alike. Declarations without a body are not counted.
    """

    def __init__(self) -> None:
        self._count = 0

    @property
    def name(self) -> str:
        return "method_count"

    def collect_node(self, node: SyntaxNode, context: CollectorContext, depth: int) -> None:
        if node.type == FUNCTION_DEFINITION:
            self._count += 1

    def finalize(self, node: SyntaxNode, context: CollectorContext) -> dict[str, Any]:
        return {"method_count": self._count}

    def reset(self) -> None:
        self._count = 0
