"""Coupling collector: distinct external symbols a unit depends on.

Coupling is approximated from usage rather than includes: every qualified
name (``ns::thing``), member access (``obj.x`` / ``ptr->x``) and call
(``helper()``) contributes its leading symbol. References rooted in the
standard library namespace do not count, and neither does ``this``.

Example:
    std::vector<int> v;     // not counted (std)
    config::load();         // config
    engine->start();        // engine
    engine->stop();         // engine (already counted)
    log_line("x");          // log_line

    // coupling = 3
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...parsers.base import node_text
from .base import CollectorContext, MetricCollector

if TYPE_CHECKING:
    from ...parsers.base import SyntaxNode

REFERENCE_NODE_TYPES = frozenset(
    {"qualified_identifier", "field_expression", "call_expression"}
)

# Leaf node types whose text is a symbol root
_ROOT_NODE_TYPES = frozenset(
    {"identifier", "namespace_identifier", "type_identifier", "field_identifier", "this"}
)

# Field names followed, in order, to reach the leftmost symbol of a reference
_ROOT_FIELDS = ("scope", "argument", "function", "name")

STDLIB_NAMESPACES = frozenset({"std"})

_EXCLUDED_ROOTS = STDLIB_NAMESPACES | {"this"}


def is_stdlib_reference(root: str) -> bool:
    """Check if a symbol root is the C++ standard library namespace.

    Examples:
        >>> is_stdlib_reference("std")
        True

        >>> is_stdlib_reference("boost")
        False
    """
    return root in STDLIB_NAMESPACES


def symbol_root(node: SyntaxNode) -> str | None:
    """Leftmost symbol of a qualified name, member access or call.

    ``a::b::c`` -> ``a``; ``obj.field`` -> ``obj``; ``p->q->r()`` -> ``p``.
    Returns None for references without a named root, such as calling the
    result of a parenthesized expression.
    """
    current: SyntaxNode | None = node
    while current is not None:
        if current.type in _ROOT_NODE_TYPES:
            return node_text(current)

        next_node = None
        for field_name in _ROOT_FIELDS:
            next_node = current.child_by_field_name(field_name)
            if next_node is not None:
                break
        if next_node is None and current.children:
            next_node = current.children[0]
        current = next_node
    return None


def _span(node: SyntaxNode) -> tuple[str, tuple[int, int], tuple[int, int]]:
    return (node.type, node.start_point, node.end_point)


class CouplingCollector(MetricCollector):
    """Counts distinct non-stdlib symbol roots referenced by a unit."""

    def __init__(self) -> None:
        self._roots: set[str] = set()
        # ``a::b::c`` nests ``b::c`` under the outer name; only the outer counts
        self._nested_names: set[tuple[str, tuple[int, int], tuple[int, int]]] = set()

    @property
    def name(self) -> str:
        return "coupling_count"

    def collect_node(self, node: SyntaxNode, context: CollectorContext, depth: int) -> None:
        if node.type not in REFERENCE_NODE_TYPES:
            return
        if node.type == "qualified_identifier":
            if _span(node) in self._nested_names:
                return
            inner = node.child_by_field_name("name")
            while inner is not None and inner.type == "qualified_identifier":
                self._nested_names.add(_span(inner))
                inner = inner.child_by_field_name("name")

        root = symbol_root(node)
        if root and root not in _EXCLUDED_ROOTS:
            self._roots.add(root)

    def finalize(self, node: SyntaxNode, context: CollectorContext) -> dict[str, Any]:
        return {"coupling_count": len(self._roots)}

    def reset(self) -> None:
        self._roots.clear()
        self._nested_names.clear()
