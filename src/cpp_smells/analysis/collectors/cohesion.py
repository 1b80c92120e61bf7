"""Cohesion collector: inverted Lack of Cohesion of Methods (LCOM).

For each function definition in the unit we record the set of instance
fields it touches. Two methods are *connected* when those sets intersect.

    cohesion = connected pairs / total pairs

A unit with fewer than two methods has no pairs that could disagree and is
scored 1.0.

Field accesses are recognised two ways:
    - explicit member access: ``this->count``, ``other.count``
    - bare identifiers matching a data member declared in the classes in
      scope (``count++`` inside a member function)
"""

from __future__ import annotations

from itertools import combinations
from typing import TYPE_CHECKING, Any

from ...parsers.base import node_text, walk_tree
from .base import CollectorContext, MetricCollector
from .complexity import FUNCTION_DEFINITION
from .inheritance import CLASS_NODE_TYPES

if TYPE_CHECKING:
    from ...parsers.base import SyntaxNode

_DECLARATOR_WRAPPERS = frozenset(
    {
        "pointer_declarator",
        "reference_declarator",
        "array_declarator",
        "init_declarator",
        "bitfield_clause",
    }
)


def _declared_member_name(declarator: SyntaxNode | None) -> str | None:
    """Unwrap pointer/array/reference declarators down to the member name.

    Returns None for method prototypes (``function_declarator``).
    """
    current = declarator
    while current is not None:
        if current.type == "field_identifier":
            return node_text(current)
        if current.type == "function_declarator":
            return None
        if current.type not in _DECLARATOR_WRAPPERS:
            return None
        current = current.child_by_field_name("declarator")
    return None


def declared_field_names(root: SyntaxNode) -> frozenset[str]:
    """Data member names declared in any class/struct body under ``root``."""
    names: set[str] = set()
    for node in walk_tree(root):
        if node.type not in CLASS_NODE_TYPES:
            continue
        body = node.child_by_field_name("body")
        if body is None:
            continue
        for member in body.children:
            if member.type != "field_declaration":
                continue
            # ``int a, *b;`` carries one declarator child per member
            for child in member.children:
                if child.type == "field_identifier" or child.type in _DECLARATOR_WRAPPERS:
                    name = _declared_member_name(child)
                    if name:
                        names.add(name)
    return frozenset(names)


def cohesion_score(field_sets: list[set[str]]) -> float:
    """Fraction of method pairs sharing at least one field (1.0 below 2 methods)."""
    if len(field_sets) < 2:
        return 1.0
    pairs = 0
    connected = 0
    for first, second in combinations(field_sets, 2):
        pairs += 1
        if first & second:
            connected += 1
    return connected / pairs


class CohesionCollector(MetricCollector):
    """Collects per-method field accesses during the shared walk.

    Open function definitions are tracked on a stack keyed by depth, so a
    field access is attributed to the innermost enclosing method only.
    """

    def __init__(self) -> None:
        self._field_sets: list[set[str]] = []
        self._open: list[tuple[int, int]] = []  # (depth, index into _field_sets)

    @property
    def name(self) -> str:
        return "cohesion_score"

    def collect_node(self, node: SyntaxNode, context: CollectorContext, depth: int) -> None:
        # Pre-order: any node at or above an open method's depth has left it
        while self._open and depth <= self._open[-1][0]:
            self._open.pop()

        if node.type == FUNCTION_DEFINITION:
            self._field_sets.append(set())
            self._open.append((depth, len(self._field_sets) - 1))
            return

        if not self._open:
            return

        accessed = self._field_sets[self._open[-1][1]]
        if node.type == "field_expression":
            member = node.child_by_field_name("field")
            if member is not None:
                accessed.add(node_text(member))
        elif node.type == "identifier" and context.field_names:
            text = node_text(node)
            if text in context.field_names:
                accessed.add(text)

    def finalize(self, node: SyntaxNode, context: CollectorContext) -> dict[str, Any]:
        return {"cohesion_score": cohesion_score(self._field_sets)}

    def reset(self) -> None:
        self._field_sets.clear()
        self._open.clear()
