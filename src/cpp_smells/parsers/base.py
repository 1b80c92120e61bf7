"""Generic syntax-node abstraction and traversal helpers.

Metric collectors and structural detectors only rely on the small surface
described by ``SyntaxNode``. tree-sitter nodes satisfy it as-is, and tests can
substitute plain fake objects.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class SyntaxNode(Protocol):
    """Node of a concrete syntax tree."""

    @property
    def type(self) -> str: ...

    @property
    def children(self) -> Sequence[SyntaxNode]: ...

    @property
    def text(self) -> bytes | None: ...

    @property
    def start_point(self) -> tuple[int, int]: ...

    @property
    def end_point(self) -> tuple[int, int]: ...

    def child_by_field_name(self, name: str) -> SyntaxNode | None: ...


def walk_tree(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Pre-order traversal yielding every node exactly once.

    Uses an explicit stack so deeply nested sources cannot hit the
    recursion limit.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        # Reverse so the leftmost child is visited first
        stack.extend(reversed(current.children))


def walk_with_depth(node: SyntaxNode) -> Iterator[tuple[SyntaxNode, int]]:
    """Pre-order traversal yielding ``(node, depth)`` pairs (root depth 0)."""
    stack = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        yield current, depth
        stack.extend((child, depth + 1) for child in reversed(current.children))


def node_text(node: SyntaxNode | None) -> str:
    """Decoded source text of a node ("" for a missing node)."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def start_line(node: SyntaxNode) -> int:
    """1-based line on which the node starts."""
    return node.start_point[0] + 1


def count_lines(text: str) -> int:
    """Number of newline-delimited lines; 0 for empty text."""
    if not text:
        return 0
    return text.count("\n") + 1
