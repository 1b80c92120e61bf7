"""Inheritance depth collector and class-index helpers."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from loguru import logger

from ...parsers.base import node_text, walk_tree
from .base import CollectorContext, MetricCollector

if TYPE_CHECKING:
    from ...parsers.base import SyntaxNode

CLASS_NODE_TYPES = frozenset({"class_specifier", "struct_specifier"})

# Children of a base_class_clause that name a base
_BASE_NAME_TYPES = frozenset({"type_identifier", "qualified_identifier", "template_type"})

_TEMPLATE_ARGS = re.compile(r"<.*>", re.DOTALL)


def simple_class_name(text: str) -> str:
    """Strip template arguments and namespace qualifiers.

    Examples:
        >>> simple_class_name("ns::Base<int>")
        'Base'
    """
    text = _TEMPLATE_ARGS.sub("", text).strip()
    return text.rsplit("::", 1)[-1].strip()


def base_class_names(class_node: SyntaxNode) -> tuple[str, ...]:
    """Names of the direct bases listed in a class's base clause."""
    names: list[str] = []
    for child in class_node.children:
        if child.type != "base_class_clause":
            continue
        for base in child.children:
            if base.type in _BASE_NAME_TYPES:
                names.append(simple_class_name(node_text(base)))
    return tuple(names)


def class_name(class_node: SyntaxNode) -> str | None:
    name_node = class_node.child_by_field_name("name")
    if name_node is None:
        return None
    return simple_class_name(node_text(name_node))


def build_class_index(root: SyntaxNode) -> dict[str, tuple[str, ...]]:
    """Map every named class/struct definition under ``root`` to its bases.

    Forward declarations (no body) are skipped. When a name is defined twice
    the first definition wins.
    """
    index: dict[str, tuple[str, ...]] = {}
    for node in walk_tree(root):
        if node.type not in CLASS_NODE_TYPES:
            continue
        if node.child_by_field_name("body") is None:
            continue
        name = class_name(node)
        if name and name not in index:
            index[name] = base_class_names(node)
    return index


def inheritance_depth(
    bases: tuple[str, ...], class_index: dict[str, tuple[str, ...]]
) -> int:
    """Length of the longest base-class chain starting from ``bases``.

    Bases defined in the same file are followed transitively; a base that
    is not in ``class_index`` ends its chain after one step. Cyclic
    hierarchies (only possible in malformed input) stop at the repeat.
    """

    def depth_of(names: tuple[str, ...], seen: frozenset[str]) -> int:
        deepest = 0
        for name in names:
            if name in seen:
                continue
            parents = class_index.get(name, ())
            deepest = max(deepest, 1 + depth_of(parents, seen | {name}))
        return deepest

    return depth_of(bases, frozenset())


class InheritanceDepthCollector(MetricCollector):
    """Maximum inheritance depth over the classes in a unit.

    On a class node this is that class's own depth; on a file it is the
    deepest class in the file.
    """

    def __init__(self) -> None:
        self._max_depth = 0

    @property
    def name(self) -> str:
        return "inheritance_depth"

    def collect_node(self, node: SyntaxNode, context: CollectorContext, depth: int) -> None:
        if node.type not in CLASS_NODE_TYPES:
            return
        bases = base_class_names(node)
        if not bases:
            return

        name = class_name(node)
        seen_index = dict(context.class_index)
        if name:
            # The class itself must not be followed back into
            seen_index.pop(name, None)
        class_depth = inheritance_depth(bases, seen_index)
        if class_depth > self._max_depth:
            logger.debug(
                f"{context.file_name}: class {name or '<anonymous>'} "
                f"has inheritance depth {class_depth}"
            )
            self._max_depth = class_depth

    def finalize(self, node: SyntaxNode, context: CollectorContext) -> dict[str, Any]:
        return {"inheritance_depth": self._max_depth}

    def reset(self) -> None:
        self._max_depth = 0
