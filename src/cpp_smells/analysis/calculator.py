"""Metrics calculator: runs every collector over one unit in a single walk."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from loguru import logger

from ..parsers.base import SyntaxNode, count_lines, node_text, walk_with_depth
from .collectors.base import CollectorContext, MetricCollector
from .collectors.cohesion import CohesionCollector, declared_field_names
from .collectors.complexity import CyclomaticComplexityCollector, MethodCountCollector
from .collectors.coupling import CouplingCollector
from .collectors.inheritance import InheritanceDepthCollector, build_class_index
from .models import CodeMetrics

CollectorFactory = Callable[[], MetricCollector]

DEFAULT_COLLECTORS: tuple[CollectorFactory, ...] = (
    CyclomaticComplexityCollector,
    MethodCountCollector,
    InheritanceDepthCollector,
    CouplingCollector,
    CohesionCollector,
)


class MetricsCalculator:
    """Computes ``CodeMetrics`` for a file root or a function/class sub-tree.

    Collectors are created fresh for every call, so one calculator can be
    shared by threads analysing different files.

    Missing tree shapes never raise: an absent field simply contributes
    nothing, and a node without text reports zero lines.
    """

    def __init__(self, collectors: Sequence[CollectorFactory] = DEFAULT_COLLECTORS) -> None:
        self._collector_factories = tuple(collectors)

    def collect(
        self,
        node: SyntaxNode,
        *,
        file_name: str = "<memory>",
        class_index: dict[str, tuple[str, ...]] | None = None,
        field_names: frozenset[str] | None = None,
    ) -> dict[str, Any]:
        """Run all collectors over ``node`` and merge their raw outputs."""
        context = CollectorContext(
            file_name=file_name,
            class_index=class_index if class_index is not None else build_class_index(node),
            field_names=field_names if field_names is not None else declared_field_names(node),
        )
        collectors = [factory() for factory in self._collector_factories]

        for current, depth in walk_with_depth(node):
            for collector in collectors:
                collector.collect_node(current, context, depth)

        merged: dict[str, Any] = {}
        for collector in collectors:
            merged.update(collector.finalize(node, context))
        return merged

    def calculate(
        self,
        node: SyntaxNode,
        *,
        file_name: str = "<memory>",
        source: str | None = None,
        class_index: dict[str, tuple[str, ...]] | None = None,
        field_names: frozenset[str] | None = None,
    ) -> CodeMetrics:
        """Compute all six metrics for the unit rooted at ``node``.

        Args:
            node: File root or function/class node
            file_name: Used in log messages only
            source: Unit text; defaults to the node's own text
            class_index: Class -> bases map of the whole file, so inheritance
                chains resolve through classes outside ``node``
            field_names: Data members in scope for cohesion

        Returns:
            Immutable metrics for the unit
        """
        raw = self.collect(
            node, file_name=file_name, class_index=class_index, field_names=field_names
        )
        text = source if source is not None else node_text(node)
        if not text and node.text is None:
            logger.debug(f"{file_name}: node {node.type} has no source text, lines=0")

        return CodeMetrics(
            cyclomatic_complexity=raw.get("cyclomatic_complexity", 1),
            lines_of_code=count_lines(text),
            method_count=raw.get("method_count", 0),
            inheritance_depth=raw.get("inheritance_depth", 0),
            coupling_count=raw.get("coupling_count", 0),
            cohesion_score=raw.get("cohesion_score", 1.0),
        )
