"""Base interface for metric collectors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ...parsers.base import SyntaxNode


@dataclass
class CollectorContext:
    """Shared, read-only context for one metrics pass.

    Attributes:
        file_name: File the analyzed unit belongs to (for log messages)
        class_index: Class name -> base class names for every class in the
            file, used to follow inheritance chains across classes
        field_names: Data member names declared by the classes in scope
    """

    file_name: str = "<memory>"
    class_index: dict[str, tuple[str, ...]] = field(default_factory=dict)
    field_names: frozenset[str] = frozenset()


class MetricCollector(ABC):
    """Collects one metric during a single pre-order walk of a unit.

    The calculator calls ``collect_node`` once for every node of the unit
    (with the node's depth relative to the unit root), then ``finalize`` to
    read the metric. ``reset`` prepares the collector for the next unit.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Collector identifier."""

    @abstractmethod
    def collect_node(self, node: SyntaxNode, context: CollectorContext, depth: int) -> None:
        """Process one node."""

    @abstractmethod
    def finalize(self, node: SyntaxNode, context: CollectorContext) -> dict[str, Any]:
        """Return the collected metric(s) for the unit rooted at ``node``."""

    @abstractmethod
    def reset(self) -> None:
        """Clear state for the next unit."""
