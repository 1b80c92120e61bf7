"""Metric collector implementations.

Each collector observes every node of one unit during a single shared
pre-order walk and reports its metric on ``finalize``.

Example:
    from cpp_smells.analysis.collectors import MetricCollector, CollectorContext

    class StatementCounter(MetricCollector):
        @property
        def name(self) -> str:
            return "statement_count"

        def collect_node(self, node, context, depth):
            ...

        def finalize(self, node, context):
            return {"statement_count": 42}

        def reset(self):
            ...
"""

from .base import CollectorContext, MetricCollector
from .cohesion import CohesionCollector, cohesion_score, declared_field_names
from .complexity import CyclomaticComplexityCollector, MethodCountCollector
from .coupling import CouplingCollector, is_stdlib_reference, symbol_root
from .inheritance import (
    InheritanceDepthCollector,
    build_class_index,
    inheritance_depth,
    simple_class_name,
)

__all__ = [
    "CollectorContext",
    "MetricCollector",
    "CyclomaticComplexityCollector",
    "MethodCountCollector",
    "InheritanceDepthCollector",
    "CouplingCollector",
    "CohesionCollector",
    "build_class_index",
    "cohesion_score",
    "declared_field_names",
    "inheritance_depth",
    "is_stdlib_reference",
    "simple_class_name",
    "symbol_root",
]
