"""Tree-based smell detectors: long functions and large classes."""

from __future__ import annotations

from loguru import logger

from ...config.thresholds import ThresholdConfig
from ...parsers.base import SyntaxNode, count_lines, node_text, start_line, walk_tree
from ..calculator import MetricsCalculator
from ..collectors.cohesion import declared_field_names
from ..collectors.complexity import FUNCTION_DEFINITION
from ..collectors.inheritance import CLASS_NODE_TYPES, build_class_index, class_name
from ..models import CodeMetrics, CodeSmell, Severity, SmellKind
from .base import new_smell, truncate_snippet

# Declarator node types that carry a function's name
_NAME_NODE_TYPES = frozenset(
    {
        "identifier",
        "field_identifier",
        "qualified_identifier",
        "destructor_name",
        "operator_name",
        "template_function",
    }
)


def function_name(node: SyntaxNode) -> str:
    """Name of a function definition, unwrapping pointer/reference declarators."""
    declarator = node.child_by_field_name("declarator")
    current = declarator
    while current is not None:
        if current.type in _NAME_NODE_TYPES:
            return node_text(current)
        current = current.child_by_field_name("declarator")
    return node_text(declarator) or "anonymous"


def _most_severe(*severities: Severity | None) -> Severity | None:
    present = [s for s in severities if s is not None]
    if not present:
        return None
    return max(present, key=lambda s: s.rank)


class StructuralSmellDetector:
    """Detects long functions and large classes from a syntax tree."""

    def __init__(
        self,
        calculator: MetricsCalculator | None = None,
        thresholds: ThresholdConfig | None = None,
    ) -> None:
        self.calculator = calculator or MetricsCalculator()
        self.thresholds = thresholds or ThresholdConfig()

    def detect(self, root: SyntaxNode, file_name: str) -> list[CodeSmell]:
        """Run both structural detectors, long functions first."""
        class_index = build_class_index(root)
        smells = self.detect_long_functions(root, file_name)
        smells.extend(self.detect_large_classes(root, file_name, class_index))
        return smells

    def detect_long_functions(self, root: SyntaxNode, file_name: str) -> list[CodeSmell]:
        """Flag function definitions whose body exceeds the long-function band.

        The attached metrics describe the function alone: its own complexity
        and coupling, the body line count, one method, no inheritance and a
        cohesion of 1.
        """
        smells: list[CodeSmell] = []
        bands = self.thresholds.long_function

        for node in walk_tree(root):
            if node.type != FUNCTION_DEFINITION:
                continue
            body = node.child_by_field_name("body")
            if body is None:
                logger.debug(f"{file_name}: function at line {start_line(node)} has no body")
                continue

            body_lines = count_lines(node_text(body))
            severity = bands.severity_for(body_lines)
            if severity is None:
                continue

            name = function_name(node)
            raw = self.calculator.collect(
                node, file_name=file_name, class_index={}, field_names=frozenset()
            )
            metrics = CodeMetrics(
                cyclomatic_complexity=raw.get("cyclomatic_complexity", 1),
                lines_of_code=body_lines,
                method_count=1,
                inheritance_depth=0,
                coupling_count=raw.get("coupling_count", 0),
                cohesion_score=1.0,
            )
            line = start_line(node)
            smells.append(
                new_smell(
                    SmellKind.LONG_FUNCTION,
                    file_name=file_name,
                    line_number=line,
                    end_line_number=line + body_lines,
                    code_snippet=truncate_snippet(
                        node_text(node), self.thresholds.snippet_max_chars
                    ),
                    entity_name=name,
                    description=f'Function "{name}" is too long ({body_lines} lines)',
                    severity=severity,
                    metrics=metrics,
                )
            )
        return smells

    def detect_large_classes(
        self,
        root: SyntaxNode,
        file_name: str,
        class_index: dict[str, tuple[str, ...]] | None = None,
    ) -> list[CodeSmell]:
        """Flag classes exceeding the line or method-count band.

        The more severe of the two bands decides the finding's severity.
        """
        smells: list[CodeSmell] = []
        if class_index is None:
            class_index = build_class_index(root)

        for node in walk_tree(root):
            if node.type not in CLASS_NODE_TYPES:
                continue
            body = node.child_by_field_name("body")
            if body is None:
                continue

            body_text = node_text(body)
            metrics = self.calculator.calculate(
                node,
                file_name=file_name,
                source=body_text,
                class_index=class_index,
                field_names=declared_field_names(node),
            )
            severity = _most_severe(
                self.thresholds.large_class_lines.severity_for(metrics.lines_of_code),
                self.thresholds.large_class_methods.severity_for(metrics.method_count),
            )
            if severity is None:
                continue

            name = class_name(node) or "anonymous"
            smells.append(
                new_smell(
                    SmellKind.LARGE_CLASS,
                    file_name=file_name,
                    line_number=start_line(node),
                    code_snippet=f"{name} {{ ... }}",
                    entity_name=name,
                    description=(
                        f'Class "{name}" is too large ({metrics.lines_of_code} lines, '
                        f"{metrics.method_count} methods)"
                    ),
                    severity=severity,
                    metrics=metrics,
                )
            )
        return smells
