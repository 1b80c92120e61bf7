"""Smell detectors.

Two families with different precision/recall tradeoffs live side by side:

    - structural: walks the tree-sitter syntax tree (long functions,
      large classes) and reuses the metrics calculator
    - lexical: pattern matching over raw text (parameter lists, globals,
      duplicates, primitive obsession, intimacy, conditions, nesting)
"""

from .catalog import get_refactoring_tip, get_smell_description
from .lexical import LEXICAL_DETECTORS, LexicalSmellDetector
from .structural import StructuralSmellDetector

__all__ = [
    "LEXICAL_DETECTORS",
    "LexicalSmellDetector",
    "StructuralSmellDetector",
    "get_refactoring_tip",
    "get_smell_description",
]
