"""Syntax tree provider and generic node helpers."""

from .base import SyntaxNode, walk_tree
from .cpp import CppSyntaxProvider

__all__ = ["CppSyntaxProvider", "SyntaxNode", "walk_tree"]
