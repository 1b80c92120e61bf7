"""C/C++ syntax tree provider backed by tree-sitter."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from loguru import logger

from ..config.defaults import DEFAULT_GRAMMAR
from ..core.exceptions import ParseFailureError, ParserUnavailableError

ParserLoader = Callable[[str], Any]


def _load_language_pack_parser(language: str) -> Any:
    from tree_sitter_language_pack import get_parser

    return get_parser(language)


class CppSyntaxProvider:
    """Owns one reusable tree-sitter parser for the C++ grammar.

    The provider is constructed explicitly and handed to the analyzer, so
    tests can build isolated instances or inject a fake ``loader``.

    ``initialize()`` is idempotent and safe under concurrent first use: one
    caller loads the grammar while the others wait on the lock and then see
    the same outcome. A failed load is remembered and re-raised to every
    caller until the host calls ``reset()``.
    """

    def __init__(
        self, language: str = DEFAULT_GRAMMAR, loader: ParserLoader | None = None
    ) -> None:
        self.language = language
        self._loader = loader or _load_language_pack_parser
        self._parser: Any = None
        self._init_error: ParserUnavailableError | None = None
        self._initialized = False
        self._lock = threading.Lock()
        # One tree-sitter parser object is not safe to drive from two threads
        self._parse_lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Load the grammar once.

        Raises:
            ParserUnavailableError: If the grammar cannot be loaded (now or
                by an earlier attempt that has not been reset)
        """
        if self._initialized:
            return

        with self._lock:
            if self._initialized:
                return
            if self._init_error is not None:
                raise self._init_error

            try:
                parser = self._loader(self.language)
            except Exception as e:
                logger.error(f"Failed to load tree-sitter grammar '{self.language}': {e}")
                self._init_error = ParserUnavailableError(
                    f"Failed to initialize code parser for '{self.language}'. "
                    "Please ensure tree-sitter-language-pack is installed.",
                    {"language": self.language, "cause": str(e)},
                )
                raise self._init_error from e

            self._parser = parser
            self._initialized = True
            logger.debug(f"Tree-sitter parser initialized for '{self.language}'")

    def reset(self) -> None:
        """Forget the parser and any remembered failure so the next
        ``initialize()`` retries the load."""
        with self._lock:
            self._parser = None
            self._init_error = None
            self._initialized = False

    def parse(self, source: str) -> Any:
        """Parse source text into a syntax tree.

        Args:
            source: Source text

        Returns:
            tree-sitter ``Tree`` whose ``root_node`` satisfies ``SyntaxNode``

        Raises:
            ParserUnavailableError: If ``initialize()`` has not succeeded
            ParseFailureError: If tree construction fails
        """
        if not self._initialized or self._parser is None:
            raise ParserUnavailableError(
                "Code parser not initialized. Call initialize() first.",
                {"language": self.language},
            )

        try:
            with self._parse_lock:
                tree = self._parser.parse(source.encode("utf-8"))
        except Exception as e:
            raise ParseFailureError(f"Tree-sitter parsing failed: {e}") from e

        if tree is None or tree.root_node is None:
            raise ParseFailureError("Tree-sitter returned no syntax tree")
        return tree
