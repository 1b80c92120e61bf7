"""Analysis orchestrator: source text in, ``AnalysisResult`` out."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from ..config.thresholds import ThresholdConfig
from ..core.content_store import ContentStore
from ..core.exceptions import (
    AnalysisError,
    ParseFailureError,
    ParserUnavailableError,
)
from ..parsers.cpp import CppSyntaxProvider
from .calculator import MetricsCalculator
from .models import AnalysisResult, CodeSmell
from .smells.lexical import LexicalSmellDetector
from .smells.structural import StructuralSmellDetector


class CodeSmellAnalyzer:
    """Runs the syntax tree provider, metrics and both detector families.

    The provider is passed in by the caller and shared across files; the
    analyzer itself keeps no per-file state apart from the content store, so
    one instance can analyze many files concurrently.

    Example:
        provider = CppSyntaxProvider()
        analyzer = CodeSmellAnalyzer(provider)
        result = analyzer.analyze(source, "widget.cpp")
        results = await analyzer.analyze_batch([("a.cpp", a), ("b.cpp", b)])
    """

    def __init__(
        self,
        provider: CppSyntaxProvider,
        thresholds: ThresholdConfig | None = None,
        content_store: ContentStore | None = None,
        calculator: MetricsCalculator | None = None,
    ) -> None:
        self.provider = provider
        self.thresholds = thresholds or ThresholdConfig()
        self.content_store = content_store if content_store is not None else ContentStore()
        self.calculator = calculator or MetricsCalculator()
        self.structural = StructuralSmellDetector(self.calculator, self.thresholds)
        self.lexical = LexicalSmellDetector(self.thresholds)

    def analyze(self, source: str, file_name: str) -> AnalysisResult:
        """Analyze one file.

        Args:
            source: Full file text
            file_name: Name reported on every finding

        Returns:
            AnalysisResult with structural findings first, then lexical ones

        Raises:
            ParserUnavailableError: If the grammar cannot be loaded
            ParseFailureError: If the syntax tree cannot be built (lexical
                detectors are not run as a fallback)
        """
        self.content_store.put(file_name, source)
        self.provider.initialize()

        tree = self.provider.parse(source)
        root = tree.root_node

        metrics = self.calculator.calculate(root, file_name=file_name, source=source)

        smells: list[CodeSmell] = []
        smells.extend(self.structural.detect(root, file_name))
        smells.extend(self.lexical.detect(source, file_name))

        logger.debug(
            f"Analyzed {file_name}: {len(smells)} smells, "
            f"complexity={metrics.cyclomatic_complexity}, loc={metrics.lines_of_code}"
        )
        return AnalysisResult(
            file_name=file_name,
            file_size=_byte_size(source),
            smells=tuple(smells),
            metrics=metrics,
        )

    def analyze_isolated(self, source: str, file_name: str) -> AnalysisResult:
        """Analyze one file, turning per-file failures into a degraded result.

        ``ParserUnavailableError`` still propagates: without a grammar no
        file in the batch can succeed.
        """
        try:
            return self.analyze(source, file_name)
        except ParserUnavailableError:
            raise
        except ParseFailureError as e:
            logger.warning(f"Failed to parse {file_name}: {e}")
            return AnalysisResult.failure(file_name, _byte_size(source), str(e))
        except Exception as e:
            error = AnalysisError(f"Analysis of {file_name} failed: {e}", {"file": file_name})
            logger.warning(str(error))
            return AnalysisResult.failure(file_name, _byte_size(source), str(error))

    async def analyze_batch(
        self, files: Sequence[tuple[str, str]]
    ) -> list[AnalysisResult]:
        """Analyze ``(file_name, source)`` pairs concurrently.

        Results come back in input order. A file that fails to parse or
        crashes a detector yields a ``failed`` result instead of aborting
        the batch.

        Raises:
            ParserUnavailableError: If the grammar cannot be loaded
        """
        if not files:
            return []

        # Surface a missing grammar once, before fanning out
        await asyncio.to_thread(self.provider.initialize)

        tasks = [
            asyncio.to_thread(self.analyze_isolated, source, file_name)
            for file_name, source in files
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        collected: list[AnalysisResult] = []
        for (file_name, source), outcome in zip(files, results, strict=True):
            if isinstance(outcome, ParserUnavailableError):
                logger.error(f"Code parser unavailable, aborting batch: {outcome}")
                raise outcome
            if isinstance(outcome, BaseException):
                logger.warning(f"Unexpected failure analyzing {file_name}: {outcome}")
                collected.append(
                    AnalysisResult.failure(file_name, _byte_size(source), str(outcome))
                )
                continue
            collected.append(outcome)
        return collected

    async def analyze_paths(
        self, paths: Sequence[Path], root: Path | None = None
    ) -> list[AnalysisResult]:
        """Read files from disk and analyze them as one batch.

        File names are reported relative to ``root`` when given. Unreadable
        files appear as failed results.
        """
        slots: list[AnalysisResult | None] = []
        files: list[tuple[str, str]] = []

        for path in paths:
            name = _display_name(path, root)
            try:
                source = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.warning(f"Cannot read {path}: {e}")
                slots.append(AnalysisResult.failure(name, 0, f"Cannot read file: {e}"))
                continue
            slots.append(None)
            files.append((name, source))

        # Fill the readable slots in submission order
        analyzed = iter(await self.analyze_batch(files))
        return [slot if slot is not None else next(analyzed) for slot in slots]

    def get_original_text(self, file_name: str) -> str:
        """Original text of an analyzed file, or the "not available" sentinel."""
        return self.content_store.get_original_text(file_name)


def _byte_size(source: str) -> int:
    return len(source.encode("utf-8", errors="replace"))


def _display_name(path: Path, root: Path | None) -> str:
    if root is not None:
        try:
            return str(path.relative_to(root))
        except ValueError:
            pass
    return str(path)
