"""Corpus-level aggregation of per-file analysis results."""

from __future__ import annotations

from collections.abc import Sequence

from .models import (
    AnalysisResult,
    AnalysisStats,
    FileSmellCount,
    MetricAverages,
    SmellKind,
)

DEFAULT_WORST_FILES = 5


def _average_metrics(results: Sequence[AnalysisResult]) -> MetricAverages:
    """Per-field mean over every file in the batch (zeros for an empty batch).

    Failed files take part with their zeroed metrics.
    """
    if not results:
        return MetricAverages()

    count = len(results)
    return MetricAverages(
        cyclomatic_complexity=sum(r.metrics.cyclomatic_complexity for r in results) / count,
        lines_of_code=sum(r.metrics.lines_of_code for r in results) / count,
        method_count=sum(r.metrics.method_count for r in results) / count,
        inheritance_depth=sum(r.metrics.inheritance_depth for r in results) / count,
        coupling_count=sum(r.metrics.coupling_count for r in results) / count,
        cohesion_score=sum(r.metrics.cohesion_score for r in results) / count,
    )


def calculate_stats(
    results: Sequence[AnalysisResult], top_n: int = DEFAULT_WORST_FILES
) -> AnalysisStats:
    """Reduce a batch of results to corpus statistics.

    Pure function: no I/O and no state kept between batches.

    Args:
        results: Per-file results in submission order
        top_n: Number of files to keep in ``worst_files``

    Returns:
        AnalysisStats where every smell kind is present (zero-filled), per-file
        counts sum to ``total_smells``, and ``worst_files`` is sorted by
        descending smell count with ties kept in submission order
    """
    smells_by_type = {kind: 0 for kind in SmellKind}
    smells_by_file: dict[str, int] = {}
    failed_files: list[str] = []

    for result in results:
        # A name submitted twice accumulates so the per-file sum stays exact
        smells_by_file[result.file_name] = (
            smells_by_file.get(result.file_name, 0) + result.total_smells
        )
        if result.failed:
            failed_files.append(result.file_name)
        for smell in result.smells:
            smells_by_type[smell.kind] += 1

    # sorted() is stable, so equal counts keep insertion order
    ranked = sorted(smells_by_file.items(), key=lambda item: item[1], reverse=True)
    worst_files = [
        FileSmellCount(file_name=name, smell_count=count) for name, count in ranked[:top_n]
    ]

    return AnalysisStats(
        total_files=len(results),
        total_smells=sum(r.total_smells for r in results),
        smells_by_type=smells_by_type,
        smells_by_file=smells_by_file,
        worst_files=worst_files,
        average_metrics=_average_metrics(results),
        failed_files=failed_files,
    )
