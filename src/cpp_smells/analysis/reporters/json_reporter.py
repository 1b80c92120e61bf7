"""JSON export of analysis results."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import orjson

from ... import __version__
from ..models import AnalysisResult, AnalysisStats


def build_report(
    results: Sequence[AnalysisResult], stats: AnalysisStats
) -> dict[str, Any]:
    """Assemble the exportable report document."""
    return {
        "tool": "cpp-smells",
        "version": __version__,
        "stats": stats.to_dict(),
        "files": [result.to_dict() for result in results],
    }


def render_json(
    results: Sequence[AnalysisResult],
    stats: AnalysisStats,
    output_path: Path | None = None,
) -> str:
    """Render results and stats as formatted JSON.

    Args:
        results: Per-file results
        stats: Corpus statistics for the same batch
        output_path: If provided, write to this file

    Returns:
        JSON string
    """
    json_str = orjson.dumps(
        build_report(results, stats), option=orjson.OPT_INDENT_2
    ).decode("utf-8")

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_str, encoding="utf-8")

    return json_str
