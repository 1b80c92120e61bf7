"""Analyze command for cpp-smells CLI."""

import asyncio
from dataclasses import replace
from pathlib import Path

import typer
from loguru import logger

from ...analysis.aggregate import calculate_stats
from ...analysis.engine import CodeSmellAnalyzer
from ...analysis.models import AnalysisResult, Severity
from ...analysis.reporters.console import ConsoleReporter
from ...analysis.reporters.json_reporter import build_report, render_json
from ...config.defaults import (
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_FILE_EXTENSIONS,
    DEFAULT_IGNORE_DIRS,
)
from ...config.thresholds import ThresholdConfig
from ...core.exceptions import ConfigError, ParserUnavailableError
from ...parsers.cpp import CppSyntaxProvider
from ..output import configure_logging, console, print_error, print_json, print_success


def analyze(
    paths: list[Path] = typer.Argument(
        ...,
        help="C/C++ files or directories to analyze",
        exists=True,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results in JSON format",
        rich_help_panel="📊 Display Options",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the JSON report to this file",
        rich_help_panel="📊 Display Options",
    ),
    top: int = typer.Option(
        10,
        "--top",
        help="Number of smells to show in the console report",
        min=1,
        max=1000,
        rich_help_panel="📊 Display Options",
    ),
    min_severity: Severity = typer.Option(
        Severity.LOW,
        "--min-severity",
        help="Drop findings below this severity",
        case_sensitive=False,
        rich_help_panel="🔍 Filters",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help=f"Threshold file (defaults to ./{DEFAULT_CONFIG_FILENAME} when present)",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (debug) logging"
    ),
) -> None:
    """🔍 Detect code smells in C/C++ sources.

    [bold cyan]Examples:[/bold cyan]

    [green]Analyze a source tree:[/green]
        $ cpp-smells analyze src/

    [green]Only medium and high findings:[/green]
        $ cpp-smells analyze src/ --min-severity medium

    [green]Export to JSON:[/green]
        $ cpp-smells analyze src/ --json > smells.json
    """
    if verbose:
        configure_logging(verbose=True)

    try:
        thresholds = load_thresholds(config)
    except ConfigError as e:
        logger.error(f"Invalid threshold configuration: {e}")
        _report_error(str(e), json_output)
        raise typer.Exit(1)

    files = find_source_files(paths)
    if not files:
        _report_error("No C/C++ files found to analyze", json_output)
        raise typer.Exit(1)

    root = paths[0] if len(paths) == 1 and paths[0].is_dir() else None
    analyzer = CodeSmellAnalyzer(CppSyntaxProvider(), thresholds=thresholds)

    if not json_output:
        console.print(f"[dim]Analyzing {len(files)} files...[/dim]")

    try:
        results = asyncio.run(analyzer.analyze_paths(files, root=root))
    except ParserUnavailableError as e:
        logger.error(f"Analysis aborted: {e}")
        _report_error(f"C/C++ parser unavailable: {e}", json_output)
        raise typer.Exit(1)

    results = filter_by_severity(results, min_severity)
    stats = calculate_stats(results, top_n=thresholds.worst_files_limit)

    if json_output or output:
        if output:
            try:
                render_json(results, stats, output_path=output)
            except OSError as e:
                logger.error(f"Cannot write report: {e}")
                _report_error(f"Cannot write {output}: {e}", json_output)
                raise typer.Exit(1)
            if not json_output:
                print_success(f"Report written to {output}")
        if json_output:
            print_json(build_report(results, stats))
        return

    ConsoleReporter(console).print_report(results, stats, top=top)


def load_thresholds(config: Path | None) -> ThresholdConfig:
    """Load thresholds from ``config`` or the default file in the working directory."""
    path = config or Path.cwd() / DEFAULT_CONFIG_FILENAME
    thresholds = ThresholdConfig.load(path)
    if path.exists():
        logger.debug(f"Loaded thresholds from {path}")
    return thresholds


def find_source_files(paths: list[Path]) -> list[Path]:
    """Expand files and directories into the C/C++ sources to analyze.

    Files named explicitly are kept whatever their extension. Directories are
    searched recursively for known extensions, skipping ignored directories.
    Duplicates are dropped and the first occurrence keeps its position.
    """
    extensions = set(DEFAULT_FILE_EXTENSIONS)
    found: list[Path] = []

    for path in paths:
        if path.is_file():
            found.append(path)
            continue

        matches = [
            candidate
            for candidate in path.rglob("*")
            if candidate.is_file()
            and candidate.suffix.lower() in extensions
            and not any(
                part in DEFAULT_IGNORE_DIRS
                for part in candidate.relative_to(path).parts[:-1]
            )
        ]
        found.extend(sorted(matches))

    return list(dict.fromkeys(found))


def filter_by_severity(
    results: list[AnalysisResult], min_severity: Severity
) -> list[AnalysisResult]:
    """Drop findings ranked below ``min_severity`` from every result."""
    if min_severity == Severity.LOW:
        return results
    return [
        replace(
            result,
            smells=tuple(s for s in result.smells if s.severity.rank >= min_severity.rank),
        )
        for result in results
    ]


def _report_error(message: str, json_output: bool) -> None:
    if json_output:
        print_json({"error": message})
    else:
        print_error(message)
