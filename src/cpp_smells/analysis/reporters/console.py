"""Console reporter for code smell analysis results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models import Severity, SmellKind

if TYPE_CHECKING:
    from ..models import AnalysisResult, AnalysisStats, CodeSmell

console = Console()

SEVERITY_COLORS = {
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "blue",
}


class ConsoleReporter:
    """Console reporter for displaying analysis results in terminal."""

    def __init__(self, output: Console | None = None) -> None:
        self.console = output or console

    def print_summary(self, stats: AnalysisStats) -> None:
        """Print high-level corpus summary.

        Args:
            stats: Corpus statistics to display
        """
        self.console.print("\n[bold blue]🔍 C/C++ Code Smell Analysis[/bold blue]")
        self.console.print("━" * 60)
        self.console.print()

        self.console.print("[bold]Summary[/bold]")
        self.console.print(f"  Files Analyzed: {stats.total_files}")
        self.console.print(f"  Total Smells: {stats.total_smells}")
        if stats.failed_files:
            self.console.print(
                f"  [red]Analysis Failed: {len(stats.failed_files)} files[/red]"
            )
        self.console.print()

    def print_smells_by_type(self, stats: AnalysisStats) -> None:
        """Print the smell count for every smell kind.

        Args:
            stats: Corpus statistics with per-kind counts
        """
        self.console.print("[bold]Smells by Type[/bold]")

        if stats.total_smells == 0:
            self.console.print("  No code smells detected!")
            self.console.print()
            return

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Smell", style="bold", width=24)
        table.add_column("Count", justify="right", width=8)
        table.add_column("Percentage", justify="right", width=10)
        table.add_column("Bar", width=20)

        for kind in SmellKind:
            count = stats.smells_by_type.get(kind, 0)
            percentage = count / stats.total_smells * 100
            bar = "█" * int(percentage / 5)  # 5% = 1 char
            table.add_row(kind.value, f"{count}", f"{percentage:.1f}%", f"[cyan]{bar}[/cyan]")

        self.console.print(table)
        self.console.print()

    def print_worst_files(self, stats: AnalysisStats) -> None:
        """Print the files with the most smells.

        Args:
            stats: Corpus statistics
        """
        worst = [w for w in stats.worst_files if w.smell_count > 0]
        if not worst:
            self.console.print("[bold]🔥 Worst Files[/bold]")
            self.console.print("  No smelly files found")
            self.console.print()
            return

        self.console.print(f"[bold]🔥 Top {len(worst)} Worst Files[/bold]")

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Rank", justify="right", width=6)
        table.add_column("File", style="cyan", width=50)
        table.add_column("Smells", justify="right", width=8)

        for rank, entry in enumerate(worst, 1):
            file_name = entry.file_name
            if len(file_name) > 48:
                file_name = "..." + file_name[-45:]
            table.add_row(f"{rank}", escape(file_name), f"{entry.smell_count}")

        self.console.print(table)
        self.console.print()

    def print_smells(self, smells: Sequence[CodeSmell], top: int = 10) -> None:
        """Print detected code smells, most severe first.

        Args:
            smells: Findings from one or more files
            top: Maximum number of smells to display
        """
        if not smells:
            return

        by_severity = {level: [s for s in smells if s.severity == level] for level in Severity}
        self.console.print(
            f"[bold]🔍 Code Smells Detected[/bold] - Found {len(smells)} issues"
        )
        self.console.print(
            f"  [red]High: {len(by_severity[Severity.HIGH])}[/red]  "
            f"[yellow]Medium: {len(by_severity[Severity.MEDIUM])}[/yellow]  "
            f"[blue]Low: {len(by_severity[Severity.LOW])}[/blue]"
        )
        self.console.print()

        # Stable sort keeps file/line order within a severity
        ordered = sorted(smells, key=lambda s: s.severity.rank, reverse=True)[:top]

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Severity", width=8)
        table.add_column("Smell Type", width=22)
        table.add_column("Location", width=36)
        table.add_column("Details", width=44)

        for smell in ordered:
            color = SEVERITY_COLORS[smell.severity]
            location = f"{smell.file_name}:{smell.line_number}"
            if len(location) > 34:
                location = "..." + location[-31:]
            table.add_row(
                f"[{color}]{smell.severity.value.upper()}[/{color}]",
                smell.kind.value,
                escape(location),
                escape(smell.description),
            )

        self.console.print(table)
        self.console.print()

        self.console.print("[bold]💡 Top Suggestions[/bold]")
        shown: set[str] = set()
        for smell in ordered:
            if smell.refactoring_tip not in shown:
                self.console.print(f"  • [dim]{smell.refactoring_tip}[/dim]")
                shown.add(smell.refactoring_tip)
                if len(shown) >= 5:
                    break
        self.console.print()

    def print_average_metrics(self, stats: AnalysisStats) -> None:
        """Print the corpus-wide average of each metric.

        Args:
            stats: Corpus statistics
        """
        averages = stats.average_metrics
        self.console.print("[bold]📊 Average Metrics[/bold]")
        self.console.print(f"  Cyclomatic Complexity: {averages.cyclomatic_complexity:.1f}")
        self.console.print(f"  Lines of Code: {averages.lines_of_code:.1f}")
        self.console.print(f"  Methods: {averages.method_count:.1f}")
        self.console.print(f"  Inheritance Depth: {averages.inheritance_depth:.1f}")
        self.console.print(f"  Coupling: {averages.coupling_count:.1f}")
        self.console.print(f"  Cohesion: {averages.cohesion_score:.2f}")
        self.console.print()

    def print_failures(self, results: Sequence[AnalysisResult]) -> None:
        """List files whose analysis failed, with the reason.

        Args:
            results: Per-file results
        """
        failed = [r for r in results if r.failed]
        if not failed:
            return

        self.console.print("[bold red]✗ Analysis Failed[/bold red]")
        for result in failed:
            self.console.print(
                f"  • {escape(result.file_name)}: [dim]{escape(result.error or '')}[/dim]"
            )
        self.console.print()

    def print_report(
        self,
        results: Sequence[AnalysisResult],
        stats: AnalysisStats,
        top: int = 10,
        show_smells: bool = True,
    ) -> None:
        """Print the full report in the standard section order."""
        self.print_summary(stats)
        self.print_smells_by_type(stats)
        self.print_worst_files(stats)
        if show_smells:
            self.print_smells([s for r in results for s in r.smells], top=top)
        self.print_average_metrics(stats)
        self.print_failures(results)

        self.console.print("[dim]💡 Tips:[/dim]")
        self.console.print("[dim]  • Use [cyan]--top N[/cyan] to see more/fewer smells[/dim]")
        self.console.print(
            "[dim]  • Use [cyan]--json[/cyan] to export results for further analysis[/dim]"
        )
        self.console.print(
            "[dim]  • Use [cyan]cpp-smells explain KIND[/cyan] for guidance on a smell[/dim]"
        )
        self.console.print()
