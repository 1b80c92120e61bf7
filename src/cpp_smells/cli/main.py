"""Main CLI application for cpp-smells."""

import typer

from .. import __version__
from .commands.analyze import analyze
from .commands.explain import explain
from .commands.thresholds import thresholds
from .output import configure_logging

app = typer.Typer(
    name="cpp-smells",
    help="""🔍 [bold]cpp-smells[/bold] - Code smell detection for C/C++

Parses C and C++ sources with tree-sitter, computes structural metrics and
reports nine classic code smells with a severity and a refactoring tip.

[bold cyan]Quick Start:[/bold cyan]
  1. Analyze a tree:      [green]cpp-smells analyze src/[/green]
  2. Export findings:     [green]cpp-smells analyze src/ --json -o report.json[/green]
  3. Learn about a smell: [green]cpp-smells explain LongFunction[/green]
  4. Tune thresholds:     [green]cpp-smells thresholds --write .cpp-smells.yaml[/green]
""",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cpp-smells version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (debug) logging"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only log errors"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """cpp-smells command line."""
    configure_logging(verbose=verbose, quiet=quiet)


app.command("analyze")(analyze)
app.command("explain")(explain)
app.command("thresholds")(thresholds)


if __name__ == "__main__":
    app()
