"""Rich formatting utilities for CLI output."""

import sys
from typing import Any

import orjson
import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

# Global console instance
console = Console()


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print error message."""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_json(data: Any) -> None:
    """Print data as indented JSON, unstyled so it can be piped."""
    typer.echo(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8"))


def print_yaml(text: str) -> None:
    """Print YAML text with syntax highlighting."""
    console.print(Syntax(text, "yaml", theme="monokai", background_color="default"))


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route loguru output to stderr at the level chosen on the command line."""
    logger.remove()
    if quiet:
        level = "ERROR"
    elif verbose:
        level = "DEBUG"
    else:
        level = "WARNING"
    logger.add(sys.stderr, level=level)
