"""Explain command: what a smell kind means and how to fix it."""

import typer

from ...analysis.models import SmellKind
from ...analysis.smells.catalog import get_refactoring_tip, get_smell_description
from ..output import console, print_error


def resolve_kind(name: str) -> SmellKind | None:
    """Match ``LongFunction``, ``long_function`` or ``long-function`` style names."""
    wanted = name.replace("-", "").replace("_", "").lower()
    for kind in SmellKind:
        if kind.value.lower() == wanted:
            return kind
    return None


def explain(
    kind: str = typer.Argument(..., help="Smell kind, e.g. LongFunction or deep-nesting"),
) -> None:
    """📖 Describe a smell kind and suggest a refactoring."""
    resolved = resolve_kind(kind)
    if resolved is None:
        print_error(f"Unknown smell kind: {kind}")
        console.print("Known kinds: " + ", ".join(k.value for k in SmellKind))
        raise typer.Exit(1)

    console.print(f"[bold cyan]{resolved.value}[/bold cyan]")
    console.print(f"  {get_smell_description(resolved)}")
    console.print()
    console.print("[bold]💡 Refactoring[/bold]")
    console.print(f"  {get_refactoring_tip(resolved)}")
