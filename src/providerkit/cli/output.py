"""Rich output formatting helpers for the providerkit CLI."""

from __future__ import annotations

import inspect
from typing import Any

from rich.console import Console
from rich.table import Table

from providerkit.loader import qualified_name

console = Console()


def _source_of(cls: type) -> str:
    try:
        return inspect.getsourcefile(cls) or "-"
    except TypeError:
        return "-"


def classes_to_json(classes: list[type]) -> list[dict[str, Any]]:
    """Convert discovered classes to JSON-serializable dicts."""
    return [
        {
            "name": qualified_name(cls),
            "module": cls.__module__,
            "abstract": inspect.isabstract(cls),
            "source": _source_of(cls),
        }
        for cls in classes
    ]


def print_class_table(title: str, classes: list[type]) -> None:
    """Print discovered classes as a numbered table.

    Args:
        title: Table title.
        classes: Classes in discovery order.
    """
    if not classes:
        console.print("[dim]No classes found.[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Class", style="bold")
    table.add_column("Source", style="dim")

    for idx, cls in enumerate(classes, start=1):
        table.add_row(str(idx), qualified_name(cls), _source_of(cls))

    console.print(table)
    console.print(f"[bold]{len(classes)}[/bold] class(es) found")
