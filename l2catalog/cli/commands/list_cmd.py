"""``l2catalog list`` — table of catalog projects."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from l2catalog.cli.commands._shared import load_registry
from l2catalog.cli.render import projects_table
from l2catalog.core.registry import by_category

console = Console()


def list_cmd(
    category: str = typer.Option(None, "--category", "-c", help="Filter by category."),
    discovery: Path = typer.Option(
        None, "--discovery", "-d", help="Discovery snapshot directory."
    ),
    catalog: Path = typer.Option(
        None, "--catalog", help="Read an exported catalog instead of building."
    ),
) -> None:
    """List catalog projects with their category and stage."""
    registry = load_registry(console, discovery, catalog)
    view = registry.list(
        predicate=by_category(category) if category else None,
        sort_key=lambda r: r.display.name.casefold(),
    )
    if not len(view):
        console.print("[dim]No projects match.[/dim]")
        return
    console.print(projects_table(view))
