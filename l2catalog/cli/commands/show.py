"""``l2catalog show PROJECT_ID`` — risk view and stage of one project."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from l2catalog.cli.commands._shared import load_registry
from l2catalog.cli.render import record_panel
from l2catalog.core.errors import NotFoundError

console = Console()


def show_cmd(
    project_id: str = typer.Argument(..., help="Project id, e.g. zora."),
    as_json: bool = typer.Option(False, "--json", help="Print the exported JSON object."),
    discovery: Path = typer.Option(
        None, "--discovery", "-d", help="Discovery snapshot directory."
    ),
    catalog: Path = typer.Option(
        None, "--catalog", help="Read an exported catalog instead of building."
    ),
) -> None:
    """Show one project's record."""
    registry = load_registry(console, discovery, catalog)
    try:
        record = registry.get(project_id)
    except NotFoundError as exc:
        console.print(f"[bold red]Project not found:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        console.print_json(json.dumps(record.to_wire()))
        return
    console.print(record_panel(record))
