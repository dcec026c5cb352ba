"""``l2catalog build`` — build the catalog and export it as JSON Lines.

Loads the shared classification tables, builds every defined project
from its discovery snapshot, and writes one JSON object per project.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from l2catalog.cli.render import print_report
from l2catalog.config import config
from l2catalog.core.catalog import CatalogBuilder
from l2catalog.core.errors import CatalogError

console = Console()


def build_cmd(
    discovery: Path = typer.Option(
        None,
        "--discovery",
        "-d",
        help="Directory holding {project}/discovered.json snapshots.",
    ),
    out: Path = typer.Option(
        None,
        "--out",
        "-o",
        help="Output JSON Lines file.",
    ),
    keep_going: bool = typer.Option(
        False,
        "--keep-going",
        "-k",
        help="Skip projects that fail to build instead of aborting.",
    ),
) -> None:
    """Build every project record and export the catalog."""
    settings = config.model_copy(
        update={
            "discovery_path": discovery or config.discovery_path,
            "export_path": out or config.export_path,
            "abort_on_error": config.abort_on_error and not keep_going,
        }
    )

    try:
        registry, report = CatalogBuilder.from_config(settings).build()
    except CatalogError as exc:
        console.print(f"[bold red]Build failed ({type(exc).__name__}):[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    count = registry.export_json(settings.export_path)
    print_report(console, report)
    console.print(f"[dim]Wrote {count} record(s) to {settings.export_path}[/dim]")
    if not report.ok:
        raise typer.Exit(code=1)
