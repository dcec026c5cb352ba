"""Helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from l2catalog.config import config
from l2catalog.core.catalog import CatalogBuilder
from l2catalog.core.errors import CatalogError
from l2catalog.core.registry import ProjectRegistry


def load_registry(
    console: Console, discovery: Path | None, catalog: Path | None
) -> ProjectRegistry:
    """Read an exported catalog if given, else build one from discovery.

    Catalog errors are printed and turned into exit code 1.
    """
    try:
        if catalog is not None:
            if not catalog.exists():
                console.print(f"[bold red]Catalog not found:[/bold red] {catalog}")
                raise typer.Exit(code=1)
            return ProjectRegistry.load_json(catalog)

        settings = config.model_copy(
            update={"discovery_path": discovery or config.discovery_path}
        )
        registry, _ = CatalogBuilder.from_config(settings).build()
        return registry
    except CatalogError as exc:
        console.print(f"[bold red]{type(exc).__name__}:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
