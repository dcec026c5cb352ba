"""Main Typer application — imports and registers all CLI commands.

Entry point: ``l2catalog`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from l2catalog.cli.commands.build import build_cmd
from l2catalog.cli.commands.list_cmd import list_cmd
from l2catalog.cli.commands.show import show_cmd
from l2catalog.config import config

app = typer.Typer(
    name="l2catalog",
    help="l2catalog: typed registry of Layer 2 project records.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="build", help="Build the catalog and export it as JSON Lines.")(build_cmd)
app.command(name="list", help="List catalog projects.")(list_cmd)
app.command(name="show", help="Show one project's record.")(show_cmd)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Override L2CATALOG_LOG_LEVEL for this run."
    ),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=(log_level or config.log_level).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        ],
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
