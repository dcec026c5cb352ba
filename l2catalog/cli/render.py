"""Rich terminal rendering of catalog records.

Color scheme
------------
- green  : good sentiment / Stage 1+
- yellow : warning sentiment / under review
- red    : bad sentiment / Stage 0
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from l2catalog.core.catalog import BuildReport
from l2catalog.models.classification import Sentiment
from l2catalog.models.project import ProjectRecord
from l2catalog.models.stages import StageResult

_SENTIMENT_STYLES: dict[Sentiment | None, str] = {
    Sentiment.GOOD: "green",
    Sentiment.WARNING: "yellow",
    Sentiment.BAD: "bold red",
    Sentiment.NEUTRAL: "white",
    None: "dim",
}


def stage_markup(stage: StageResult) -> str:
    if stage.under_review:
        return f"[yellow]{stage.stage}[/yellow]"
    if stage.tier is None:
        return f"[dim]{stage.stage}[/dim]"
    if stage.tier == 0:
        return f"[red]{stage.stage}[/red]"
    return f"[green]{stage.stage}[/green]"


def projects_table(records: Iterable[ProjectRecord]) -> Table:
    table = Table(title="Projects")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Stage", justify="center")
    table.add_column("Escrows", justify="right")
    for record in records:
        table.add_row(
            record.id,
            record.display.name,
            record.display.category,
            stage_markup(record.stage),
            str(len(record.config.escrows)),
        )
    return table


def record_panel(record: ProjectRecord) -> Panel:
    """Risk view, stage, and missing requirements for one project."""
    risks = Table(show_header=True, expand=True)
    risks.add_column("Risk", style="bold")
    risks.add_column("Value")
    risks.add_column("Description", style="dim")
    for name, entry in record.risk_view.items():
        style = _SENTIMENT_STYLES.get(entry.sentiment, "dim")
        risks.add_row(
            name.replace("_", " ").capitalize(),
            f"[{style}]{entry.value}[/{style}]",
            entry.description,
        )

    lines = [
        f"[bold]Category:[/bold] {record.display.category}",
        f"[bold]Stage:[/bold] {stage_markup(record.stage)}",
    ]
    if record.stage.missing:
        lines.append(f"[bold]Missing for {record.stage.missing.next_stage}:[/bold]")
        lines.extend(f"  - {req}" for req in record.stage.missing.requirements)
    if record.display.warning:
        lines.append(f"[yellow]Warning:[/yellow] {record.display.warning}")

    return Panel(
        Group(Text.from_markup("\n".join(lines)), Text(""), risks),
        title=f"[bold]{record.display.name}[/bold]",
        subtitle=record.id,
        border_style="cyan",
        padding=(1, 2),
    )


def print_report(console: Console, report: BuildReport) -> None:
    console.print(f"[bold green]Built:[/bold green] {len(report.built)} project(s)")
    for failure in report.failed:
        console.print(
            f"[bold red]Skipped {failure.project_id}[/bold red] "
            f"({failure.error_type}): {failure.message}"
        )
