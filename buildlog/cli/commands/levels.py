"""``buildlog levels`` — show the log levels and which are enabled."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from buildlog import config
from buildlog.core.errors import UnknownLevelError
from buildlog.models.levels import LOG_LEVELS, Level, registry

console = Console()


def levels_cmd() -> None:
    """List every log level, marking those enabled by the current level."""
    try:
        current = config.get_level()
    except UnknownLevelError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    table = Table(title=f"Log levels (current: {current.value})", min_width=40)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Level", style="cyan")
    table.add_column("Enabled", justify="center")

    for ordinal, name in enumerate(LOG_LEVELS):
        if name == Level.SILENT.value:
            enabled = "[dim]n/a[/dim]"
        elif registry.is_enabled(name, current):
            enabled = "[green]Yes[/green]"
        else:
            enabled = "[red]No[/red]"
        table.add_row(str(ordinal), name, enabled)

    console.print(table)
