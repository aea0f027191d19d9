"""Main Typer application — imports and registers all CLI commands.

Entry point: ``buildlog`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import typer

from buildlog.cli.commands.demo import demo_cmd
from buildlog.cli.commands.levels import levels_cmd

app = typer.Typer(
    name="buildlog",
    help="buildlog: structured logging and build progress for build tooling.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="demo", help="Run a simulated multi-project build.")(demo_cmd)
app.command(name="levels", help="Show log levels and which are enabled.")(levels_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
