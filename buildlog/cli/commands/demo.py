"""``buildlog demo`` — run a simulated multi-project build.

Drives ``BuildTracker`` and ``ProjectTaskTracker`` through a complete
build with synthetic projects and tasks while a ``ConsoleWriter`` renders
the events, including the live progress bar in interactive terminals.
"""

from __future__ import annotations

import time

import typer
from rich.console import Console

from buildlog import config
from buildlog.core.errors import UnknownLevelError
from buildlog.loggers.build import BuildTracker
from buildlog.loggers.logger import Logger
from buildlog.loggers.project_build import ProjectTaskTracker
from buildlog.writers.console import ConsoleWriter

console = Console()

_PROJECT_TYPES = ["application", "library", "theme-library", "module"]
_TASK_NAMES = [
    "escapeNonAsciiCharacters",
    "replaceCopyright",
    "replaceVersion",
    "minify",
    "generateLibraryManifest",
    "generateComponentPreload",
    "generateThemeDesignerResources",
    "buildThemes",
]


def demo_cmd(
    projects: int = typer.Option(
        3,
        "--projects",
        "-p",
        min=1,
        help="Number of projects to build.",
    ),
    tasks: int = typer.Option(
        4,
        "--tasks",
        "-t",
        min=1,
        max=len(_TASK_NAMES),
        help="Number of tasks per project.",
    ),
    delay: float = typer.Option(
        0.2,
        "--delay",
        "-d",
        min=0.0,
        help="Delay in seconds between task transitions for visual effect.",
    ),
    skip: bool = typer.Option(
        False,
        "--skip",
        help="Skip every second project instead of building it.",
    ),
    level: str = typer.Option(
        None,
        "--level",
        "-l",
        help="Log level to use for this run (default: BUILDLOG_LOG_LEVEL or info).",
    ),
) -> None:
    """Run a simulated build and render it with the console writer."""
    if level:
        try:
            config.set_level(level)
        except UnknownLevelError as exc:
            console.print(f"[bold red]Invalid level:[/bold red] {exc}")
            raise typer.Exit(code=1)

    ConsoleWriter.init()
    log = Logger("buildlog:demo")
    build = BuildTracker("buildlog:demo:build")

    project_names = [f"demo.project.{idx}" for idx in range(1, projects + 1)]
    task_names = _TASK_NAMES[:tasks]

    try:
        log.info(f"Building {len(project_names)} projects")
        build.set_projects(project_names)

        for idx, project_name in enumerate(project_names):
            project_type = _PROJECT_TYPES[idx % len(_PROJECT_TYPES)]
            if skip and idx % 2 == 1:
                build.skip_project_build(project_name, project_type)
                continue

            project_build = ProjectTaskTracker(
                "buildlog:demo:project", project_name, project_type
            )
            project_build.set_tasks(task_names)
            build.start_project_build(project_name, project_type)
            for task_name in task_names:
                project_build.start_task(task_name)
                time.sleep(delay)
                project_build.end_task(task_name)
            build.end_project_build(project_name, project_type)

        log.info("Build succeeded")
    finally:
        ConsoleWriter.stop()
