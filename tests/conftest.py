"""Shared test fixtures for buildlog."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from rich.console import Console

from buildlog.config import LOG_LEVEL_ENV_VAR
from buildlog.core.event_bus import EventBus
from buildlog.models.events import BuildStatusEvent, ProjectStatusEvent
from buildlog.writers.console import ConsoleWriter


@pytest.fixture(autouse=True)
def default_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the threshold to ``info``; restored after each test."""
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "info")


@pytest.fixture
def bus() -> EventBus:
    """Provide a fresh EventBus, isolated from the process-wide one."""
    return EventBus()


@pytest.fixture
def console() -> Console:
    """Provide a non-interactive Rich Console writing into a buffer."""
    return Console(file=io.StringIO(), force_terminal=False, width=200, color_system=None)


@pytest.fixture
def tty_console() -> Console:
    """Provide a Rich Console that claims to be an interactive terminal."""
    return Console(file=io.StringIO(), force_terminal=True, width=120)


@pytest.fixture
def writer(console: Console, bus: EventBus) -> Iterator[ConsoleWriter]:
    """Provide an enabled ConsoleWriter on the test bus and console."""
    cw = ConsoleWriter.init(console, bus=bus)
    yield cw
    cw.disable()


@pytest.fixture
def output(console: Console) -> Callable[[], list[str]]:
    """Return a callable yielding the lines written to the test console."""

    def _lines() -> list[str]:
        return console.file.getvalue().splitlines()

    return _lines


# ---------------------------------------------------------------------------
# Event factories shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_build_status() -> Callable[..., BuildStatusEvent]:
    """Factory fixture: build a BuildStatusEvent with sensible defaults."""

    def _factory(
        project_name: str = "project.a",
        status: str = "project-build-start",
        **overrides: Any,
    ) -> BuildStatusEvent:
        defaults: dict[str, Any] = {
            "level": "info",
            "project_name": project_name,
            "project_type": "library",
            "status": status,
        }
        defaults.update(overrides)
        return BuildStatusEvent(**defaults)

    return _factory


@pytest.fixture
def make_task_status() -> Callable[..., ProjectStatusEvent]:
    """Factory fixture: build a ProjectStatusEvent with sensible defaults."""

    def _factory(
        project_name: str = "project.a",
        task_name: str = "task.a",
        status: str = "task-start",
        **overrides: Any,
    ) -> ProjectStatusEvent:
        defaults: dict[str, Any] = {
            "level": "info",
            "project_name": project_name,
            "project_type": "library",
            "task_name": task_name,
            "status": status,
        }
        defaults.update(overrides)
        return ProjectStatusEvent(**defaults)

    return _factory
