"""Typed events published on the buildlog event bus.

Every event name maps to exactly one frozen Pydantic model; the mapping is
the tagged union the bus dispatches on.  Status values are plain strings so
that a writer built against an older producer (or vice versa) can tolerate
statuses it does not know.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from buildlog.models.levels import Level


class EventKind(str, Enum):
    """The six event names used on the bus."""

    LOG = "log"
    BUILD_METADATA = "build-metadata"
    BUILD_STATUS = "build-status"
    PROJECT_METADATA = "project-metadata"
    PROJECT_STATUS = "project-status"
    STOP_SIGNAL = "stop-signal"


class BuildStatus(str, Enum):
    """Known status values of ``build-status`` events."""

    PROJECT_BUILD_START = "project-build-start"
    PROJECT_BUILD_END = "project-build-end"
    PROJECT_BUILD_SKIP = "project-build-skip"


class TaskStatus(str, Enum):
    """Known status values of ``project-status`` events."""

    TASK_START = "task-start"
    TASK_END = "task-end"


class EventBase(BaseModel):
    """Fields shared by every event."""

    model_config = ConfigDict(frozen=True)

    kind: EventKind


class LogEvent(EventBase):
    """A single leveled log message."""

    kind: EventKind = EventKind.LOG
    level: Level
    message: str
    module_name: str
    project_name: str | None = None
    project_type: str | None = None
    task_name: str | None = None


class BuildMetadataEvent(EventBase):
    """Declares the set of projects taking part in a build run."""

    kind: EventKind = EventKind.BUILD_METADATA
    projects_to_build: list[str] = Field(default_factory=list)


class BuildStatusEvent(EventBase):
    """Reports a phase change of one project build."""

    kind: EventKind = EventKind.BUILD_STATUS
    level: Level
    project_name: str
    project_type: str
    status: str


class ProjectMetadataEvent(EventBase):
    """Declares the tasks that will run for one project."""

    kind: EventKind = EventKind.PROJECT_METADATA
    project_name: str
    project_type: str
    tasks_to_run: list[str] = Field(default_factory=list)


class ProjectStatusEvent(EventBase):
    """Reports a phase change of one task within a project build."""

    kind: EventKind = EventKind.PROJECT_STATUS
    level: Level
    project_name: str
    project_type: str
    task_name: str
    status: str


class StopSignalEvent(EventBase):
    """Asks every attached writer to detach and flush."""

    kind: EventKind = EventKind.STOP_SIGNAL


# Registry for validation and coercion by event kind
EVENT_TYPE_MAP: dict[EventKind, type[EventBase]] = {
    EventKind.LOG: LogEvent,
    EventKind.BUILD_METADATA: BuildMetadataEvent,
    EventKind.BUILD_STATUS: BuildStatusEvent,
    EventKind.PROJECT_METADATA: ProjectMetadataEvent,
    EventKind.PROJECT_STATUS: ProjectStatusEvent,
    EventKind.STOP_SIGNAL: StopSignalEvent,
}
