"""buildlog data models — levels, events and progress state."""

from buildlog.models.events import (
    EVENT_TYPE_MAP,
    BuildMetadataEvent,
    BuildStatus,
    BuildStatusEvent,
    EventBase,
    EventKind,
    LogEvent,
    ProjectMetadataEvent,
    ProjectStatusEvent,
    StopSignalEvent,
    TaskStatus,
)
from buildlog.models.levels import LOG_LEVELS, Level, LevelRegistry
from buildlog.models.state import (
    ProgressModel,
    ProjectPhase,
    ProjectState,
    TaskPhase,
    TaskState,
)

__all__ = [
    # levels
    "Level",
    "LevelRegistry",
    "LOG_LEVELS",
    # events
    "EventKind",
    "EventBase",
    "LogEvent",
    "BuildMetadataEvent",
    "BuildStatus",
    "BuildStatusEvent",
    "ProjectMetadataEvent",
    "ProjectStatusEvent",
    "StopSignalEvent",
    "TaskStatus",
    "EVENT_TYPE_MAP",
    # state
    "ProjectPhase",
    "ProjectState",
    "TaskPhase",
    "TaskState",
    "ProgressModel",
]
