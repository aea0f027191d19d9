"""buildlog: Structured logging and build progress events for build tooling.

Modules emit leveled messages and build-progress events without depending on
a concrete output sink.  A writer such as ``ConsoleWriter`` subscribes to the
events and renders them, including a live progress bar for multi-project
builds.

If no writer is attached, every message is written directly to ``stderr``.
"""

__version__ = "0.1.0"
__description__ = "Structured logging facade and build progress events for build tooling"

from buildlog.config import get_level, is_level_enabled, set_level
from buildlog.core.event_bus import EventBus, get_event_bus
from buildlog.loggers.build import BuildTracker
from buildlog.loggers.logger import Logger
from buildlog.loggers.project_build import ProjectTaskTracker
from buildlog.models.levels import LOG_LEVELS, Level
from buildlog.writers.console import ConsoleWriter


def get_logger(module_name: str) -> Logger:
    """Create a ``Logger`` for *module_name*, e.g. ``builder:tasks:minify``."""
    return Logger(module_name)


__all__ = [
    "BuildTracker",
    "ConsoleWriter",
    "EventBus",
    "LOG_LEVELS",
    "Level",
    "Logger",
    "ProjectTaskTracker",
    "get_event_bus",
    "get_level",
    "get_logger",
    "is_level_enabled",
    "set_level",
    "__version__",
]
