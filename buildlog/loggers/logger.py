"""Standard logger for build tooling modules.

Publishes ``log`` events on the event bus, which are rendered by writers
like ``buildlog.writers.console.ConsoleWriter``.  If no subscriber is
attached, messages are written directly to ``sys.stderr`` instead.

Usage
-----
>>> log = Logger("builder:tasks:minify")
>>> log.info("Minified", 12, "files")
"""

from __future__ import annotations

import re
import sys
from typing import Any

from buildlog import config
from buildlog.core.errors import InvalidArgumentError
from buildlog.core.event_bus import EventBus, get_event_bus
from buildlog.core.formatting import format_message
from buildlog.models.events import EventBase, LogEvent
from buildlog.models.levels import Level, registry

# Module names may only contain alphanumerical characters and a few specials
_ILLEGAL_MODULE_NAME_CHARS = re.compile(r"[^0-9a-zA-Z\-_:@./]")

_CONTEXT_FIELDS = ("project_name", "project_type", "task_name")


class Logger:
    """Emits leveled messages for one module.

    Parameters
    ----------
    module_name:
        Identifier for messages created by this logger, e.g.
        ``module:submodule:Class``.
    bus:
        Event bus to publish on.  Defaults to the process-wide bus.
    """

    def __init__(self, module_name: str, *, bus: EventBus | None = None) -> None:
        if not module_name:
            raise InvalidArgumentError("Logger: Missing module_name parameter")
        if _ILLEGAL_MODULE_NAME_CHARS.search(module_name):
            raise InvalidArgumentError(f"Logger: Invalid module name: {module_name}")
        self._module_name = module_name
        self._bus = bus or get_event_bus()

    @property
    def module_name(self) -> str:
        return self._module_name

    @staticmethod
    def is_level_enabled(level: str | Level) -> bool:
        """Whether *level* is enabled under the current threshold."""
        return config.is_level_enabled(level)

    # ------------------------------------------------------------------
    # Leveled entry points
    # ------------------------------------------------------------------

    def log(self, level: str | Level, *messages: Any, **context: str | None) -> None:
        """Log *messages* at *level*, optionally tagged with build context.

        Accepted context keys are ``project_name``, ``project_type`` and
        ``task_name``.

        Raises
        ------
        UnknownLevelError
            If *level* is not a known level name.
        InvalidArgumentError
            If *level* is ``silent``, which only exists as a threshold, or if
            an unknown context key is passed.
        """
        resolved = registry.validate(level)
        if resolved is Level.SILENT:
            raise InvalidArgumentError(
                "Logger: Level silent suppresses output and cannot be used for messages"
            )
        unknown = set(context) - set(_CONTEXT_FIELDS)
        if unknown:
            raise InvalidArgumentError(
                f"Logger: Unknown context fields: {', '.join(sorted(unknown))}"
            )
        self._emit_or_log(resolved, format_message(*messages), **context)

    def silly(self, *messages: Any) -> None:
        self.log(Level.SILLY, *messages)

    def verbose(self, *messages: Any) -> None:
        self.log(Level.VERBOSE, *messages)

    def perf(self, *messages: Any) -> None:
        self.log(Level.PERF, *messages)

    def info(self, *messages: Any) -> None:
        self.log(Level.INFO, *messages)

    def warn(self, *messages: Any) -> None:
        self.log(Level.WARN, *messages)

    def error(self, *messages: Any) -> None:
        self.log(Level.ERROR, *messages)

    # ------------------------------------------------------------------
    # Publishing and fallback output
    # ------------------------------------------------------------------

    def _emit(self, event: EventBase) -> bool:
        return self._bus.publish(event)

    def _log(self, level: Level, message: str) -> None:
        """Write *message* straight to stderr if *level* is enabled."""
        if self.is_level_enabled(level):
            sys.stderr.write(f"[{level.value}] {message}\n")

    def _emit_or_log(self, level: Level, message: str, **context: str | None) -> None:
        has_subscribers = self._emit(
            LogEvent(
                level=level,
                message=message,
                module_name=self._module_name,
                **context,
            )
        )
        if not has_subscribers:
            self._log(level, f"{self._module_name}: {message}")
