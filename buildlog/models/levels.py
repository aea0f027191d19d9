"""Log levels and the registry that decides whether a level is enabled.

Levels form a fixed, totally ordered sequence::

    silly < verbose < perf < info < warn < error < silent

``silent`` is special: no message can be submitted with that level.  It is
only useful as a threshold to suppress all output.
"""

from __future__ import annotations

from enum import Enum

from buildlog.core.errors import UnknownLevelError


class Level(str, Enum):
    """Severity of a log message, ordered from most to least verbose."""

    SILLY = "silly"
    VERBOSE = "verbose"
    PERF = "perf"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    SILENT = "silent"


LOG_LEVELS: list[str] = [level.value for level in Level]

DEFAULT_LEVEL = Level.INFO

# Levels that may be used for a message (everything but ``silent``)
MESSAGE_LEVELS: list[str] = [name for name in LOG_LEVELS if name != Level.SILENT.value]


class LevelRegistry:
    """Ordered registry of log levels.

    The registry holds no threshold of its own; callers pass the current
    threshold explicitly so it can be read from configuration at evaluation
    time.
    """

    def __init__(self, levels: list[str] | None = None) -> None:
        self._levels = list(levels or LOG_LEVELS)

    def names(self) -> list[str]:
        """Return the level names in ascending order."""
        return list(self._levels)

    def validate(self, name: str | Level) -> Level:
        """Return the ``Level`` for *name* or raise ``UnknownLevelError``."""
        value = name.value if isinstance(name, Level) else name
        if value not in self._levels:
            raise UnknownLevelError(f'Unknown log level "{value}"')
        return Level(value)

    def ordinal(self, name: str | Level) -> int:
        """Position of *name* in the level sequence."""
        return self._levels.index(self.validate(name).value)

    def is_enabled(self, level: str | Level, threshold: str | Level) -> bool:
        """Whether *level* passes the given *threshold*."""
        return self.ordinal(level) >= self.ordinal(threshold)


# Module-level singleton; import as `from buildlog.models.levels import registry`
registry = LevelRegistry()
