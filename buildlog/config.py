"""Logger configuration — env-driven.

Settings are read from ``BUILDLOG_*`` environment variables.  The log level
is re-read from ``os.environ`` on every evaluation so that a level changed by
another module, or by ``set_level``, takes effect immediately for every logger
and writer in the process.

Examples
--------
Override via environment::

    export BUILDLOG_LOG_LEVEL=verbose
    export BUILDLOG_PROGRESS_FPS=30
"""

from __future__ import annotations

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from buildlog.core.errors import UnknownLevelError
from buildlog.models.levels import DEFAULT_LEVEL, LOG_LEVELS, Level, registry

LOG_LEVEL_ENV_VAR = "BUILDLOG_LOG_LEVEL"


class LoggerSettings(BaseSettings):
    """Process-wide logger settings with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDLOG_",
        extra="ignore",
    )

    log_level: str = DEFAULT_LEVEL.value

    # Refresh rate of the live progress bar
    progress_fps: float = 12.0


def load_settings() -> LoggerSettings:
    """Build a fresh settings instance from the current environment."""
    return LoggerSettings()


def get_level() -> Level:
    """Return the current threshold, defaulting to ``info``.

    Raises
    ------
    UnknownLevelError
        If the configured level is not a known level name.
    """
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LEVEL.value
    if level_name not in LOG_LEVELS:
        raise UnknownLevelError(
            f'Environment variable {LOG_LEVEL_ENV_VAR} is set to an unknown log level '
            f'"{level_name}". Valid levels are {", ".join(LOG_LEVELS)}'
        )
    return Level(level_name)


def set_level(level: str | Level) -> None:
    """Set the threshold for every logger and writer in this process."""
    os.environ[LOG_LEVEL_ENV_VAR] = registry.validate(level).value


def is_level_enabled(level: str | Level) -> bool:
    """Whether *level* is enabled under the current threshold."""
    return registry.is_enabled(level, get_level())
