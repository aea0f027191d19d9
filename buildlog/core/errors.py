"""Exception taxonomy for buildlog.

All errors are raised synchronously where they are detected and are never
caught internally.  Validation raised inside an event handler therefore
propagates through ``EventBus.publish`` to the producer that published the
event.
"""

from __future__ import annotations

from enum import Enum


class BuildLogError(Exception):
    """Base class for all buildlog errors."""


class InvalidArgumentError(BuildLogError, ValueError):
    """Raised when a public call receives a missing or malformed argument."""


class UnknownLevelError(BuildLogError, ValueError):
    """Raised when a level name is not part of the fixed level sequence."""


class UnknownProjectError(BuildLogError, LookupError):
    """Raised when an event references a project that was never registered."""


class UnknownTaskError(BuildLogError, LookupError):
    """Raised when an event references a task that was never registered."""


class TransitionConflict(str, Enum):
    """The prior phase that makes a requested transition illegal."""

    ALREADY_STARTED = "already-started"
    ALREADY_SKIPPED = "already-skipped"
    ALREADY_ENDED = "already-ended"
    NOT_STARTED = "not-started"


_CONFLICT_DETAILS: dict[TransitionConflict, str] = {
    TransitionConflict.ALREADY_STARTED: "already started",
    TransitionConflict.ALREADY_SKIPPED: "already skipped",
    TransitionConflict.ALREADY_ENDED: "already ended",
    TransitionConflict.NOT_STARTED: "not started yet",
}


class InvalidTransitionError(BuildLogError, RuntimeError):
    """Raised when a status event is not legal from the current phase.

    Parameters
    ----------
    subject:
        Human readable description of the entity, e.g. ``project my.app``.
    status:
        The status value that was rejected.
    conflict:
        Which prior phase conflicts with the requested transition.
    """

    def __init__(
        self, subject: str, status: str, conflict: TransitionConflict
    ) -> None:
        self.subject = subject
        self.status = status
        self.conflict = conflict
        super().__init__(
            f"Unexpected {status} event for {subject}: "
            f"{_CONFLICT_DETAILS[conflict]}"
        )
