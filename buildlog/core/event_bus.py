"""Event bus — typed, synchronous publish/subscribe.

Producers publish fire-and-forget.  ``publish`` reports whether at least one
subscriber received the event, which lets producers fall back to writing
directly when nothing is listening.

Handlers run synchronously, in subscription order, inside ``publish``.
Exceptions raised by a handler are not caught: they propagate to the
publisher's call site.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from buildlog.core.errors import InvalidArgumentError
from buildlog.models.events import EVENT_TYPE_MAP, EventBase, EventKind

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class EventBus:
    """Routes buildlog events to subscribed handlers by event kind."""

    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[Handler]] = {
            kind: [] for kind in EventKind
        }

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, kind: EventKind, handler: Handler) -> None:
        """Attach *handler* to events of *kind*.

        The same handler may be attached more than once; it is then called
        once per attachment.
        """
        self._handlers[EventKind(kind)].append(handler)
        logger.debug("Subscribed handler %r to %s", handler, kind)

    def unsubscribe(self, kind: EventKind, handler: Handler) -> None:
        """Detach one attachment of *handler*.  Unknown handlers are ignored."""
        try:
            self._handlers[EventKind(kind)].remove(handler)
            logger.debug("Unsubscribed handler %r from %s", handler, kind)
        except ValueError:
            pass

    def has_subscribers(self, kind: EventKind) -> bool:
        return bool(self._handlers[EventKind(kind)])

    def subscriber_count(self, kind: EventKind) -> int:
        return len(self._handlers[EventKind(kind)])

    # ------------------------------------------------------------------
    # Publish
    # ------------------------------------------------------------------

    def publish(self, event: EventBase) -> bool:
        """Dispatch *event* to every handler subscribed to its kind.

        Returns True if at least one handler existed at publish time.
        """
        model_cls = EVENT_TYPE_MAP[event.kind]
        if not isinstance(event, model_cls):
            raise InvalidArgumentError(
                f"Event of kind {event.kind.value!r} must be a {model_cls.__name__}, "
                f"got {type(event).__name__}"
            )

        # Copy: a handler may unsubscribe while we iterate (e.g. stop-signal)
        handlers = list(self._handlers[event.kind])
        for handler in handlers:
            handler(event)
        return bool(handlers)

    # ------------------------------------------------------------------
    # Coercion of loosely-typed payloads
    # ------------------------------------------------------------------

    @staticmethod
    def coerce(kind: EventKind | str, payload: dict[str, Any]) -> EventBase:
        """Validate a plain payload dict into the typed event for *kind*."""
        try:
            event_kind = EventKind(kind)
        except ValueError as exc:
            raise InvalidArgumentError(f"Unknown event kind: {kind!r}") from exc

        if not isinstance(payload, dict):
            raise InvalidArgumentError(
                f"Event payload must be a dict, got {type(payload).__name__}"
            )

        model_cls = EVENT_TYPE_MAP[event_kind]
        try:
            return model_cls.model_validate({**payload, "kind": event_kind})
        except ValidationError as exc:
            raise InvalidArgumentError(
                f"Invalid {event_kind.value} payload: {exc}"
            ) from exc

    def publish_payload(self, kind: EventKind | str, payload: dict[str, Any]) -> bool:
        """Coerce *payload* and publish it.  Returns the ``publish`` result."""
        return self.publish(self.coerce(kind, payload))


_default_bus = EventBus()


def get_event_bus() -> EventBus:
    """Return the process-wide event bus."""
    return _default_bus
