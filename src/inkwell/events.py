"""In-process user event dispatch.

Handlers are plain callables taking the affected user. They run after the
database transaction that produced the event has committed.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

REGISTERED = "registered"

UserEventHandler = Callable[[Any], None]


class UserEvents:
    """Registry of handlers keyed by event name."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[UserEventHandler]] = defaultdict(list)

    def connect(self, name: str, handler: UserEventHandler) -> UserEventHandler:
        """Register ``handler`` for ``name``; usable as a decorator factory target."""
        if handler not in self._handlers[name]:
            self._handlers[name].append(handler)
        return handler

    def disconnect(self, name: str, handler: UserEventHandler) -> None:
        if handler in self._handlers[name]:
            self._handlers[name].remove(handler)

    def emit(self, name: str, user: Any) -> None:
        """Call every handler for ``name``.

        A failing handler is logged and does not prevent the remaining handlers
        from running; the triggering transaction has already committed.
        """
        for handler in list(self._handlers[name]):
            try:
                handler(user)
            except Exception:
                logger.exception("User event handler %r failed for %s", handler, name)


def _log_verification_request(user: Any) -> None:
    logger.info("Email verification requested for user %s <%s>", user.id, user.email)


user_events = UserEvents()
user_events.connect(REGISTERED, _log_verification_request)

__all__ = ["REGISTERED", "UserEvents", "user_events"]
