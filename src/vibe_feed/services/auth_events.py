"""In-process auth-state change notifications.

Subscribers receive every sign-up, sign-in and sign-out. A failing
subscriber is logged and never affects the request that triggered it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from threading import Lock

logger = logging.getLogger(__name__)


class AuthEvent(Enum):
    """Kinds of auth-state transitions."""

    SIGNED_UP = "SIGNED_UP"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


AuthListener = Callable[[AuthEvent, str], None]


@dataclass
class Subscription:
    """Handle returned by `AuthEvents.subscribe`."""

    events: AuthEvents
    listener: AuthListener

    def unsubscribe(self) -> None:
        """Stop delivering events to the listener."""
        self.events._remove(self.listener)


class AuthEvents:
    """Registry of auth-state listeners."""

    def __init__(self) -> None:
        self._listeners: list[AuthListener] = []
        self._lock = Lock()

    def subscribe(self, listener: AuthListener) -> Subscription:
        """Register a listener called with (event, user_id)."""
        with self._lock:
            self._listeners.append(listener)
        return Subscription(self, listener)

    def _remove(self, listener: AuthListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, event: AuthEvent, user_id: str) -> None:
        """Deliver an event to every current listener."""
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event, user_id)
            except Exception:
                logger.exception("Auth listener failed handling %s", event.value)


_auth_events = AuthEvents()


def get_auth_events() -> AuthEvents:
    """Return the process-wide auth event registry."""
    return _auth_events
