"""Observer registration for session events."""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class SessionEvent(str, Enum):
    """Events emitted by a Safe3Session and their payloads.

    - QR_READY(uri)
    - CONNECTED(session)
    - SESSION_UPDATED(session)
    - DISCONNECTED()
    - SESSION_EXPIRED()
    - ERROR(err)
    """

    QR_READY = "qr_ready"
    CONNECTED = "connected"
    SESSION_UPDATED = "session_updated"
    DISCONNECTED = "disconnected"
    SESSION_EXPIRED = "session_expired"
    ERROR = "error"


class EventEmitter:
    """Per-event listener lists with synchronous, in-order dispatch.

    Listeners run in registration order inside ``emit``. An exception
    raised by a listener propagates to the emitter's caller.
    """

    def __init__(self) -> None:
        self._listeners: dict[SessionEvent, list[Listener]] = {}

    def on(self, event: SessionEvent | str, listener: Listener) -> "EventEmitter":
        """Register a listener.

        Returns:
            Self for chaining.
        """
        self._listeners.setdefault(SessionEvent(event), []).append(listener)
        return self

    def once(self, event: SessionEvent | str, listener: Listener) -> "EventEmitter":
        """Register a listener that is removed after its first call."""

        def wrapper(*args: Any) -> Any:
            self.off(event, wrapper)
            return listener(*args)

        wrapper.listener = listener  # type: ignore[attr-defined]
        return self.on(event, wrapper)

    def off(self, event: SessionEvent | str, listener: Listener) -> "EventEmitter":
        """Remove one registration of a listener, including one made by ``once``.

        Unknown listeners are ignored.
        """
        listeners = self._listeners.get(SessionEvent(event), [])
        for registered in listeners:
            if registered == listener or getattr(registered, "listener", None) == listener:
                listeners.remove(registered)
                break
        return self

    def emit(self, event: SessionEvent | str, *args: Any) -> bool:
        """Call every listener of ``event`` with ``args``.

        Returns:
            True if at least one listener was registered.
        """
        listeners = list(self._listeners.get(SessionEvent(event), []))
        for listener in listeners:
            listener(*args)
        return bool(listeners)

    def listener_count(self, event: SessionEvent | str) -> int:
        return len(self._listeners.get(SessionEvent(event), []))

    def remove_all_listeners(self, event: SessionEvent | str | None = None) -> None:
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(SessionEvent(event), None)
