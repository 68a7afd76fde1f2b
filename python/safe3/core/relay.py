"""Reconciles transport push events into the session store."""

import logging
from typing import Any

from pydantic import ValidationError

from ..constants import PUSH_SESSION_DELETE, PUSH_SESSION_EXPIRE, PUSH_SESSION_UPDATE
from ..events import EventEmitter, SessionEvent
from ..transport import SignTransport
from ..types import SessionEventPayload, SessionNamespace
from .store import SessionStore

logger = logging.getLogger(__name__)


class EventRelay:
    """Applies session_update/delete/expire push events to a SessionStore.

    Events naming a topic other than the stored session's are ignored.
    ``session_update`` keeps the session connected; delete and expire
    clear the store.
    """

    def __init__(self, store: SessionStore, emitter: EventEmitter) -> None:
        self._store = store
        self._emitter = emitter
        self._transport: SignTransport | None = None
        self._handlers = {
            PUSH_SESSION_UPDATE: self.handle_update,
            PUSH_SESSION_DELETE: self.handle_delete,
            PUSH_SESSION_EXPIRE: self.handle_expire,
        }

    @property
    def attached(self) -> bool:
        return self._transport is not None

    def attach(self, transport: SignTransport) -> None:
        """Subscribe to the transport's push events."""
        if self._transport is transport:
            return
        self.detach()
        for event, handler in self._handlers.items():
            transport.on(event, handler)
        self._transport = transport

    def detach(self) -> None:
        """Remove the subscriptions made by ``attach``."""
        if self._transport is None:
            return
        for event, handler in self._handlers.items():
            self._transport.off(event, handler)
        self._transport = None

    def handle_update(self, event: Any) -> None:
        payload = self._match(event)
        if payload is None:
            return

        session = self._store.get()
        update: dict[str, Any] = {}
        if "namespaces" in payload.params:
            try:
                update["namespaces"] = {
                    name: SessionNamespace.model_validate(ns)
                    for name, ns in payload.params["namespaces"].items()
                }
            except (ValidationError, AttributeError) as e:
                logger.warning("Ignoring malformed session_update for %s: %s", payload.topic, e)
                return
        if "expiry" in payload.params:
            update["expiry"] = payload.params["expiry"]

        updated = session.model_copy(update=update)
        self._store.set(updated)
        logger.info("Session %s updated", payload.topic)
        self._emitter.emit(SessionEvent.SESSION_UPDATED, updated)

    def handle_delete(self, event: Any) -> None:
        payload = self._match(event)
        if payload is None:
            return
        self._store.clear()
        logger.info("Session %s deleted by peer", payload.topic)
        self._emitter.emit(SessionEvent.DISCONNECTED)

    def handle_expire(self, event: Any) -> None:
        payload = self._match(event)
        if payload is None:
            return
        self._store.clear()
        logger.info("Session %s expired", payload.topic)
        self._emitter.emit(SessionEvent.SESSION_EXPIRED)

    def _match(self, event: Any) -> SessionEventPayload | None:
        """Parse a push event and return it only if it names the stored session."""
        if isinstance(event, SessionEventPayload):
            payload = event
        else:
            try:
                payload = SessionEventPayload.model_validate(event)
            except ValidationError:
                logger.debug("Ignoring push event without a topic: %r", event)
                return None
        if not self._store.matches(payload.topic):
            logger.debug("Ignoring push event for unknown topic %s", payload.topic)
            return None
        return payload
