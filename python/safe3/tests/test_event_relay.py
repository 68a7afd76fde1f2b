"""Tests for push-event reconciliation (session_update/delete/expire)."""

import pytest

from safe3 import EventEmitter, NotConnectedError, Session, SessionEventPayload, SessionStore
from safe3.core import EventRelay

from .conftest import EventRecorder, FakeTransport, make_session_data

NEW_ADDRESS = "0x2222222222222222222222222222222222222222"


def update_params(address: str = NEW_ADDRESS) -> dict:
    return {
        "namespaces": {
            "eip155": {
                "accounts": [f"eip155:1:{address}"],
                "methods": ["personal_sign"],
                "events": ["accountsChanged"],
            }
        }
    }


class TestSessionDelete:
    @pytest.mark.asyncio
    async def test_matching_topic_disconnects(self, connected, transport):
        recorder = EventRecorder(connected)

        transport.push("session_delete", {"topic": "t1"})

        assert connected.is_connected() is False
        assert recorder.names() == ["disconnected"]

    @pytest.mark.asyncio
    async def test_disconnected_fires_once(self, connected, transport):
        recorder = EventRecorder(connected)

        transport.push("session_delete", {"topic": "t1"})
        transport.push("session_delete", {"topic": "t1"})

        assert recorder.of("disconnected") == [()]

    @pytest.mark.asyncio
    async def test_unknown_topic_ignored(self, connected, transport):
        before = connected.get_session()
        recorder = EventRecorder(connected)

        transport.push("session_delete", {"topic": "other"})

        assert connected.get_session() is before
        assert recorder.events == []


class TestSessionExpire:
    @pytest.mark.asyncio
    async def test_matching_topic_expires(self, connected, transport):
        recorder = EventRecorder(connected)

        transport.push("session_expire", {"topic": "t1"})

        assert connected.is_connected() is False
        assert recorder.names() == ["session_expired"]
        with pytest.raises(NotConnectedError):
            await connected.get_address()

    @pytest.mark.asyncio
    async def test_unknown_topic_ignored(self, connected, transport):
        transport.push("session_expire", {"topic": "t2"})
        assert connected.is_connected() is True

    @pytest.mark.asyncio
    async def test_expiry_is_not_an_error(self, connected, transport):
        recorder = EventRecorder(connected)
        transport.push("session_expire", {"topic": "t1"})
        assert recorder.of("error") == []


class TestSessionUpdate:
    @pytest.mark.asyncio
    async def test_matching_topic_updates_namespaces(self, connected, transport):
        recorder = EventRecorder(connected)

        transport.push("session_update", {"topic": "t1", "params": update_params()})

        session = connected.get_session()
        assert connected.is_connected() is True
        assert session.topic == "t1"
        assert session.accounts() == [f"eip155:1:{NEW_ADDRESS}"]
        assert recorder.of("session_updated") == [(session,)]
        assert await connected.get_address() == NEW_ADDRESS

    @pytest.mark.asyncio
    async def test_update_replaces_stored_object(self, connected, transport):
        before = connected.get_session()

        transport.push("session_update", {"topic": "t1", "params": {"expiry": 1_900_000_000}})

        after = connected.get_session()
        assert after is not before
        assert after.expiry == 1_900_000_000
        assert after.namespaces == before.namespaces
        assert before.expiry is None

    @pytest.mark.asyncio
    async def test_mismatched_topic_leaves_store_unchanged(self, connected, transport):
        before = connected.get_session()
        recorder = EventRecorder(connected)

        transport.push("session_update", {"topic": "t2", "params": update_params()})

        assert connected.get_session() is before
        assert recorder.of("session_updated") == []

    @pytest.mark.asyncio
    async def test_malformed_namespaces_ignored(self, connected, transport):
        before = connected.get_session()

        transport.push("session_update", {"topic": "t1", "params": {"namespaces": "bogus"}})

        assert connected.get_session() is before

    @pytest.mark.asyncio
    async def test_accepts_payload_model(self, connected, transport):
        transport.push(
            "session_update",
            SessionEventPayload(topic="t1", params=update_params()),
        )
        assert await connected.get_address() == NEW_ADDRESS


class TestEventRelay:
    """EventRelay in isolation."""

    def _relay(self):
        store = SessionStore()
        emitter = EventEmitter()
        return store, emitter, EventRelay(store, emitter)

    def test_attach_and_detach(self):
        _, _, relay = self._relay()
        transport = FakeTransport()

        relay.attach(transport)
        relay.attach(transport)
        assert relay.attached is True
        assert all(len(handlers) == 1 for handlers in transport.handlers.values())

        relay.detach()
        assert relay.attached is False
        assert all(handlers == [] for handlers in transport.handlers.values())

    def test_events_without_session_ignored(self):
        store, emitter, relay = self._relay()
        fired = []
        emitter.on("disconnected", lambda: fired.append(True))

        relay.handle_delete({"topic": "t1"})
        relay.handle_update({"topic": "t1", "params": update_params()})

        assert store.get() is None
        assert fired == []

    def test_event_without_topic_ignored(self):
        store, _, relay = self._relay()
        store.set(Session.model_validate(make_session_data()))

        relay.handle_expire({"params": {}})

        assert store.get() is not None
