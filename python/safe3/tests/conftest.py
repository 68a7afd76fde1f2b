"""Shared fixtures: an in-memory relay transport and a connected session."""

import asyncio
from typing import Any

import pytest
import pytest_asyncio

from safe3 import ClientOptions, Safe3Session, SessionEvent

TEST_ADDRESS = "0x1111111111111111111111111111111111111111"
TEST_URI = "wc:7f6e@2?relay-protocol=irn&symKey=587d5484ce2a2a6ee3ba1962fdd7e8588e06200c46823bd18fbd67def96ad303"


def make_session_data(
    topic: str = "t1",
    accounts: list[str] | None = None,
) -> dict[str, Any]:
    """Approval payload as a wallet would send it."""
    return {
        "topic": topic,
        "namespaces": {
            "eip155": {
                "accounts": [f"eip155:1:{TEST_ADDRESS}"] if accounts is None else accounts,
                "methods": ["eth_sendTransaction", "personal_sign"],
                "events": ["chainChanged", "accountsChanged"],
            }
        },
    }


class FakePairing:
    """Pending pairing whose approval resolves to a fixed result."""

    def __init__(self, uri: str | None, result: Any) -> None:
        self._uri = uri
        self._result = result

    @property
    def uri(self) -> str | None:
        return self._uri

    async def approval(self) -> Any:
        result = self._result
        if isinstance(result, asyncio.Future):
            result = await result
        if isinstance(result, BaseException):
            raise result
        return result


class FakeTransport:
    """In-memory transport recording every call.

    Attributes:
        approvals: Queued approval results (session dicts, exceptions or futures).
        responses: Method -> result, exception or callable(params).
    """

    def __init__(self, uri: str | None = TEST_URI) -> None:
        self.uri = uri
        self.approvals: list[Any] = []
        self.responses: dict[str, Any] = {}
        self.handlers: dict[str, list] = {}
        self.proposals: list = []
        self.requests: list[dict[str, Any]] = []
        self.disconnects: list = []
        self.connect_error: Exception | None = None
        self.disconnect_error: Exception | None = None

    async def connect(self, proposal):
        self.proposals.append(proposal)
        await asyncio.sleep(0)
        if self.connect_error is not None:
            raise self.connect_error
        result = self.approvals.pop(0) if self.approvals else make_session_data()
        return FakePairing(self.uri, result)

    async def disconnect(self, topic, reason):
        await asyncio.sleep(0)
        if self.disconnect_error is not None:
            raise self.disconnect_error
        self.disconnects.append((topic, reason))

    async def request(self, topic, chain_id, method, params):
        self.requests.append(
            {"topic": topic, "chain_id": chain_id, "method": method, "params": params}
        )
        response = self.responses.get(method, "0xresult")
        if isinstance(response, asyncio.Future):
            response = await response
        else:
            await asyncio.sleep(0)
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(params)
        return response

    def on(self, event, handler):
        self.handlers.setdefault(event, []).append(handler)

    def off(self, event, handler):
        if handler in self.handlers.get(event, []):
            self.handlers[event].remove(handler)

    def push(self, event: str, payload: Any) -> None:
        """Deliver a push event to every subscriber."""
        for handler in list(self.handlers.get(event, [])):
            handler(payload)


class TransportFactorySpy:
    """Transport factory counting how often it is called."""

    def __init__(self, transport: FakeTransport, error: Exception | None = None) -> None:
        self.transport = transport
        self.error = error
        self.configs: list = []

    @property
    def calls(self) -> int:
        return len(self.configs)

    async def __call__(self, config):
        self.configs.append(config)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.transport


class EventRecorder:
    """Records every event a session emits, in order."""

    def __init__(self, session: Safe3Session) -> None:
        self.events: list[tuple[str, tuple]] = []
        for event in SessionEvent:
            session.on(event, self._recorder(event.value))

    def _recorder(self, name: str):
        def record(*args):
            self.events.append((name, args))

        return record

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def of(self, name: str) -> list[tuple]:
        return [args for event, args in self.events if event == name]


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def factory(transport) -> TransportFactorySpy:
    return TransportFactorySpy(transport)


@pytest.fixture
def options() -> ClientOptions:
    return ClientOptions(project_id="test", chain_id=1, display_qr=False)


@pytest.fixture
def session(options, factory) -> Safe3Session:
    return Safe3Session(options, factory)


@pytest.fixture
def recorder(session) -> EventRecorder:
    return EventRecorder(session)


@pytest_asyncio.fixture
async def connected(session) -> Safe3Session:
    await session.connect_wallet()
    return session
