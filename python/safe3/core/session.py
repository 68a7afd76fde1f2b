"""Lifecycle controller for a QR-paired wallet session.

Example:
    ```python
    from safe3 import ClientOptions, Safe3Session

    session = Safe3Session(ClientOptions(project_id="..."), transport_factory)
    session.on("qr_ready", lambda uri: print(uri))

    async with session:
        await session.connect_wallet()
        tx_hash = await session.send_transaction({"to": "0x...", "value": "0x0"})
    ```
"""

import asyncio
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from ..config import ClientOptions
from ..constants import DISCONNECT_REASON_CODE, DISCONNECT_REASON_MESSAGE
from ..errors import (
    InitializationError,
    PairingError,
    RemoteRequestError,
    SessionClosedError,
)
from ..events import EventEmitter, Listener, SessionEvent
from ..transport import SignTransport, TransportConfig, TransportFactory
from ..types import DisconnectReason, Session
from .bridge import RequestBridge
from .pairing import PairingInitiator
from .relay import EventRelay
from .store import SessionStore

logger = logging.getLogger(__name__)

TRANSPORT_LOGGER_NAME = "safe3.transport"


class SessionState(str, Enum):
    """Externally observable lifecycle states.

    A disconnected session reports INITIALIZED: the transport persists and
    a new connect_wallet() may be issued.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CLOSED = "closed"


class Safe3Session:
    """Owns the transport handle and the single active wallet session.

    Requests are rejected with NotConnectedError until connect_wallet()
    succeeds. Only one connect attempt runs at a time; concurrent callers
    share its outcome.
    """

    def __init__(self, options: ClientOptions, transport_factory: TransportFactory):
        """Create Safe3Session.

        Args:
            options: Client configuration.
            transport_factory: Builds the relay transport on first use.
        """
        self._options = options
        self._transport_factory = transport_factory
        self._transport: SignTransport | None = None
        self._store = SessionStore()
        self._events = EventEmitter()
        self._relay = EventRelay(self._store, self._events)
        self._pairing = PairingInitiator(
            self._events,
            options.qr_renderer if options.display_qr else None,
        )
        self.bridge = RequestBridge(
            self._store,
            self._events,
            lambda: self._transport,
            options.chain_id,
        )
        self._init_lock = asyncio.Lock()
        self._connect_task: asyncio.Task[Session] | None = None
        self._closed = False

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def state(self) -> SessionState:
        if self._closed:
            return SessionState.CLOSED
        if self._connect_task is not None and not self._connect_task.done():
            return SessionState.CONNECTING
        if self._store.get() is not None:
            return SessionState.CONNECTED
        if self._transport is not None:
            return SessionState.INITIALIZED
        return SessionState.UNINITIALIZED

    # Observers

    def on(self, event: SessionEvent | str, listener: Listener) -> "Safe3Session":
        self._events.on(event, listener)
        return self

    def once(self, event: SessionEvent | str, listener: Listener) -> "Safe3Session":
        self._events.once(event, listener)
        return self

    def off(self, event: SessionEvent | str, listener: Listener) -> "Safe3Session":
        self._events.off(event, listener)
        return self

    # Lifecycle

    async def initialize(self) -> None:
        """Create the transport handle if it does not exist yet.

        Raises:
            InitializationError: If the transport cannot be created.
        """
        self._ensure_open()
        async with self._init_lock:
            if self._transport is not None:
                return
            try:
                config = TransportConfig(
                    project_id=self._options.project_id,
                    metadata=self._options.metadata,
                    relay_url=self._options.relay_url,
                    logger=self._transport_logger(),
                )
                transport = await self._transport_factory(config)
            except Exception as e:
                error = InitializationError(f"Failed to initialize transport: {e}", e)
                logger.error("Failed to initialize Safe3Session: %s", e)
                self._events.emit(SessionEvent.ERROR, error)
                raise error from e

            self._transport = transport
            self._relay.attach(transport)
            logger.info("Safe3Session initialized")

    async def connect_wallet(self) -> Session:
        """Pair with a wallet via QR code and store the approved session.

        Returns:
            The approved session.

        Raises:
            InitializationError: If the transport cannot be created.
            PairingError: If the peer rejects or the pairing fails.
        """
        self._ensure_open()
        if self._connect_task is None or self._connect_task.done():
            self._connect_task = asyncio.create_task(self._connect())
        return await asyncio.shield(self._connect_task)

    async def disconnect_wallet(self) -> None:
        """End the active session. No-op when nothing is connected.

        Raises:
            RemoteRequestError: If the peer cannot be reached; the stored
                session is kept.
        """
        self._ensure_open()
        await self._disconnect()

    def get_session(self) -> Session | None:
        return self._store.get()

    def is_connected(self) -> bool:
        return self._store.get() is not None

    async def cleanup(self) -> None:
        """Disconnect if connected and release every observer registration.

        Safe to call more than once. The object is unusable afterwards.
        """
        if self._closed:
            return

        task = self._connect_task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait([task])

        try:
            if self.is_connected():
                await self._disconnect()
        finally:
            self._relay.detach()
            self._events.remove_all_listeners()
            self._store.clear()
            self._transport = None
            self._closed = True

    async def __aenter__(self) -> "Safe3Session":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.cleanup()

    # Signing (Safe3Signer)

    async def get_address(self) -> str:
        self._ensure_open()
        return await self.bridge.get_address()

    async def send_transaction(self, tx: Mapping[str, Any]) -> Any:
        self._ensure_open()
        return await self.bridge.send_transaction(tx)

    async def sign_transaction(self, tx: Mapping[str, Any]) -> Any:
        self._ensure_open()
        return await self.bridge.sign_transaction(tx)

    async def sign_message(self, message: str, chain_id: int | None = None) -> Any:
        self._ensure_open()
        return await self.bridge.sign_message(message, chain_id)

    async def sign_typed_data(
        self,
        address: str,
        typed_data: Mapping[str, Any] | str,
        chain_id: int | None = None,
    ) -> Any:
        self._ensure_open()
        return await self.bridge.sign_typed_data(address, typed_data, chain_id)

    async def request(
        self,
        method: str,
        params: list[Any] | None = None,
        chain_id: int | None = None,
    ) -> Any:
        self._ensure_open()
        return await self.bridge.request(method, params, chain_id)

    # Internals

    async def _connect(self) -> Session:
        if self._transport is None:
            await self.initialize()

        try:
            session = await self._pairing.pair(self._transport)
        except PairingError as e:
            logger.error("Failed to connect wallet: %s", e)
            self._events.emit(SessionEvent.ERROR, e)
            raise

        self._store.set(session)
        logger.info("Wallet connected (session %s)", session.topic)
        try:
            self._events.emit(SessionEvent.CONNECTED, session)
        except Exception as e:
            # The session stays connected; the listener fault reaches the caller
            logger.error("connected listener failed: %s", e)
            self._events.emit(SessionEvent.ERROR, e)
            raise
        return session

    async def _disconnect(self) -> None:
        session = self._store.get()
        if self._transport is None or session is None:
            return

        reason = DisconnectReason(
            code=DISCONNECT_REASON_CODE,
            message=DISCONNECT_REASON_MESSAGE,
        )
        try:
            await self._transport.disconnect(topic=session.topic, reason=reason)
        except Exception as e:
            error = RemoteRequestError(
                f"Failed to disconnect wallet: {e}", e, method="disconnect"
            )
            logger.error("Failed to disconnect wallet: %s", e)
            self._events.emit(SessionEvent.ERROR, error)
            raise error from e

        # A push event may have already ended this session while we waited
        if self._store.matches(session.topic):
            self._store.clear()
            logger.info("Wallet disconnected (session %s)", session.topic)
            self._events.emit(SessionEvent.DISCONNECTED)

    def _transport_logger(self) -> logging.Logger:
        transport_logger = logging.getLogger(TRANSPORT_LOGGER_NAME)
        if self._options.log_level:
            transport_logger.setLevel(self._options.log_level.upper())
        return transport_logger

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError()
