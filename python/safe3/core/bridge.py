"""Translates signing operations into remote calls on the active session."""

import logging
from collections.abc import Callable, Mapping
from typing import Any, NoReturn

from ..chains import chain_scope
from ..constants import (
    EIP155_NAMESPACE,
    METHOD_PERSONAL_SIGN,
    METHOD_SEND_TRANSACTION,
    METHOD_SIGN_TRANSACTION,
    METHOD_SIGN_TYPED_DATA_V4,
    UNSUPPORTED_METHOD_CODES,
)
from ..errors import (
    NoAccountsError,
    NotConnectedError,
    RemoteRequestError,
    Safe3Error,
    UnsupportedOperationError,
)
from ..events import EventEmitter, SessionEvent
from ..transport import SignTransport
from ..types import Session
from ..utils import parse_account, parse_chain_id, serialize_typed_data
from .store import SessionStore

logger = logging.getLogger(__name__)


def _error_code(error: BaseException) -> Any:
    code = getattr(error, "code", None)
    if code is None and error.args and isinstance(error.args[0], Mapping):
        code = error.args[0].get("code")
    return code


class RequestBridge:
    """Typed signing operations scoped to the stored session's topic.

    Every operation reads the store once and fails with NotConnectedError,
    before touching the transport, when no session is active. Failures
    are emitted as ``error`` and raised to the caller.
    """

    def __init__(
        self,
        store: SessionStore,
        emitter: EventEmitter,
        get_transport: Callable[[], SignTransport | None],
        default_chain_id: int,
    ) -> None:
        self._store = store
        self._emitter = emitter
        self._get_transport = get_transport
        self._default_chain_id = default_chain_id

    @property
    def default_chain_id(self) -> int:
        return self._default_chain_id

    async def get_address(self) -> str:
        """Address of the first account in the session's EVM namespace."""
        session, _ = self._require_session()
        return self._address_of(session)

    async def send_transaction(self, tx: Mapping[str, Any]) -> Any:
        """Ask the wallet to sign and broadcast ``tx``.

        The chain scope comes from ``tx["chainId"]`` when present.

        Returns:
            The remote result (a transaction hash), unvalidated.
        """
        session, transport = self._require_session()
        chain_id = self._chain_id_of(tx, METHOD_SEND_TRANSACTION)
        return await self._call(
            transport, session, chain_id, METHOD_SEND_TRANSACTION, [dict(tx)]
        )

    async def sign_transaction(self, tx: Mapping[str, Any]) -> Any:
        """Ask the wallet to sign ``tx`` without broadcasting it."""
        session, transport = self._require_session()
        chain_id = self._chain_id_of(tx, METHOD_SIGN_TRANSACTION)
        return await self._call(
            transport, session, chain_id, METHOD_SIGN_TRANSACTION, [dict(tx)]
        )

    async def sign_message(self, message: str, chain_id: int | None = None) -> Any:
        """Request a ``personal_sign`` signature over ``message``."""
        session, transport = self._require_session()
        address = self._address_of(session)
        return await self._call(
            transport,
            session,
            chain_id or self._default_chain_id,
            METHOD_PERSONAL_SIGN,
            [message, address],
        )

    async def sign_typed_data(
        self,
        address: str,
        typed_data: Mapping[str, Any] | str,
        chain_id: int | None = None,
    ) -> Any:
        """Request an EIP-712 signature; typed data is sent as compact JSON."""
        session, transport = self._require_session()
        return await self._call(
            transport,
            session,
            chain_id or self._default_chain_id,
            METHOD_SIGN_TYPED_DATA_V4,
            [address, serialize_typed_data(typed_data)],
        )

    async def request(
        self,
        method: str,
        params: list[Any] | None = None,
        chain_id: int | None = None,
    ) -> Any:
        """Send an arbitrary wallet method scoped to the session."""
        session, transport = self._require_session()
        return await self._call(
            transport, session, chain_id or self._default_chain_id, method, list(params or [])
        )

    def _require_session(self) -> tuple[Session, SignTransport]:
        session = self._store.get()
        transport = self._get_transport()
        if session is None or transport is None:
            self._fail(NotConnectedError())
        return session, transport

    def _address_of(self, session: Session) -> str:
        accounts = session.accounts(EIP155_NAMESPACE)
        if not accounts:
            self._fail(NoAccountsError())
        try:
            _, _, address = parse_account(accounts[0])
        except ValueError as e:
            self._fail(NoAccountsError(str(e)))
        return address

    def _chain_id_of(self, tx: Mapping[str, Any], method: str) -> int:
        value = tx.get("chainId")
        if value is None:
            return self._default_chain_id
        try:
            return parse_chain_id(value)
        except ValueError as e:
            self._fail(RemoteRequestError(str(e), e, method=method), e)

    async def _call(
        self,
        transport: SignTransport,
        session: Session,
        chain_id: int,
        method: str,
        params: list[Any],
    ) -> Any:
        logger.debug("Requesting %s on %s (session %s)", method, chain_scope(chain_id), session.topic)
        try:
            return await transport.request(
                topic=session.topic,
                chain_id=chain_scope(chain_id),
                method=method,
                params=params,
            )
        except Exception as e:
            code = _error_code(e)
            error_cls = (
                UnsupportedOperationError
                if isinstance(code, int) and code in UNSUPPORTED_METHOD_CODES
                else RemoteRequestError
            )
            logger.error("Failed to execute %s: %s", method, e)
            self._fail(error_cls(f"{method} failed: {e}", e, method=method, code=code), e)

    def _fail(self, error: Safe3Error, cause: BaseException | None = None) -> NoReturn:
        self._emitter.emit(SessionEvent.ERROR, error)
        raise error from cause
