"""Pairing proposal and approval flow."""

import logging
from typing import Any

from pydantic import ValidationError

from ..config import QRRenderer
from ..constants import (
    EIP155_NAMESPACE,
    SUPPORTED_CHAINS,
    SUPPORTED_EVENTS,
    SUPPORTED_METHODS,
)
from ..errors import PairingError
from ..events import EventEmitter, SessionEvent
from ..qr import display_uri
from ..transport import SignTransport
from ..types import PairingProposal, ProposalNamespace, Session

logger = logging.getLogger(__name__)


def build_proposal() -> PairingProposal:
    """Build the proposal for the fixed set of supported chains and methods."""
    return PairingProposal(
        required_namespaces={
            EIP155_NAMESPACE: ProposalNamespace(
                chains=list(SUPPORTED_CHAINS),
                methods=list(SUPPORTED_METHODS),
                events=list(SUPPORTED_EVENTS),
            )
        }
    )


def coerce_session(raw: Any) -> Session:
    """Validate an approval result into a Session.

    Raises:
        PairingError: If the result is not a valid session.
    """
    if isinstance(raw, Session):
        return raw
    try:
        return Session.model_validate(raw)
    except ValidationError as e:
        raise PairingError(f"Peer returned an invalid session: {e}", e) from e


class PairingInitiator:
    """Creates a pairing, surfaces its URI and awaits the peer's approval."""

    def __init__(
        self,
        emitter: EventEmitter,
        renderer: QRRenderer | None = None,
    ) -> None:
        self._emitter = emitter
        self._renderer = renderer

    async def pair(self, transport: SignTransport) -> Session:
        """Run one pairing attempt.

        The URI is rendered (when a renderer is set) and emitted as
        ``qr_ready`` before waiting for approval.

        Returns:
            The approved session.

        Raises:
            PairingError: If the proposal fails or the peer rejects it.
        """
        proposal = build_proposal()
        try:
            pending = await transport.connect(proposal)
        except Exception as e:
            raise PairingError(f"Failed to create pairing: {e}", e) from e

        uri = pending.uri
        if uri:
            if self._renderer is not None:
                display_uri(uri, self._renderer)
            self._emitter.emit(SessionEvent.QR_READY, uri)

        try:
            raw = await pending.approval()
        except Exception as e:
            raise PairingError(f"Pairing was not approved: {e}", e) from e

        session = coerce_session(raw)
        logger.debug("Pairing approved for session %s", session.topic)
        return session
