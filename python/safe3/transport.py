"""Protocols for the relay transport used by safe3 sessions.

The transport multiplexes pairing and session traffic over a relay
service. safe3 does not implement it; a factory that builds one is
supplied by the caller.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol

from .types import AppMetadata, DisconnectReason, PairingProposal, Session

# Handler for transport push events; receives a SessionEventPayload-shaped dict or model
PushHandler = Callable[[Any], None]


@dataclass(frozen=True)
class TransportConfig:
    """Configuration passed to a TransportFactory.

    Attributes:
        project_id: Relay project identifier.
        metadata: App identity shown to the wallet.
        relay_url: Custom relay endpoint, or None for the transport's default.
        logger: Logger the transport should write to.
    """

    project_id: str
    metadata: AppMetadata
    relay_url: str | None = None
    logger: logging.Logger | None = None


class PendingPairing(Protocol):
    """A pairing attempt awaiting the peer's approval."""

    @property
    def uri(self) -> str | None:
        """Connection URI for the peer, if a new pairing was created."""
        ...

    async def approval(self) -> Session | dict[str, Any]:
        """Wait until the peer approves the proposal.

        Returns:
            The approved session.

        Raises:
            Exception: If the peer rejects or the attempt fails.
        """
        ...


class SignTransport(Protocol):
    """Bidirectional channel to a relay carrying session traffic."""

    async def connect(self, proposal: PairingProposal) -> PendingPairing:
        """Start a pairing with the given proposal."""
        ...

    async def disconnect(self, topic: str, reason: DisconnectReason) -> None:
        """End the session identified by ``topic``."""
        ...

    async def request(
        self,
        topic: str,
        chain_id: str,
        method: str,
        params: list[Any],
    ) -> Any:
        """Send a remote procedure call scoped to a session and chain.

        Args:
            topic: Session topic.
            chain_id: CAIP-2 chain scope, e.g. ``eip155:1``.
            method: Remote method name.
            params: Positional parameters.

        Returns:
            The peer's result.
        """
        ...

    def on(self, event: str, handler: PushHandler) -> None:
        """Subscribe to a push event."""
        ...

    def off(self, event: str, handler: PushHandler) -> None:
        """Unsubscribe from a push event."""
        ...


# Builds a transport handle; may raise on invalid configuration
TransportFactory = Callable[[TransportConfig], Awaitable[SignTransport]]
