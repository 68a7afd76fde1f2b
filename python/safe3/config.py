"""Client configuration for safe3 sessions."""

from collections.abc import Callable
from dataclasses import dataclass, field

from .constants import DEFAULT_CHAIN_ID
from .qr import render_terminal_qr
from .types import AppMetadata

# Receives the connection URI and renders it for the user
QRRenderer = Callable[[str], None]


@dataclass(frozen=True)
class ClientOptions:
    """Immutable configuration for a Safe3Session.

    Attributes:
        project_id: Relay project identifier.
        metadata: App identity shown to the wallet (default: Safe3Devs QR Deploy).
        relay_url: Custom relay endpoint. None uses the transport's default.
        log_level: Level for the transport's child logger (e.g. "debug").
        chain_id: Chain used when a request does not name one.
        rpc_url: Custom RPC endpoint for adapters' read-only chain client.
        display_qr: Render the connection URI when pairing.
        qr_renderer: Renderer used when display_qr is set.
    """

    project_id: str
    metadata: AppMetadata = field(default_factory=AppMetadata)
    relay_url: str | None = None
    log_level: str | None = None
    chain_id: int = DEFAULT_CHAIN_ID
    rpc_url: str | None = None
    display_qr: bool = True
    qr_renderer: QRRenderer = render_terminal_qr

    def __post_init__(self) -> None:
        if not self.project_id:
            raise ValueError("project_id is required")
        if self.chain_id <= 0:
            raise ValueError(f"chain_id must be positive, got {self.chain_id}")
