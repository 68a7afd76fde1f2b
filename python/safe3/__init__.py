"""safe3 - QR-paired remote wallet sessions.

Pair with a mobile wallet by scanning a QR code, then use the approved
session to sign messages, typed data and transactions.

Core:
    ```python
    from safe3 import ClientOptions, Safe3Session

    session = Safe3Session(ClientOptions(project_id="..."), transport_factory)
    await session.connect_wallet()
    signature = await session.sign_message("hello")
    ```

Adapters (require web3):
    ```python
    from safe3 import create_safe3_client

    client = create_safe3_client(options, transport_factory, client="web3")
    await client.connect()
    tx_hash = await client.send_transaction({"to": "0x...", "value": 1})
    ```
"""

from .chains import CHAINS, ChainConfig, chain_scope, get_chain, get_rpc_url
from .config import ClientOptions
from .core import RequestBridge, Safe3Session, SessionState, SessionStore
from .errors import (
    ConfigurationError,
    DeploymentError,
    InitializationError,
    NoAccountsError,
    NotConnectedError,
    PairingError,
    RemoteRequestError,
    Safe3Error,
    SessionClosedError,
    UnsupportedOperationError,
)
from .events import EventEmitter, SessionEvent
from .signer import Safe3Signer
from .transport import PendingPairing, SignTransport, TransportConfig, TransportFactory
from .types import AppMetadata, PairingProposal, Session, SessionEventPayload, SessionNamespace

_ADAPTER_EXPORTS = (
    "ClientType",
    "Safe3AccountSigner",
    "Safe3SmartWallet",
    "Safe3Web3Client",
    "SmartWalletType",
    "create_safe3_client",
    "create_safe3_client_auto",
    "create_smart_wallet_client",
    "get_client_type",
    "is_account_client",
    "is_web3_client",
)

__all__ = [
    # Core
    "ClientOptions",
    "RequestBridge",
    "Safe3Session",
    "Safe3Signer",
    "SessionState",
    "SessionStore",
    # Events
    "EventEmitter",
    "SessionEvent",
    # Types
    "AppMetadata",
    "PairingProposal",
    "Session",
    "SessionEventPayload",
    "SessionNamespace",
    # Transport
    "PendingPairing",
    "SignTransport",
    "TransportConfig",
    "TransportFactory",
    # Chains
    "CHAINS",
    "ChainConfig",
    "chain_scope",
    "get_chain",
    "get_rpc_url",
    # Errors
    "ConfigurationError",
    "DeploymentError",
    "InitializationError",
    "NoAccountsError",
    "NotConnectedError",
    "PairingError",
    "RemoteRequestError",
    "Safe3Error",
    "SessionClosedError",
    "UnsupportedOperationError",
    # Adapters
    *_ADAPTER_EXPORTS,
]


def __getattr__(name: str):
    """Lazy import adapters to avoid requiring web3 at import time."""
    if name in _ADAPTER_EXPORTS:
        from . import adapters as _adapters

        return getattr(_adapters, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
