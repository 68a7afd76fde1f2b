"""Construction helpers for safe3 chain adapters.

Callers name the adapter they want; ``create_safe3_client_auto`` tries
each adapter in a fixed preference order and returns the first that can
be built.
"""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

from ..config import ClientOptions
from ..core.session import Safe3Session
from ..errors import ConfigurationError
from ..transport import TransportFactory
from .account import Safe3AccountSigner
from .base import ChainAdapter
from .smart_wallet import Safe3SmartWallet, SmartWalletType
from .web3_client import Safe3Web3Client

logger = logging.getLogger(__name__)


class ClientType(str, Enum):
    """Adapters selectable through the factory."""

    WEB3 = "web3"
    ACCOUNT = "account"


Safe3Client = Safe3Web3Client | Safe3AccountSigner

_ADAPTERS: dict[ClientType, type[ChainAdapter]] = {
    ClientType.WEB3: Safe3Web3Client,
    ClientType.ACCOUNT: Safe3AccountSigner,
}

DEFAULT_PREFERENCE = (ClientType.WEB3, ClientType.ACCOUNT)


def create_safe3_client(
    options: ClientOptions,
    transport_factory: TransportFactory,
    client: ClientType | str = ClientType.WEB3,
    **adapter_kwargs: Any,
) -> Safe3Client:
    """Create a session and wrap it in the requested adapter.

    Args:
        options: Client configuration.
        transport_factory: Builds the relay transport.
        client: Adapter to build ("web3" or "account").
        adapter_kwargs: Extra adapter arguments (chain_id, rpc_url,
            chain_client_factory).

    Raises:
        ConfigurationError: If the client type is unknown.
    """
    try:
        kind = ClientType(client)
    except ValueError:
        supported = ", ".join(f"'{t.value}'" for t in ClientType)
        raise ConfigurationError(
            f"Unsupported client type: {client}. Supported types: {supported}"
        ) from None

    session = Safe3Session(options, transport_factory)
    return _ADAPTERS[kind](session, **adapter_kwargs)


def create_safe3_client_auto(
    options: ClientOptions,
    transport_factory: TransportFactory,
    preference: Sequence[ClientType | str] = DEFAULT_PREFERENCE,
    **adapter_kwargs: Any,
) -> Safe3Client:
    """Build the first adapter in ``preference`` that constructs successfully.

    Raises:
        ConfigurationError: If no adapter could be built.
    """
    failures: list[str] = []
    for client in preference:
        try:
            return create_safe3_client(options, transport_factory, client, **adapter_kwargs)
        except Exception as e:
            logger.debug("Could not create %s client: %s", client, e)
            failures.append(f"{getattr(client, 'value', client)}: {e}")

    raise ConfigurationError("No safe3 client could be created (" + "; ".join(failures) + ")")


def create_smart_wallet_client(
    options: ClientOptions,
    transport_factory: TransportFactory,
    wallet_type: SmartWalletType | str,
    **adapter_kwargs: Any,
) -> Safe3SmartWallet:
    """Create a session wrapped in a smart-wallet adapter."""
    session = Safe3Session(options, transport_factory)
    return Safe3SmartWallet(session, wallet_type, **adapter_kwargs)


def get_client_type(client: ChainAdapter) -> ClientType:
    """Adapter type of a client built by this module."""
    if isinstance(client, Safe3AccountSigner):
        return ClientType.ACCOUNT
    if isinstance(client, Safe3Web3Client):
        return ClientType.WEB3
    raise ConfigurationError(f"Unknown client: {type(client).__name__}")


def is_web3_client(client: Any) -> bool:
    return isinstance(client, Safe3Web3Client)


def is_account_client(client: Any) -> bool:
    return isinstance(client, Safe3AccountSigner)
