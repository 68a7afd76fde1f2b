"""Chain adapters that expose a Safe3Session to web3-style code."""

from .account import Safe3AccountSigner, TransactionResponse, build_typed_data
from .base import ChainAdapter, make_chain_client, normalize_transaction
from .factory import (
    ClientType,
    create_safe3_client,
    create_safe3_client_auto,
    create_smart_wallet_client,
    get_client_type,
    is_account_client,
    is_web3_client,
)
from .smart_wallet import Safe3SmartWallet, SmartWalletType
from .web3_client import Safe3Web3Client

__all__ = [
    "ChainAdapter",
    "ClientType",
    "Safe3AccountSigner",
    "Safe3SmartWallet",
    "Safe3Web3Client",
    "SmartWalletType",
    "TransactionResponse",
    "build_typed_data",
    "create_safe3_client",
    "create_safe3_client_auto",
    "create_smart_wallet_client",
    "get_client_type",
    "is_account_client",
    "is_web3_client",
    "make_chain_client",
    "normalize_transaction",
]
