"""Shared plumbing for chain adapters built on a Safe3Session.

Adapters hold a reference to the session and never keep their own copy
of session state; every signing call goes back through the session's
request bridge. Reads (balances, receipts, contract calls) use a
lazily-built ``web3.AsyncWeb3`` client for the adapter's current chain.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3

from ..chains import ChainConfig, get_chain
from ..core.session import Safe3Session
from ..errors import DeploymentError
from ..types import Session
from ..utils import QUANTITY_FIELDS, drop_none, to_quantity

logger = logging.getLogger(__name__)

# Builds the read-only chain client for a chain
ChainClientFactory = Callable[[ChainConfig], Any]


def make_chain_client(chain: ChainConfig) -> AsyncWeb3:
    """Create a read-only web3 client for the chain's RPC endpoint."""
    return AsyncWeb3(AsyncHTTPProvider(chain.rpc_url))


def normalize_transaction(
    tx: Mapping[str, Any],
    *,
    from_address: str,
    chain_id: int,
) -> dict[str, Any]:
    """Convert a transaction request into the wallet's wire shape.

    Quantities become hex strings, ``gasLimit`` is accepted as an alias of
    ``gas``, ``from`` and ``chainId`` are filled in, and unset fields are
    dropped.

    Args:
        tx: Transaction request (web3 ``TxParams`` style keys).
        from_address: Sender, the connected wallet's address.
        chain_id: Chain the transaction targets when ``tx`` has no chainId.

    Returns:
        Transaction dict ready for ``eth_sendTransaction``.
    """
    fields = dict(tx)
    if "gasLimit" in fields and fields.get("gas") is None:
        fields["gas"] = fields.pop("gasLimit")
    else:
        fields.pop("gasLimit", None)

    out: dict[str, Any] = {
        "from": fields.get("from") or from_address,
        "to": fields.get("to"),
        "data": fields.get("data") or "0x",
        "value": to_quantity(fields.get("value") or 0),
        "chainId": fields.get("chainId") or chain_id,
    }
    for key in QUANTITY_FIELDS:
        if key == "value":
            continue
        if fields.get(key) is not None:
            out[key] = to_quantity(fields[key])

    return drop_none(out)


class ChainAdapter:
    """Base for adapters that expose a Safe3Session to chain libraries.

    Attributes:
        session: The wallet session every signing call goes through.
        client_type: Identifier used by the adapter factory.
    """

    client_type = ""

    def __init__(
        self,
        session: Safe3Session,
        *,
        chain_id: int | None = None,
        rpc_url: str | None = None,
        chain_client_factory: ChainClientFactory = make_chain_client,
    ):
        """Create the adapter.

        Args:
            session: Wallet session to sign with.
            chain_id: Active chain (default: the session's configured chain).
            rpc_url: RPC endpoint for the active chain (default: the
                session's configured RPC, then the chain's public endpoint).
            chain_client_factory: Builds the read-only chain client.
        """
        self.session = session
        options = session.options
        self._chain = get_chain(chain_id or options.chain_id, rpc_url or options.rpc_url)
        self._chain_client_factory = chain_client_factory
        self._chain_client: Any = None

    @property
    def chain(self) -> ChainConfig:
        return self._chain

    def get_chain(self) -> ChainConfig:
        return self._chain

    def get_chain_client(self) -> Any:
        """Read-only chain client for the active chain, built on first use."""
        if self._chain_client is None:
            self._chain_client = self._chain_client_factory(self._chain)
        return self._chain_client

    async def switch_chain(self, chain_id: int, rpc_url: str | None = None) -> ChainConfig:
        """Make ``chain_id`` the active chain.

        The chain client is rebuilt for the new endpoint on next use.
        """
        self._chain = get_chain(chain_id, rpc_url)
        self._chain_client = None
        logger.info("Switched to chain %s (%s)", self._chain.name, chain_id)
        return self._chain

    async def connect(self) -> Session:
        """Pair with the wallet through the underlying session."""
        return await self.session.connect_wallet()

    def is_connected(self) -> bool:
        return self.session.is_connected()

    async def get_address(self) -> str:
        return await self.session.get_address()

    async def submit_transaction(self, tx: Mapping[str, Any]) -> str:
        """Send ``tx`` through the wallet on the active chain.

        Returns:
            The transaction hash reported by the wallet.
        """
        address = await self.session.get_address()
        params = normalize_transaction(tx, from_address=address, chain_id=self._chain.chain_id)
        return await self.session.send_transaction(params)

    async def wait_for_receipt(self, tx_hash: str, timeout: float | None = None) -> Any:
        """Poll the chain client until ``tx_hash`` is mined."""
        client = self.get_chain_client()
        if timeout is None:
            return await client.eth.wait_for_transaction_receipt(tx_hash)
        return await client.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)

    async def get_balance(self, address: str | None = None) -> int:
        """Native balance (wei) of ``address``, default the wallet's."""
        address = address or await self.get_address()
        return await self.get_chain_client().eth.get_balance(address)

    def build_deploy_data(
        self,
        abi: Sequence[Mapping[str, Any]],
        bytecode: str,
        args: Sequence[Any] = (),
    ) -> str:
        """Creation bytecode with ABI-encoded constructor arguments."""
        contract = self.get_chain_client().eth.contract(abi=abi, bytecode=bytecode)
        return contract.constructor(*args).data_in_transaction

    async def deploy_contract(
        self,
        abi: Sequence[Mapping[str, Any]],
        bytecode: str,
        args: Sequence[Any] = (),
        *,
        value: int | None = None,
        gas: int | None = None,
        gas_price: int | None = None,
        max_fee_per_gas: int | None = None,
        max_priority_fee_per_gas: int | None = None,
        timeout: float | None = None,
    ) -> str:
        """Deploy a contract through the wallet and wait for its receipt.

        Returns:
            The deployed contract's address.

        Raises:
            DeploymentError: If the receipt carries no contract address.
        """
        tx = drop_none(
            {
                "data": self.build_deploy_data(abi, bytecode, args),
                "value": value,
                "gas": gas,
                "gasPrice": gas_price,
                "maxFeePerGas": max_fee_per_gas,
                "maxPriorityFeePerGas": max_priority_fee_per_gas,
            }
        )
        tx_hash = await self.submit_transaction(tx)
        logger.info("Deployment transaction sent: %s", tx_hash)

        receipt = await self.wait_for_receipt(tx_hash, timeout)
        contract_address = receipt.get("contractAddress") if receipt else None
        if not contract_address:
            raise DeploymentError(
                "Contract deployment failed - no contract address in receipt"
            )

        logger.info("Contract deployed at %s (tx %s)", contract_address, tx_hash)
        return contract_address

    async def close(self) -> None:
        """Drop the chain client and clean up the session."""
        self._chain_client = None
        await self.session.cleanup()
