"""web3-style wallet client backed by a Safe3Session.

Wallet methods go through the session's request bridge scoped to the
adapter's chain; reads go through an ``AsyncWeb3`` public client.

Example:
    ```python
    client = Safe3Web3Client(session, chain_id=8453)
    await client.connect()
    address = await client.deploy_contract(abi, bytecode, ["hello"])
    balance = await client.get_public_client().eth.get_balance(address)
    ```
"""

from collections.abc import Mapping, Sequence
from typing import Any

from .base import ChainAdapter


class Safe3Web3Client(ChainAdapter):
    """Wallet client (signing via the paired wallet) plus public client (reads)."""

    client_type = "web3"

    def get_public_client(self) -> Any:
        """The read-only ``AsyncWeb3`` client for the active chain."""
        return self.get_chain_client()

    async def request(self, method: str, params: list[Any] | None = None) -> Any:
        """Forward an arbitrary wallet method on the active chain."""
        return await self.session.request(method, params, chain_id=self.chain.chain_id)

    async def send_transaction(self, tx: Mapping[str, Any]) -> str:
        """Send a transaction through the wallet.

        Args:
            tx: Transaction request; integer quantities are hex-encoded.

        Returns:
            The transaction hash.
        """
        return await self.submit_transaction(tx)

    async def sign_message(self, message: str) -> str:
        return await self.session.sign_message(message, chain_id=self.chain.chain_id)

    async def sign_typed_data(self, typed_data: Mapping[str, Any] | str) -> str:
        address = await self.session.get_address()
        return await self.session.sign_typed_data(
            address, typed_data, chain_id=self.chain.chain_id
        )

    async def deploy_contract_and_get_instance(
        self,
        abi: Sequence[Mapping[str, Any]],
        bytecode: str,
        args: Sequence[Any] = (),
        **tx_fields: Any,
    ) -> Any:
        """Deploy a contract and return a web3 contract bound to the public client."""
        address = await self.deploy_contract(abi, bytecode, args, **tx_fields)
        return self.get_chain_client().eth.contract(address=address, abi=abi)
