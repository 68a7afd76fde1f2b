"""Account-style signer backed by a Safe3Session.

Provides the signer surface chain libraries expect from a local account
(``address``, ``sign_message``, ``sign_typed_data``, ``sign_transaction``,
``send_transaction``), with every signature produced by the paired wallet.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..constants import EIP155_NAMESPACE
from ..errors import NoAccountsError, NotConnectedError
from ..utils import parse_account, parse_chain_id
from .base import ChainAdapter, normalize_transaction

# Field types of the EIP712Domain struct, in canonical order
EIP712_DOMAIN_FIELDS = (
    ("name", "string"),
    ("version", "string"),
    ("chainId", "uint256"),
    ("verifyingContract", "address"),
    ("salt", "bytes32"),
)


def build_typed_data(
    domain: Mapping[str, Any],
    types: Mapping[str, list[Mapping[str, str]]],
    primary_type: str,
    message: Mapping[str, Any],
) -> dict[str, Any]:
    """Assemble a full EIP-712 document, deriving EIP712Domain when absent."""
    all_types: dict[str, list[dict[str, str]]] = {}
    if "EIP712Domain" not in types:
        all_types["EIP712Domain"] = [
            {"name": name, "type": type_} for name, type_ in EIP712_DOMAIN_FIELDS if name in domain
        ]
    for type_name, fields in types.items():
        all_types[type_name] = [{"name": f["name"], "type": f["type"]} for f in fields]

    return {
        "types": all_types,
        "domain": dict(domain),
        "primaryType": primary_type,
        "message": dict(message),
    }


@dataclass
class TransactionResponse:
    """A transaction submitted through the wallet.

    Attributes:
        hash: Transaction hash reported by the wallet.
        from_address: Sender address.
        to: Recipient, None for deployments.
        value: Value as a hex quantity.
        data: Call data.
        chain_id: Chain the transaction was sent on.
        nonce: Nonce as a hex quantity, if the request set one.
    """

    hash: str
    from_address: str
    to: str | None
    value: str
    data: str
    chain_id: int
    nonce: str | None = None
    _signer: "Safe3AccountSigner | None" = field(default=None, repr=False, compare=False)

    async def wait(self, timeout: float | None = None) -> Any:
        """Wait for the receipt through the signer's chain client."""
        if self._signer is None:
            raise RuntimeError("Transaction response is not bound to a signer")
        return await self._signer.wait_for_receipt(self.hash, timeout)


class Safe3AccountSigner(ChainAdapter):
    """Account-style signer whose keys live in the paired wallet."""

    client_type = "account"

    @property
    def address(self) -> str:
        """Address of the first EVM account in the current session.

        Raises:
            NotConnectedError: If no session is active.
            NoAccountsError: If the session holds no usable EVM account.
        """
        session = self.session.get_session()
        if session is None:
            raise NotConnectedError("Signer not connected. Call connect() first.")
        accounts = session.accounts(EIP155_NAMESPACE)
        if not accounts:
            raise NoAccountsError()
        try:
            _, _, address = parse_account(accounts[0])
        except ValueError as e:
            raise NoAccountsError(str(e)) from e
        return address

    def get_provider(self) -> Any:
        """The read-only ``AsyncWeb3`` client for the active chain."""
        return self.get_chain_client()

    async def sign_message(self, message: str | bytes) -> str:
        """Sign with ``personal_sign``; bytes are sent as UTF-8 text when possible."""
        if isinstance(message, (bytes, bytearray)):
            try:
                message = bytes(message).decode("utf-8")
            except UnicodeDecodeError:
                message = "0x" + bytes(message).hex()
        return await self.session.sign_message(message, chain_id=self.chain.chain_id)

    async def sign_typed_data(
        self,
        domain: Mapping[str, Any],
        types: Mapping[str, list[Mapping[str, str]]],
        primary_type: str,
        message: Mapping[str, Any],
    ) -> str:
        """Sign EIP-712 typed data.

        Args:
            domain: EIP-712 domain (name, version, chainId, verifyingContract, salt).
            types: Struct definitions, EIP712Domain optional.
            primary_type: Name of the struct being signed.
            message: Values of the primary struct.

        Returns:
            Hex-encoded signature as returned by the wallet.
        """
        typed_data = build_typed_data(domain, types, primary_type, message)
        chain_id = (
            parse_chain_id(domain["chainId"]) if "chainId" in domain else self.chain.chain_id
        )
        address = await self.get_address()
        return await self.session.sign_typed_data(address, typed_data, chain_id=chain_id)

    async def sign_transaction(self, tx: Mapping[str, Any]) -> str:
        """Sign ``tx`` without broadcasting it."""
        address = await self.get_address()
        params = normalize_transaction(tx, from_address=address, chain_id=self.chain.chain_id)
        return await self.session.sign_transaction(params)

    async def send_transaction(self, tx: Mapping[str, Any]) -> TransactionResponse:
        """Send ``tx`` through the wallet.

        Returns:
            A response whose ``wait()`` resolves to the receipt.
        """
        address = await self.get_address()
        params = normalize_transaction(tx, from_address=address, chain_id=self.chain.chain_id)
        tx_hash = await self.session.send_transaction(params)
        return TransactionResponse(
            hash=tx_hash,
            from_address=params["from"],
            to=params.get("to"),
            value=params["value"],
            data=params["data"],
            chain_id=parse_chain_id(params["chainId"]),
            nonce=params.get("nonce"),
            _signer=self,
        )
