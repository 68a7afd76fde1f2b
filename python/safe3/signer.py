"""Signer protocol satisfied by Safe3Session and its adapters."""

from typing import Any, Protocol


class Safe3Signer(Protocol):
    """Minimal signer surface consumed by deployment code."""

    async def get_address(self) -> str:
        """Address of the connected wallet."""
        ...

    async def send_transaction(self, tx: Any) -> Any:
        """Send a transaction through the wallet."""
        ...
