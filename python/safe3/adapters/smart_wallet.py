"""Smart-wallet adapter: contract deployment through a paired smart account."""

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from ..constants import SMART_WALLET_RECEIPT_TIMEOUT_SECONDS
from ..core.session import Safe3Session
from ..types import Session
from .base import ChainAdapter

logger = logging.getLogger(__name__)


class SmartWalletType(str, Enum):
    """Smart wallets that pair through the same QR flow."""

    COINBASE = "coinbase"  # passkey/biometric
    SAFE = "safe"  # multisig
    BICONOMY = "biconomy"  # gasless
    THIRDWEB = "thirdweb"


class Safe3SmartWallet(ChainAdapter):
    """Deploys and interacts with contracts via a smart wallet.

    Smart accounts may take longer to land a transaction, so deployments
    wait up to SMART_WALLET_RECEIPT_TIMEOUT_SECONDS for the receipt.
    """

    client_type = "smart_wallet"

    def __init__(
        self,
        session: Safe3Session,
        wallet_type: SmartWalletType | str,
        **kwargs: Any,
    ):
        super().__init__(session, **kwargs)
        self.wallet_type = SmartWalletType(wallet_type)

    async def connect(self) -> Session:
        session = await super().connect()
        logger.info("Connected to %s Smart Wallet", self.wallet_type.value)
        return session

    async def deploy_contract(
        self,
        abi: Sequence[Mapping[str, Any]],
        bytecode: str,
        args: Sequence[Any] = (),
        *,
        timeout: float | None = SMART_WALLET_RECEIPT_TIMEOUT_SECONDS,
        **tx_fields: Any,
    ) -> str:
        """Deploy through the smart wallet, waiting up to ``timeout`` seconds."""
        wallet_address = await self.get_address()
        logger.info(
            "Deploying contract via %s Smart Wallet %s on %s",
            self.wallet_type.value,
            wallet_address,
            self.chain.name,
        )
        try:
            return await super().deploy_contract(
                abi, bytecode, args, timeout=timeout, **tx_fields
            )
        except Exception as e:
            logger.error("Smart wallet deployment failed: %s", e)
            raise

    def get_contract(self, address: str, abi: Sequence[Mapping[str, Any]]) -> Any:
        """A web3 contract at ``address`` bound to the read-only chain client."""
        return self.get_chain_client().eth.contract(address=address, abi=abi)

    def get_public_client(self) -> Any:
        return self.get_chain_client()
