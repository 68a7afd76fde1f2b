"""EVM chain registry used by the adapters."""

from dataclasses import dataclass

from .constants import EIP155_NAMESPACE

FALLBACK_RPC_URL = "https://eth.llamarpc.com"


@dataclass(frozen=True)
class ChainConfig:
    """Static description of an EVM chain.

    Attributes:
        chain_id: EIP-155 chain id.
        name: Human-readable name.
        rpc_url: Public JSON-RPC endpoint for read-only calls.
        native_symbol: Symbol of the native currency.
    """

    chain_id: int
    name: str
    rpc_url: str
    native_symbol: str = "ETH"

    @property
    def scope(self) -> str:
        return chain_scope(self.chain_id)


CHAINS: dict[int, ChainConfig] = {
    1: ChainConfig(1, "Ethereum", "https://eth.llamarpc.com"),
    137: ChainConfig(137, "Polygon", "https://polygon.llamarpc.com", "POL"),
    56: ChainConfig(56, "BNB Smart Chain", "https://bsc.llamarpc.com", "BNB"),
    42161: ChainConfig(42161, "Arbitrum One", "https://arbitrum.llamarpc.com"),
    10: ChainConfig(10, "OP Mainnet", "https://optimism.llamarpc.com"),
    8453: ChainConfig(8453, "Base", "https://base.llamarpc.com"),
}


def chain_scope(chain_id: int) -> str:
    """CAIP-2 scope for an EVM chain id, e.g. ``eip155:1``."""
    return f"{EIP155_NAMESPACE}:{int(chain_id)}"


def get_chain(chain_id: int, rpc_url: str | None = None) -> ChainConfig:
    """Get the configuration for a chain.

    Unknown chains get a generic config pointing at ``rpc_url``, or at
    the mainnet public endpoint when no RPC URL is given.
    """
    chain = CHAINS.get(chain_id)
    if chain is None:
        return ChainConfig(chain_id, f"Chain {chain_id}", rpc_url or FALLBACK_RPC_URL)
    if rpc_url:
        return ChainConfig(chain.chain_id, chain.name, rpc_url, chain.native_symbol)
    return chain


def get_rpc_url(chain_id: int, custom_url: str | None = None) -> str:
    """Get the RPC URL for a chain."""
    return get_chain(chain_id, custom_url).rpc_url
