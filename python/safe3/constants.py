"""Constants for safe3 wallet sessions."""

# Namespace for EVM chains (CAIP-2)
EIP155_NAMESPACE = "eip155"

# Default chain when none is configured (Ethereum mainnet)
DEFAULT_CHAIN_ID = 1

# Remote procedure methods
METHOD_SEND_TRANSACTION = "eth_sendTransaction"
METHOD_SIGN_TRANSACTION = "eth_signTransaction"
METHOD_ETH_SIGN = "eth_sign"
METHOD_PERSONAL_SIGN = "personal_sign"
METHOD_SIGN_TYPED_DATA = "eth_signTypedData"
METHOD_SIGN_TYPED_DATA_V4 = "eth_signTypedData_v4"

SUPPORTED_METHODS = [
    METHOD_SEND_TRANSACTION,
    METHOD_SIGN_TRANSACTION,
    METHOD_ETH_SIGN,
    METHOD_PERSONAL_SIGN,
    METHOD_SIGN_TYPED_DATA,
    METHOD_SIGN_TYPED_DATA_V4,
]

SUPPORTED_CHAINS = [
    "eip155:1",
    "eip155:137",
    "eip155:56",
    "eip155:42161",
    "eip155:10",
    "eip155:8453",
]

# Wallet-side events requested in the proposal
EVENT_CHAIN_CHANGED = "chainChanged"
EVENT_ACCOUNTS_CHANGED = "accountsChanged"

SUPPORTED_EVENTS = [EVENT_CHAIN_CHANGED, EVENT_ACCOUNTS_CHANGED]

# Push events delivered by the transport
PUSH_SESSION_UPDATE = "session_update"
PUSH_SESSION_DELETE = "session_delete"
PUSH_SESSION_EXPIRE = "session_expire"

# Disconnect reason sent to the peer
DISCONNECT_REASON_CODE = 6000
DISCONNECT_REASON_MESSAGE = "User disconnected"

# Error codes a peer uses to reject a method it does not support
# 5101: WalletConnect "unsupported methods", 4200: EIP-1193 "unsupported method"
UNSUPPORTED_METHOD_CODES = frozenset({5101, 4200})

# Smart-wallet deployments wait this long for a receipt (seconds)
SMART_WALLET_RECEIPT_TIMEOUT_SECONDS = 120

# Default app identity presented to the wallet
DEFAULT_APP_NAME = "Safe3Devs QR Deploy"
DEFAULT_APP_DESCRIPTION = "Universal QR-based smart contract deployment"
DEFAULT_APP_URL = "https://safe3devs.com"
DEFAULT_APP_ICON = "https://safe3devs.com/icon.png"
