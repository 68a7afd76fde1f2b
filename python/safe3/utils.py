"""Helpers for account strings, chain ids and request parameters."""

import json
from collections.abc import Mapping
from typing import Any

from eth_utils import to_hex

# Transaction fields carried as hex quantities on the wire
QUANTITY_FIELDS = (
    "value",
    "gas",
    "gasPrice",
    "maxFeePerGas",
    "maxPriorityFeePerGas",
    "nonce",
)


def parse_account(account: str) -> tuple[str, str, str]:
    """Split a chain-qualified account into (namespace, chain_id, address).

    Args:
        account: Account string such as ``eip155:1:0xabc...``.

    Raises:
        ValueError: If the string does not have three colon-separated parts.
    """
    parts = account.split(":")
    if len(parts) != 3 or not all(parts):
        raise ValueError(f"Invalid chain-qualified account: {account!r}")
    return parts[0], parts[1], parts[2]


def parse_chain_id(value: Any) -> int:
    """Parse a chain id given as int, decimal string, hex string or CAIP-2."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid chain id: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if ":" in text:
            text = text.rsplit(":", 1)[1]
        if text.lower().startswith("0x"):
            return int(text, 16)
        if text.isdigit():
            return int(text)
    raise ValueError(f"Invalid chain id: {value!r}")


def to_quantity(value: Any) -> str:
    """Encode an integer-like value as a 0x-prefixed hex quantity."""
    if isinstance(value, str):
        if value.lower().startswith("0x"):
            return value
        return to_hex(int(value))
    return to_hex(int(value))


def serialize_typed_data(typed_data: Mapping[str, Any] | str) -> str:
    """Canonical compact JSON form of an EIP-712 typed data document."""
    if isinstance(typed_data, str):
        return typed_data
    return json.dumps(typed_data, separators=(",", ":"), default=_json_default)


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def drop_none(data: Mapping[str, Any]) -> dict[str, Any]:
    """Copy a mapping without its None values."""
    return {k: v for k, v in data.items() if v is not None}
