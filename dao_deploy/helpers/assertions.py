"""
Equality checks between expected deployment facts and values read from chain.
"""

from __future__ import annotations

from typing import Any

from eth_utils import is_hex_address, to_checksum_address

from .errors import ChainAssertionError


ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def _normalize(value: Any) -> Any:
    # HexBytes / bytes32 values compare by their 0x-prefixed lowercase hex
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, str) and value.startswith(("0x", "0X")):
        return value.lower()
    return value


def assert_equal(actual: Any, expected: Any, label: str) -> None:
    if _normalize(actual) != _normalize(expected):
        raise ChainAssertionError(label, actual, expected)


def assert_address_equal(actual: str, expected: str, label: str) -> None:
    """Compare two addresses regardless of checksum casing."""
    if not is_hex_address(actual) or not is_hex_address(expected):
        raise ChainAssertionError(label, actual, expected, detail="not a valid address")
    if to_checksum_address(actual) != to_checksum_address(expected):
        raise ChainAssertionError(label, to_checksum_address(actual), to_checksum_address(expected))


def assert_not_zero_address(actual: str, label: str) -> None:
    if not is_hex_address(actual) or to_checksum_address(actual) == ZERO_ADDRESS:
        raise ChainAssertionError(label, actual, "a non-zero address")
