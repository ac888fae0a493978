"""
Deployed bytecode verification.
"""

from __future__ import annotations

from typing import Any

from eth_utils import to_checksum_address
from web3 import Web3

from dao_deploy.config.abis import ERC_PROXY_ABI

from .artifacts import deployed_bytecode, masked_segments
from .errors import BytecodeMismatchError, ChainAssertionError


def _strip_hex(code: Any) -> str:
    if isinstance(code, (bytes, bytearray)):
        return bytes(code).hex()
    code = str(code)
    return (code[2:] if code.startswith("0x") else code).lower()


def mask_bytecode(code_hex: str, segments: list[tuple[int, int]]) -> str:
    """Zero out the given byte ranges of a hex string (no 0x prefix)."""
    chars = list(code_hex)
    for start, length in segments:
        lo, hi = start * 2, min((start + length) * 2, len(chars))
        for i in range(lo, hi):
            chars[i] = "0"
    return "".join(chars).lower()


def assert_deployed_bytecode(w3: Web3, address: str, artifact: dict[str, Any], label: str = "") -> None:
    address = to_checksum_address(address)
    name = label or artifact.get("contractName", "contract")

    actual = _strip_hex(w3.eth.get_code(address))
    if not actual:
        raise ChainAssertionError(f"{name} bytecode", "empty code", "deployed contract", detail=f"no contract at {address}")

    expected = deployed_bytecode(artifact)
    segments = masked_segments(artifact)
    if mask_bytecode(actual, segments) != mask_bytecode(expected, segments):
        raise BytecodeMismatchError(f"{name} bytecode", address, actual, expected.lower())


def assert_proxied_contract_bytecode(
    w3: Web3,
    proxy_address: str,
    proxy_artifact: dict[str, Any],
    impl_artifact: dict[str, Any],
    label: str = "",
) -> str:
    """Check a proxy and the implementation it points at; returns the implementation address."""
    proxy_name = proxy_artifact.get("contractName", "proxy")
    impl_name = impl_artifact.get("contractName", "implementation")
    prefix = f"{label}: " if label else ""

    assert_deployed_bytecode(w3, proxy_address, proxy_artifact, f"{prefix}{proxy_name}")

    proxy = w3.eth.contract(address=to_checksum_address(proxy_address), abi=ERC_PROXY_ABI)
    impl_address = proxy.functions.implementation().call()
    assert_deployed_bytecode(w3, impl_address, impl_artifact, f"{prefix}{impl_name}")
    return impl_address
