"""
ENS lookups used when verifying APM deployments.
"""

from __future__ import annotations

from ens import ENS


def namehash(name: str) -> str:
    """EIP-137 namehash of ``name`` as a 0x-prefixed hex string."""
    return "0x" + bytes(ENS.namehash(name)).hex()


def get_ens_node_owner(ens_contract, node: str) -> str:
    return ens_contract.call("owner", node)
