"""
Network configuration for the DAO deployment scripts.

Maps chain ids to the network names used in persisted state file names
(``deployed-<network>.json``) and holds the RPC defaults for each chain.
"""

import os
from typing import Any


# =============================================================================
# CHAIN CONFIGURATIONS
# =============================================================================

CHAINS: dict[str, dict[str, Any]] = {
    "mainnet": {
        "chain_id": 1,
        "name": "Ethereum Mainnet",
        "currency": "ETH",
        "rpc_urls": [
            "https://ethereum-rpc.publicnode.com",
            "https://rpc.ankr.com/eth",
        ],
        "explorer": {
            "name": "Etherscan",
            "url": "https://etherscan.io",
        },
    },
    "holesky": {
        "chain_id": 17000,
        "name": "Holesky Testnet",
        "currency": "ETH",
        "rpc_urls": [
            "https://ethereum-holesky-rpc.publicnode.com",
        ],
        "explorer": {
            "name": "Etherscan Holesky",
            "url": "https://holesky.etherscan.io",
        },
    },
    "sepolia": {
        "chain_id": 11155111,
        "name": "Sepolia Testnet",
        "currency": "ETH",
        "rpc_urls": [
            "https://ethereum-sepolia-rpc.publicnode.com",
        ],
        "explorer": {
            "name": "Etherscan Sepolia",
            "url": "https://sepolia.etherscan.io",
        },
    },
    "local": {
        "chain_id": 1337,
        "name": "Local Devnet",
        "currency": "ETH",
        "rpc_urls": [
            "http://127.0.0.1:8545",
        ],
        "explorer": None,
    },
}

# Chain ID to name mapping
CHAIN_ID_TO_NAME: dict[int, str] = {
    config["chain_id"]: name for name, config in CHAINS.items()
}

DEFAULT_NETWORK: str = "mainnet"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_chain_config(chain: str | int | None = None) -> dict[str, Any]:
    """Get configuration for a specific chain.

    Args:
        chain: Chain name (e.g., 'mainnet', 'holesky') or chain ID.
               If None, uses NETWORK_NAME environment variable or defaults to 'mainnet'.

    Returns:
        Chain configuration dictionary.

    Raises:
        ValueError: If chain is not supported.
    """
    if chain is None:
        chain = os.getenv("NETWORK_NAME", DEFAULT_NETWORK).lower()

    if isinstance(chain, int):
        name = CHAIN_ID_TO_NAME.get(chain)
        if name is None:
            raise ValueError(f"Unsupported chain ID: {chain}")
        chain = name

    chain = chain.lower()
    if chain not in CHAINS:
        raise ValueError(f"Unsupported chain: {chain}. Supported: {list(CHAINS.keys())}")

    return CHAINS[chain]


def get_network_name(chain_id: int | None = None) -> str:
    """Resolve the network name used for the state file.

    NETWORK_NAME wins over the chain id lookup so that forks and devnets
    running with a production chain id can keep their own state file.
    """
    env_name = os.getenv("NETWORK_NAME")
    if env_name:
        return env_name.lower()
    if chain_id is not None and chain_id in CHAIN_ID_TO_NAME:
        return CHAIN_ID_TO_NAME[chain_id]
    return DEFAULT_NETWORK


def get_rpc_url(chain: str | int | None = None) -> str:
    """Get the primary RPC URL for a chain.

    Uses RPC_URL environment variable if set, otherwise returns first default.
    """
    env_rpc = os.getenv("RPC_URL")
    if env_rpc:
        return env_rpc

    config = get_chain_config(chain)
    return config["rpc_urls"][0]


def get_web3(rpc_url: str | None = None):
    """Get a Web3 instance connected to the configured RPC URL.

    Returns:
        Web3: Web3 instance
    """
    from web3 import Web3
    url = rpc_url or get_rpc_url()
    return Web3(Web3.HTTPProvider(url))
