"""
Configuration package for the DAO deployment scripts.
"""

from dao_deploy.config.network import (
    CHAINS,
    CHAIN_ID_TO_NAME,
    DEFAULT_NETWORK,
    get_chain_config,
    get_network_name,
    get_rpc_url,
    get_web3,
)

from dao_deploy.config.logging_config import (
    ScriptLog,
    get_script_log,
    setup_logger,
)

__all__ = [
    # Network
    'CHAINS',
    'CHAIN_ID_TO_NAME',
    'DEFAULT_NETWORK',
    'get_chain_config',
    'get_network_name',
    'get_rpc_url',
    'get_web3',

    # Logging
    'ScriptLog',
    'get_script_log',
    'setup_logger',
]
