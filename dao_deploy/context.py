"""
Script context.

Everything a deployment script touches (the node, the state file, the gas
tally, the transcript) is passed in explicitly through ``ScriptContext`` so
scripts can run against fakes.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

from dao_deploy.config.abis import (
    ACL_ABI,
    APM_REGISTRY_ABI,
    ENS_ABI,
    ENS_SUBDOMAIN_REGISTRAR_ABI,
    KERNEL_ABI,
    LIDO_TEMPLATE_ABI,
)
from dao_deploy.config.logging_config import ScriptLog
from dao_deploy.config.network import get_network_name, get_web3
from dao_deploy.helpers.artifacts import get_artifacts_dir, load_artifact
from dao_deploy.helpers.contracts import ContractHandle, Web3ContractHandle
from dao_deploy.helpers.gas_counter import GasCounter
from dao_deploy.helpers.network_state import NetworkStateStore


CONTRACT_ABIS: dict[str, list[dict]] = {
    "LidoTemplate": LIDO_TEMPLATE_ABI,
    "APMRegistry": APM_REGISTRY_ABI,
    "ENSSubdomainRegistrar": ENS_SUBDOMAIN_REGISTRAR_ABI,
    "ENS": ENS_ABI,
    "Kernel": KERNEL_ABI,
    "ACL": ACL_ABI,
}


@dataclass
class ScriptContext:
    network_name: str
    network_id: int
    state_store: NetworkStateStore
    log: ScriptLog
    contract_factory: Callable[[str, str], ContractHandle]
    w3: Web3 | None = None
    gas_counter: GasCounter = field(default_factory=GasCounter)
    artifacts_dir: Path | None = None

    def at(self, contract_name: str, address: str) -> ContractHandle:
        return self.contract_factory(contract_name, address)

    def load_artifact(self, name: str) -> dict[str, Any]:
        return load_artifact(name, self.network_name, self.artifacts_dir)

    def read_state(self) -> dict[str, Any]:
        return self.state_store.read(self.network_name, self.network_id)

    def persist_state(self, record: dict[str, Any]) -> Path:
        return self.state_store.write(self.network_name, self.network_id, record)


def web3_contract_factory(w3: Web3, account: LocalAccount | None = None) -> Callable[[str, str], ContractHandle]:
    def factory(contract_name: str, address: str) -> ContractHandle:
        abi = CONTRACT_ABIS.get(contract_name)
        if abi is None:
            raise ValueError(f"No ABI registered for {contract_name}")
        return Web3ContractHandle(w3, address, abi, name=contract_name, account=account)
    return factory


def build_context(
    log: ScriptLog,
    rpc_url: str | None = None,
    network_name: str | None = None,
    state_file: str | None = None,
) -> ScriptContext:
    """Connect to the node and assemble a live context from the environment."""
    w3 = get_web3(rpc_url)
    if not w3.is_connected():
        raise ConnectionError(f"Failed to connect to RPC: {rpc_url or os.getenv('RPC_URL')}")

    network_id = w3.eth.chain_id
    private_key = os.getenv("PRIVATE_KEY")
    account = Account.from_key(private_key) if private_key else None

    store = NetworkStateStore.from_env()
    if state_file:
        store = NetworkStateStore(state_file=state_file)

    return ScriptContext(
        network_name=(network_name or get_network_name(network_id)).lower(),
        network_id=network_id,
        state_store=store,
        log=log,
        contract_factory=web3_contract_factory(w3, account),
        w3=w3,
        artifacts_dir=get_artifacts_dir(),
    )
