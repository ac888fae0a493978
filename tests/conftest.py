from __future__ import annotations

import logging
from typing import Any

import pytest
from eth_utils import keccak
from hexbytes import HexBytes
from web3 import Web3

from dao_deploy.config.abis import ACL_ABI
from dao_deploy.config.logging_config import ScriptLog
from dao_deploy.context import ScriptContext
from dao_deploy.helpers.network_state import NetworkStateStore


def addr(n: int) -> str:
    return "0x" + f"{n:040x}"


def make_event(block: int, log_index: int = 0, **args: Any) -> dict:
    return {"blockNumber": block, "logIndex": log_index, "args": args}


SET_PERMISSION_TOPIC = HexBytes(keccak(text="SetPermission(address,address,bytes32,bool)"))
_ACL_DECODER = Web3().eth.contract(abi=ACL_ABI)


def _address_topic(address: str) -> HexBytes:
    return HexBytes(bytes(12) + bytes.fromhex(address[2:]))


def decoded_set_permission(block: int, log_index: int, entity: str, app: str, role: str, allowed: bool = True) -> Any:
    """``SetPermission`` log run through web3's decoder, as a node-backed handle returns it."""
    raw = {
        "address": Web3.to_checksum_address(addr(0xAC1)),
        "topics": [SET_PERMISSION_TOPIC, _address_topic(entity), _address_topic(app), HexBytes(role)],
        "data": HexBytes(int(allowed).to_bytes(32, "big")),
        "blockNumber": block,
        "logIndex": log_index,
        "transactionIndex": 0,
        "transactionHash": HexBytes(bytes([block % 256]) * 32),
        "blockHash": HexBytes(b"\x22" * 32),
    }
    return _ACL_DECODER.events.SetPermission().process_log(raw)


class FakeContract:
    """In-memory ``ContractHandle``."""

    def __init__(self, name: str, address: str, views: dict | None = None, events: dict | None = None):
        self.name = name
        self.address = address
        self.views = views or {}
        self.events = events or {}
        self.sent: list[tuple[str, list, str | None]] = []
        self.gas_per_tx = 100_000
        self.fail_on_call: int | None = None
        self.event_queries: list[tuple[str, Any, Any]] = []

    def call(self, fn_name: str, *args: Any) -> Any:
        view = self.views[fn_name]
        return view(*args) if callable(view) else view

    def transact(self, fn_name: str, args: list, sender: str | None = None) -> dict:
        if self.fail_on_call is not None and len(self.sent) == self.fail_on_call:
            self.sent.append((fn_name, args, sender))
            return {"status": 0, "gasUsed": self.gas_per_tx, "transactionHash": b"\x01" * 32}
        self.sent.append((fn_name, args, sender))
        return {"status": 1, "gasUsed": self.gas_per_tx, "transactionHash": bytes([len(self.sent)]) * 32}

    def get_events(self, event_name: str, filters=None, from_block=None) -> list:
        self.event_queries.append((event_name, filters, from_block))
        events = self.events.get(event_name, [])
        if from_block is not None:
            events = [e for e in events if e["blockNumber"] >= from_block]
        return list(events)


@pytest.fixture
def script_log() -> ScriptLog:
    return ScriptLog(logging.getLogger("tests.dao_deploy"))


@pytest.fixture
def store(tmp_path) -> NetworkStateStore:
    return NetworkStateStore(state_dir=tmp_path)


@pytest.fixture
def make_ctx(store, script_log):
    def _make(contracts: dict[str, FakeContract], network_id: int = 1, network_name: str = "mainnet") -> ScriptContext:
        by_address = {c.address.lower(): c for c in contracts.values()}

        def factory(contract_name: str, address: str):
            return by_address[address.lower()]

        return ScriptContext(
            network_name=network_name,
            network_id=network_id,
            state_store=store,
            log=script_log,
            contract_factory=factory,
        )
    return _make
