from __future__ import annotations

from types import SimpleNamespace

import pytest
from web3 import Web3
from web3.exceptions import ContractLogicError

from dao_deploy.config.abis import ACL_ABI
from dao_deploy.helpers.contracts import Web3ContractHandle, make_tx
from dao_deploy.helpers.events import get_events
from dao_deploy.helpers.errors import TransactionFailureError
from dao_deploy.helpers.gas_counter import GasCounter
from dao_deploy.scratch.checks.apm import role_hash

from conftest import FakeContract, addr, decoded_set_permission


def test_make_tx_records_gas(script_log) -> None:
    contract = FakeContract("LidoTemplate", addr(1))
    contract.gas_per_tx = 21000
    counter = GasCounter()

    receipt = make_tx(contract, "issueTokens", [[addr(2)], [5]], addr(3), counter, script_log)

    assert receipt["status"] == 1
    assert counter.pending == [21000]
    assert contract.sent == [("issueTokens", [[addr(2)], [5]], addr(3))]


def test_make_tx_reverted_receipt() -> None:
    contract = FakeContract("LidoTemplate", addr(1))
    contract.fail_on_call = 0
    counter = GasCounter()

    with pytest.raises(TransactionFailureError) as exc:
        make_tx(contract, "issueTokens", [], addr(3), counter)

    assert exc.value.tx_hash == "0x" + "01" * 32
    assert counter.pending == []


def test_make_tx_estimation_revert() -> None:
    class Reverting(FakeContract):
        def transact(self, fn_name, args, sender=None):
            raise ContractLogicError("execution reverted: ERR_INVALID_TOTAL_SUPPLY")

    with pytest.raises(TransactionFailureError) as exc:
        make_tx(Reverting("LidoTemplate", addr(1)), "issueTokens", [], addr(3), GasCounter())
    assert "ERR_INVALID_TOTAL_SUPPLY" in str(exc.value)


class StubEvent:
    def __init__(self, logs):
        self.logs = logs
        self.queries = []

    def get_logs(self, **kwargs):
        self.queries.append(kwargs)
        return list(self.logs)


def make_handle(**contract_attrs) -> Web3ContractHandle:
    handle = Web3ContractHandle(Web3(), addr(2), ACL_ABI, name="ACL")
    handle.contract = SimpleNamespace(**contract_attrs)
    return handle


def test_web3_handle_get_events_passes_filters_through() -> None:
    role = role_hash("CREATE_REPO_ROLE")
    stub = StubEvent([
        decoded_set_permission(41, 0, addr(0x50), addr(0x7E), role),
        decoded_set_permission(40, 2, addr(0x51), addr(0x7E), role),
    ])
    handle = make_handle(events=SimpleNamespace(SetPermission=stub))

    events = get_events(handle, "SetPermission", {"role": role}, 40)

    assert stub.queries == [{"from_block": 40, "argument_filters": {"role": role}}]
    assert [e["blockNumber"] for e in events] == [40, 41]


def test_web3_handle_get_events_defaults() -> None:
    stub = StubEvent([])
    handle = make_handle(events=SimpleNamespace(SetPermission=stub))

    assert handle.get_events("SetPermission") == []
    assert stub.queries == [{"from_block": 0, "argument_filters": None}]


def test_web3_handle_call() -> None:
    handle = make_handle(functions={
        "hasPermission": lambda who, where, what: SimpleNamespace(call=lambda: (who, where, what)),
    })
    assert handle.call("hasPermission", addr(1), addr(2), "0x01") == (addr(1), addr(2), "0x01")


def test_web3_handle_transact_from_sender_feeds_make_tx() -> None:
    sent = []

    def issue_tokens(*args):
        return SimpleNamespace(transact=lambda tx: sent.append((args, tx)) or b"\xaa" * 32)

    handle = make_handle(functions={"issueTokens": issue_tokens})
    handle.w3 = SimpleNamespace(eth=SimpleNamespace(
        wait_for_transaction_receipt=lambda tx_hash, timeout: {"status": 1, "gasUsed": 4321, "transactionHash": tx_hash},
    ))
    counter = GasCounter()

    make_tx(handle, "issueTokens", [[addr(5)], [1]], addr(3), counter)

    assert sent == [(([addr(5)], [1]), {"from": Web3.to_checksum_address(addr(3))})]
    assert counter.pending == [4321]


def test_web3_handle_transact_needs_sender_or_account() -> None:
    handle = make_handle(functions={"issueTokens": lambda *args: SimpleNamespace()})
    with pytest.raises(ValueError):
        handle.transact("issueTokens", [], None)
