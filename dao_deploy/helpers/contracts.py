"""
Contract handles and transaction submission.

Scripts talk to contracts through ``ContractHandle``: view calls, one
state-changing call that returns a receipt, and an event query. The web3.py
implementation below is what runs against a node; tests pass fakes with the
same three methods.
"""

from __future__ import annotations

from typing import Any, Protocol

from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted

from dao_deploy.config.logging_config import ScriptLog

from .errors import TransactionFailureError
from .gas_counter import GasCounter


TX_RECEIPT_TIMEOUT = 300  # seconds


class ContractHandle(Protocol):
    name: str
    address: str

    def call(self, fn_name: str, *args: Any) -> Any: ...

    def transact(self, fn_name: str, args: list[Any], sender: str | None = None) -> Any: ...

    def get_events(
        self,
        event_name: str,
        filters: dict[str, Any] | None = None,
        from_block: int | None = None,
    ) -> list[Any]: ...


class Web3ContractHandle:
    """``ContractHandle`` backed by a web3.py contract object."""

    def __init__(
        self,
        w3: Web3,
        address: str,
        abi: list[dict],
        name: str = "Contract",
        account: LocalAccount | None = None,
    ):
        self.w3 = w3
        self.name = name
        self.address = to_checksum_address(address)
        self.account = account
        self.contract = w3.eth.contract(address=self.address, abi=abi)

    def __repr__(self) -> str:
        return f"{self.name}[{self.address}]"

    def call(self, fn_name: str, *args: Any) -> Any:
        return self.contract.functions[fn_name](*args).call()

    def transact(self, fn_name: str, args: list[Any], sender: str | None = None) -> Any:
        fn = self.contract.functions[fn_name](*args)
        if self.account is not None:
            # Sign locally; PRIVATE_KEY wins over the recorded deployer
            tx = fn.build_transaction({
                "from": self.account.address,
                "nonce": self.w3.eth.get_transaction_count(self.account.address),
                "chainId": self.w3.eth.chain_id,
            })
            signed_tx = self.account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        else:
            if sender is None:
                raise ValueError(f"{self}.{fn_name}: no sender and no local account configured")
            tx_hash = fn.transact({"from": to_checksum_address(sender)})
        return self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=TX_RECEIPT_TIMEOUT)

    def get_events(
        self,
        event_name: str,
        filters: dict[str, Any] | None = None,
        from_block: int | None = None,
    ) -> list[Any]:
        event = getattr(self.contract.events, event_name)
        return list(event.get_logs(
            from_block=from_block or 0,
            argument_filters=filters or None,
        ))


def _tx_hash_hex(receipt: Any) -> str | None:
    tx_hash = receipt.get("transactionHash") if hasattr(receipt, "get") else None
    if tx_hash is None:
        return None
    if isinstance(tx_hash, (bytes, bytearray)):
        return "0x" + bytes(tx_hash).hex()
    return str(tx_hash)


def _format_arg(arg: Any) -> str:
    if isinstance(arg, (list, tuple)):
        return "[" + ", ".join(_format_arg(a) for a in arg) + "]"
    return str(arg)


def make_tx(
    contract: ContractHandle,
    fn_name: str,
    args: list[Any],
    sender: str | None,
    gas_counter: GasCounter,
    log: ScriptLog | None = None,
) -> Any:
    """Send one transaction, wait for it and record its gas usage.

    Raises ``TransactionFailureError`` when the call reverts (at estimation
    or on chain) or is not confirmed in time.
    """
    if log is not None:
        log(f"{contract.name}[{contract.address}].{fn_name}({', '.join(_format_arg(a) for a in args)})")
        if sender:
            log(f"  from: {sender}")

    try:
        receipt = contract.transact(fn_name, args, sender)
    except ContractLogicError as e:
        raise TransactionFailureError(fn_name, reason=str(e)) from e
    except TimeExhausted as e:
        raise TransactionFailureError(fn_name, reason=f"not confirmed within {TX_RECEIPT_TIMEOUT}s") from e

    tx_hash = _tx_hash_hex(receipt)
    if receipt["status"] != 1:
        raise TransactionFailureError(fn_name, tx_hash=tx_hash, reason="reverted")

    gas_used = int(receipt["gasUsed"])
    gas_counter.record_gas_used(gas_used)
    if log is not None:
        log.success(f"tx {tx_hash} mined, gas used {gas_used:,}")
    return receipt
