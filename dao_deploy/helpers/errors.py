"""Failures raised by the deployment scripts.

Everything derived from ``DeployScriptError`` is an expected failure: the
script runner prints the message and exits with status 1. Anything else is
treated as a crash.
"""

from __future__ import annotations

from typing import Any


class DeployScriptError(Exception):
    """Base class for expected, operator-facing failures."""


class StateNotFoundError(DeployScriptError):
    def __init__(self, network_name: str, network_id: int | str, path: str | None = None):
        self.network_name = network_name
        self.network_id = network_id
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(
            f"No persisted state for network {network_name} (id {network_id}){where}"
        )


class MissingStateError(DeployScriptError):
    def __init__(self, key: str, network_name: str | None = None):
        self.key = key
        self.network_name = network_name
        on = f" for network {network_name}" if network_name else ""
        super().__init__(
            f"Missing required network state key '{key}'{on}; run the preceding deployment steps first"
        )


class ChainAssertionError(DeployScriptError):
    """A value read from the chain does not match the expected one."""

    def __init__(self, label: str, actual: Any, expected: Any, detail: str | None = None):
        self.label = label
        self.actual = actual
        self.expected = expected
        msg = f"{label}: expected {expected!r}, got {actual!r}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class BytecodeMismatchError(ChainAssertionError):
    def __init__(self, label: str, address: str, actual: str, expected: str):
        self.address = address
        # Bytecode is too long to be useful in the message, report sizes instead
        super().__init__(
            label,
            f"{len(actual) // 2} bytes",
            f"{len(expected) // 2} bytes",
            detail=f"deployed bytecode at {address} differs from artifact",
        )
        self.actual_bytecode = actual
        self.expected_bytecode = expected


class EventNotFoundError(DeployScriptError):
    def __init__(self, event_name: str, from_block: int | None = None, filters: dict | None = None):
        self.event_name = event_name
        self.from_block = from_block
        self.filters = filters
        msg = f"No {event_name} event found"
        if filters:
            msg += f" matching {filters}"
        msg += f" since block {from_block if from_block is not None else 0}"
        super().__init__(msg)


class TransactionFailureError(DeployScriptError):
    def __init__(self, fn_name: str, tx_hash: str | None = None, reason: str | None = None):
        self.fn_name = fn_name
        self.tx_hash = tx_hash
        self.reason = reason
        msg = f"Transaction {fn_name} failed"
        if tx_hash:
            msg += f" (tx {tx_hash})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
