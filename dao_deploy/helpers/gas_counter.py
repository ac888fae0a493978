"""
Gas accounting for a deployment run.

Every confirmed transaction reports its ``gasUsed`` here. At the end of a
script the usages gathered since the last checkpoint are added to the
cumulative ``initialDeployTotalGasUsed`` field of the network state.
"""

from __future__ import annotations

from typing import Any

from .network_state import NetworkStateStore


TOTAL_GAS_USED_KEY = "initialDeployTotalGasUsed"


class GasCounter:
    def __init__(self):
        self._pending: list[int] = []
        self._total = 0

    def record_gas_used(self, amount: int) -> None:
        amount = int(amount)
        if amount < 0:
            raise ValueError(f"gas used must be non-negative, got {amount}")
        self._pending.append(amount)
        self._total += amount

    @property
    def total_gas_used(self) -> int:
        """Gas used by every transaction recorded during this run."""
        return self._total

    @property
    def pending(self) -> list[int]:
        return list(self._pending)

    def increment_persisted_total(self, record: dict[str, Any]) -> int:
        """Add the usages since the last checkpoint to ``record``.

        Returns the amount added. With nothing pending the record is left
        exactly as it was.
        """
        if not self._pending:
            return 0
        added = sum(self._pending)
        record[TOTAL_GAS_USED_KEY] = int(record.get(TOTAL_GAS_USED_KEY) or 0) + added
        self._pending.clear()
        return added

    def increment_total_gas_used_in_state_file(
        self,
        store: NetworkStateStore,
        network_name: str,
        network_id: int | str,
    ) -> int:
        if not self._pending:
            return 0
        record = store.read(network_name, network_id)
        added = self.increment_persisted_total(record)
        store.write(network_name, network_id, record)
        return added
