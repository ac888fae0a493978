"""
Batched token issuance.

Holders are issued in contiguous, order-preserving batches. Each batch is
sent together with the total supply expected once it lands, so the contract
can reject a batch that arrives out of order or twice.

Batches are sent one at a time and each must be confirmed before the next.
A failure stops the run; batches confirmed before it stay issued. To resume,
re-read what is on chain and pass only the holders that are still missing.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from web3 import Web3


MAX_HOLDERS_IN_ONE_TX = 30


@dataclass(frozen=True)
class HolderBatch:
    index: int
    holders: list[str]
    amounts: list[int]
    running_total: int

    @property
    def amount(self) -> int:
        return sum(self.amounts)


def parse_amount(value: Any) -> int:
    """Token amount from an int, a decimal string or a 0x hex string."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid token amount: {value!r}")
    if isinstance(value, int):
        amount = value
    elif isinstance(value, str):
        s = value.strip()
        try:
            amount = int(s, 16) if s.lower().startswith("0x") else int(s, 10)
        except ValueError:
            raise ValueError(f"Invalid token amount: {value!r}")
    else:
        raise ValueError(f"Invalid token amount: {value!r}")
    if amount < 0:
        raise ValueError(f"Token amount must be non-negative: {value!r}")
    return amount


def big_sum(amounts: Sequence[Any], initial_amount: Any = 0) -> int:
    total = parse_amount(initial_amount)
    for amount in amounts:
        total += parse_amount(amount)
    return total


def batch_count(holders_count: int, max_batch_size: int = MAX_HOLDERS_IN_ONE_TX) -> int:
    if max_batch_size <= 0:
        raise ValueError(f"max_batch_size must be positive, got {max_batch_size}")
    if holders_count == 0:
        return 0
    batch_size = min(max_batch_size, holders_count)
    return math.ceil(holders_count / batch_size)


def make_batches(
    holders: Sequence[str],
    amounts: Sequence[Any],
    max_batch_size: int = MAX_HOLDERS_IN_ONE_TX,
    initial_offset: Any = 0,
) -> Iterator[HolderBatch]:
    if len(holders) != len(amounts):
        raise ValueError(
            f"holders and amounts differ in length: {len(holders)} != {len(amounts)}"
        )
    total_batches = batch_count(len(holders), max_batch_size)
    if total_batches == 0:
        return
    batch_size = min(max_batch_size, len(holders))

    running_total = parse_amount(initial_offset)
    for i in range(total_batches):
        start = i * batch_size
        batch_holders = list(holders[start:start + batch_size])
        batch_amounts = [parse_amount(a) for a in amounts[start:start + batch_size]]
        running_total += sum(batch_amounts)
        yield HolderBatch(i, batch_holders, batch_amounts, running_total)


def issue_in_batches(
    holders: Sequence[str],
    amounts: Sequence[Any],
    max_batch_size: int,
    initial_offset: Any,
    issue_fn: Callable[[list[str], list[int], int], Any],
) -> int:
    """Call ``issue_fn(holders, amounts, running_total)`` per batch, in order.

    Returns the final total: ``initial_offset`` plus every amount.
    """
    total = parse_amount(initial_offset)
    for batch in make_batches(holders, amounts, max_batch_size, initial_offset):
        issue_fn(batch.holders, batch.amounts, batch.running_total)
        total = batch.running_total
    return total


# --------------------------------------------------------------------------- #
# Display helpers (never fed back into issuance)                              #
# --------------------------------------------------------------------------- #

def format_ether(amount: int) -> str:
    s = f"{Web3.from_wei(amount, 'ether'):f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def share_percent(amount: int, total: int) -> float:
    """Share of ``total`` in percent, two decimals."""
    if total == 0:
        return 0.0
    return (amount * 10000 // total) / 100
