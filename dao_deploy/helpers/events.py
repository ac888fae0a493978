"""
Event lookups against deployed contracts.

Logs are put in canonical chain order (block number, then log index) before
picking anything, so the result does not depend on the order the node or a
fake returned them in.
"""

from __future__ import annotations

from typing import Any

from .assertions import _normalize
from .errors import ChainAssertionError, EventNotFoundError


def _field(event: Any, name: str) -> Any:
    if hasattr(event, "get"):
        return event.get(name)
    return getattr(event, name, None)


def event_sort_key(event: Any) -> tuple[int, int]:
    return int(_field(event, "blockNumber") or 0), int(_field(event, "logIndex") or 0)


def _matches(event: Any, filters: dict[str, Any] | None) -> bool:
    if not filters:
        return True
    args = _field(event, "args") or {}
    for key, wanted in filters.items():
        value = args.get(key) if hasattr(args, "get") else getattr(args, key, None)
        if isinstance(wanted, (list, tuple, set)):
            if not any(_same(value, w) for w in wanted):
                return False
        elif not _same(value, wanted):
            return False
    return True


def _same(a: Any, b: Any) -> bool:
    # decoded bytes32 args are bytes, filters are usually 0x strings
    a, b = _normalize(a), _normalize(b)
    if isinstance(a, str) and isinstance(b, str):
        return a.lower() == b.lower()
    return a == b


def get_events(
    contract,
    event_name: str,
    filters: dict[str, Any] | None = None,
    from_block: int | None = None,
) -> list[Any]:
    """All ``event_name`` logs of ``contract`` since ``from_block``, oldest first."""
    events = contract.get_events(event_name, filters, from_block)
    events = [e for e in events if _matches(e, filters)]
    return sorted(events, key=event_sort_key)


def assert_last_event(
    contract,
    event_name: str,
    filters: dict[str, Any] | None = None,
    from_block: int | None = None,
) -> Any:
    events = get_events(contract, event_name, filters, from_block)
    if not events:
        raise EventNotFoundError(event_name, from_block, filters)
    return events[-1]


def assert_single_event(
    contract,
    event_name: str,
    filters: dict[str, Any] | None = None,
    from_block: int | None = None,
) -> Any:
    events = get_events(contract, event_name, filters, from_block)
    if not events:
        raise EventNotFoundError(event_name, from_block, filters)
    if len(events) != 1:
        raise ChainAssertionError(f"number of {event_name} events", len(events), 1)
    return events[0]
