from __future__ import annotations

import math

import pytest

from dao_deploy.helpers.batch_issuer import (
    MAX_HOLDERS_IN_ONE_TX,
    batch_count,
    big_sum,
    format_ether,
    issue_in_batches,
    make_batches,
    parse_amount,
    share_percent,
)

from conftest import addr


def _recorder():
    calls = []

    def issue(holders, amounts, running_total):
        calls.append((list(holders), list(amounts), running_total))

    return calls, issue


def test_45_unit_holders_in_batches_of_30() -> None:
    holders = [addr(i) for i in range(45)]
    amounts = [1] * 45
    calls, issue = _recorder()

    total = issue_in_batches(holders, amounts, MAX_HOLDERS_IN_ONE_TX, 0, issue)

    assert total == 45
    assert [len(c[0]) for c in calls] == [30, 15]
    assert [c[2] for c in calls] == [30, 45]


@pytest.mark.parametrize("count,size", [(1, 30), (29, 30), (30, 30), (31, 30), (61, 30), (7, 3), (10, 1), (5, 100)])
def test_batches_cover_input_exactly_once(count: int, size: int) -> None:
    holders = [addr(i) for i in range(count)]
    amounts = list(range(1, count + 1))
    batches = list(make_batches(holders, amounts, size))

    assert len(batches) == math.ceil(count / min(size, count))
    assert len(batches) == batch_count(count, size)
    assert [h for b in batches for h in b.holders] == holders
    assert [a for b in batches for a in b.amounts] == amounts
    assert [b.index for b in batches] == list(range(len(batches)))


def test_running_total_accumulates_with_offset() -> None:
    holders = [addr(i) for i in range(5)]
    amounts = [10, 20, 30, 40, 50]
    batches = list(make_batches(holders, amounts, 2, initial_offset=1000))

    assert [b.running_total for b in batches] == [1030, 1070, 1150]
    assert [b.amount for b in batches] == [30, 70, 50]


def test_large_amounts_stay_exact() -> None:
    amount = 10**24 + 7
    holders = [addr(i) for i in range(70)]
    amounts = [str(amount)] * 70
    offset = 3 * 10**25
    calls, issue = _recorder()

    total = issue_in_batches(holders, amounts, 30, offset, issue)

    assert total == offset + 70 * amount
    assert calls[-1][2] == total
    assert calls[0][2] == offset + 30 * amount
    assert all(isinstance(a, int) for c in calls for a in c[1])


def test_empty_holder_list_issues_nothing() -> None:
    calls, issue = _recorder()
    assert issue_in_batches([], [], 30, 5, issue) == 5
    assert calls == []


def test_mismatched_lengths_rejected() -> None:
    calls, issue = _recorder()
    with pytest.raises(ValueError):
        issue_in_batches([addr(1), addr(2)], [1], 30, 0, issue)
    assert calls == []


def test_non_positive_batch_size_rejected() -> None:
    with pytest.raises(ValueError):
        list(make_batches([addr(1)], [1], 0))


def test_failure_stops_later_batches() -> None:
    sent = []

    def issue(holders, amounts, running_total):
        if len(sent) == 1:
            raise RuntimeError("reverted")
        sent.append(running_total)

    holders = [addr(i) for i in range(90)]
    with pytest.raises(RuntimeError):
        issue_in_batches(holders, [1] * 90, 30, 0, issue)
    # First batch stays issued, third is never attempted
    assert sent == [30]


def test_parse_amount_formats() -> None:
    assert parse_amount(5) == 5
    assert parse_amount("1000000000000000000000000") == 10**24
    assert parse_amount("0x3635c9adc5dea00000") == 1000 * 10**18
    assert parse_amount(" 42 ") == 42


@pytest.mark.parametrize("bad", ["-1", -1, "1.5", "abc", 1.0, None, True])
def test_parse_amount_rejects(bad) -> None:
    with pytest.raises(ValueError):
        parse_amount(bad)


def test_big_sum() -> None:
    assert big_sum(["1", "0x10", 3], "100") == 120
    assert big_sum([]) == 0


def test_display_helpers() -> None:
    assert format_ether(10**18) == "1"
    assert format_ether(15 * 10**17) == "1.5"
    assert format_ether(0) == "0"
    assert format_ether(123456789 * 10**18 + 1) == "123456789.000000000000000001"
    assert share_percent(1, 3) == 33.33
    assert share_percent(5, 0) == 0.0
