from __future__ import annotations

import pytest

from dao_deploy.helpers.errors import ChainAssertionError, EventNotFoundError
from dao_deploy.helpers.events import assert_last_event, assert_single_event, get_events
from dao_deploy.scratch.checks.apm import role_hash

from conftest import FakeContract, addr, decoded_set_permission, make_event


def test_last_event_is_highest_block_not_last_returned() -> None:
    template = FakeContract("LidoTemplate", addr(1), events={
        "TmplAPMDeployed": [
            make_event(10, apm=addr(10)),
            make_event(20, apm=addr(20)),
            make_event(15, apm=addr(15)),
        ],
    })
    evt = assert_last_event(template, "TmplAPMDeployed")
    assert evt["blockNumber"] == 20
    assert evt["args"]["apm"] == addr(20)


def test_log_index_breaks_ties_within_block() -> None:
    template = FakeContract("LidoTemplate", addr(1), events={
        "TmplAPMDeployed": [
            make_event(7, 3, apm=addr(3)),
            make_event(7, 9, apm=addr(9)),
            make_event(7, 1, apm=addr(1)),
        ],
    })
    assert assert_last_event(template, "TmplAPMDeployed")["args"]["apm"] == addr(9)
    ordered = get_events(template, "TmplAPMDeployed")
    assert [e["logIndex"] for e in ordered] == [1, 3, 9]


def test_from_block_is_passed_through() -> None:
    template = FakeContract("LidoTemplate", addr(1), events={
        "TmplAPMDeployed": [make_event(5, apm=addr(5)), make_event(50, apm=addr(50))],
    })
    evt = assert_last_event(template, "TmplAPMDeployed", None, 40)
    assert evt["blockNumber"] == 50
    assert template.event_queries[-1] == ("TmplAPMDeployed", None, 40)

    with pytest.raises(EventNotFoundError) as exc:
        assert_last_event(template, "TmplAPMDeployed", None, 100)
    assert exc.value.from_block == 100


def test_missing_event_raises() -> None:
    template = FakeContract("LidoTemplate", addr(1))
    with pytest.raises(EventNotFoundError) as exc:
        assert_last_event(template, "TmplDAOAndTokenDeployed")
    assert exc.value.event_name == "TmplDAOAndTokenDeployed"
    assert "since block 0" in str(exc.value)


def test_filters_match_args_case_insensitively() -> None:
    acl = FakeContract("ACL", addr(2), events={
        "SetPermission": [
            make_event(1, entity=addr(7), app=addr(100), allowed=True),
            make_event(2, entity=addr(8), app=addr(200), allowed=True),
        ],
    })
    wanted = addr(100).upper().replace("0X", "0x")
    evt = assert_last_event(acl, "SetPermission", {"app": wanted})
    assert evt["args"]["entity"] == addr(7)


def test_single_event() -> None:
    template = FakeContract("LidoTemplate", addr(1), events={
        "TmplDAOAndTokenDeployed": [make_event(3, dao=addr(3)), make_event(4, dao=addr(4))],
    })
    with pytest.raises(ChainAssertionError):
        assert_single_event(template, "TmplDAOAndTokenDeployed")
    assert assert_single_event(template, "TmplDAOAndTokenDeployed", {"dao": addr(4)})["blockNumber"] == 4


def test_bytes32_filter_matches_decoded_bytes() -> None:
    role = role_hash("CREATE_NAME_ROLE")
    acl = FakeContract("ACL", addr(2), events={
        "SetPermission": [
            decoded_set_permission(1, 0, addr(7), addr(100), role),
            decoded_set_permission(2, 0, addr(8), addr(100), role_hash("POINT_ROOTNODE_ROLE")),
        ],
    })

    evt = assert_last_event(acl, "SetPermission", {"role": role.upper().replace("0X", "0x")})
    assert evt["blockNumber"] == 1

    evt = assert_last_event(acl, "SetPermission", {"role": bytes.fromhex(role[2:])})
    assert evt["blockNumber"] == 1
