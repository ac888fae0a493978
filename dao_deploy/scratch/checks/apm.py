"""
Permission checks for a freshly deployed APM registry.

Right after ``deployLidoAPM`` the template is the manager of every APM role
and the only holder of them, except the registrar roles which belong to the
registry itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from eth_utils import keccak, to_checksum_address

from dao_deploy.helpers.assertions import assert_address_equal, assert_equal
from dao_deploy.helpers.events import get_events


def role_hash(role_name: str) -> str:
    return "0x" + keccak(text=role_name).hex()


@dataclass(frozen=True)
class RoleExpectation:
    app_label: str
    app_address: str
    role_name: str
    manager: str
    grantee: str


def current_grantees(acl, app_address: str, role: str, from_block: int | None = None) -> set[str]:
    """Replay ``SetPermission`` events to get who holds ``role`` on ``app`` now."""
    holders: set[str] = set()
    events = get_events(acl, "SetPermission", {"app": app_address, "role": role}, from_block)
    for evt in events:
        entity = to_checksum_address(evt["args"]["entity"])
        if evt["args"]["allowed"]:
            holders.add(entity)
        else:
            holders.discard(entity)
    return holders


def assert_role(acl, expectation: RoleExpectation, from_block: int | None = None, log=None) -> None:
    role = role_hash(expectation.role_name)
    label = f"{expectation.app_label}.{expectation.role_name}"

    manager = acl.call("getPermissionManager", expectation.app_address, role)
    assert_address_equal(manager, expectation.manager, f"{label} permission manager")

    granted = acl.call("hasPermission", expectation.grantee, expectation.app_address, role)
    assert_equal(granted, True, f"{label} granted to {expectation.grantee}")

    grantees = current_grantees(acl, expectation.app_address, role, from_block)
    assert_equal(
        sorted(grantees),
        [to_checksum_address(expectation.grantee)],
        f"{label} grantees",
    )
    if log is not None:
        log.success(f"{label}: manager {manager}, granted only to {expectation.grantee}")


def apm_role_expectations(registry, registrar, registry_acl, registry_kernel, root_address: str) -> list[RoleExpectation]:
    return [
        RoleExpectation("kernel", registry_kernel.address, "APP_MANAGER_ROLE", root_address, root_address),
        RoleExpectation("acl", registry_acl.address, "CREATE_PERMISSIONS_ROLE", root_address, root_address),
        RoleExpectation("registry", registry.address, "CREATE_REPO_ROLE", root_address, root_address),
        RoleExpectation("registrar", registrar.address, "CREATE_NAME_ROLE", root_address, registry.address),
        RoleExpectation("registrar", registrar.address, "POINT_ROOTNODE_ROLE", root_address, registry.address),
    ]


def assert_apm_registry_permissions(
    registry,
    registrar,
    registry_acl,
    registry_kernel,
    root_address: str,
    from_block: int | None = None,
    log=None,
) -> None:
    expectations = apm_role_expectations(registry, registrar, registry_acl, registry_kernel, root_address)
    for expectation in expectations:
        assert_role(registry_acl, expectation, from_block, log)
