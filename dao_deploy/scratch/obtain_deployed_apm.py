"""
Obtain and verify the APM registry deployed by LidoTemplate.

Finds the last ``TmplAPMDeployed`` event of the template, checks that the
registry and its registrar, kernel, ACL and ENS wiring are what the template
should have produced, and records ``lidoApm.address`` in the network state.

Usage:
    python -m dao_deploy obtain-apm --network mainnet
"""

from __future__ import annotations

from dao_deploy.components.ens import get_ens_node_owner, namehash
from dao_deploy.context import ScriptContext
from dao_deploy.helpers.assertions import assert_address_equal, assert_equal
from dao_deploy.helpers.bytecode import assert_proxied_contract_bytecode
from dao_deploy.helpers.events import assert_last_event
from dao_deploy.helpers.network_state import assert_required_network_state
from dao_deploy.scratch.checks.apm import assert_apm_registry_permissions


REQUIRED_NET_STATE = ["ens", "lidoApmEnsName", "lidoTemplate"]


def obtain_deployed_apm(ctx: ScriptContext) -> dict:
    log = ctx.log

    log.wide_splitter()
    log(f"Network ID: {ctx.network_id}")

    state = ctx.read_state()
    assert_required_network_state(state, REQUIRED_NET_STATE, ctx.network_name)
    template_address = state["lidoTemplate"]["address"]
    deploy_block = state["lidoTemplate"].get("deployBlock")

    log.splitter()

    log(f"Using LidoTemplate: {template_address}")
    template = ctx.at("LidoTemplate", template_address)
    if deploy_block:
        log(f"Using LidoTemplate deploy block: {deploy_block}")

    apm_deployed_evt = assert_last_event(template, "TmplAPMDeployed", None, deploy_block)
    deploy_tx = (state.get("lidoApm") or {}).get("deployTx")
    if deploy_tx:
        log(f"Using deployLidoAPM transaction: {deploy_tx}")

    registry_address = apm_deployed_evt["args"]["apm"]
    log.splitter(f"Using APMRegistry: {registry_address}")

    registry = ctx.at("APMRegistry", registry_address)

    registry_artifact = ctx.load_artifact("external:APMRegistry")
    proxy_artifact = ctx.load_artifact("external:AppProxyUpgradeable_APM")
    assert_proxied_contract_bytecode(ctx.w3, registry.address, proxy_artifact, registry_artifact, "APMRegistry")

    ens_address = registry.call("ens")
    assert_address_equal(ens_address, state["ens"]["address"], "APMRegistry ENS address")
    log.success(f"registry.ens: {ens_address}")

    registrar_address = registry.call("registrar")
    registrar = ctx.at("ENSSubdomainRegistrar", registrar_address)
    log.success(f"registry.registrar: {registrar_address}")

    registrar_ens_address = registrar.call("ens")
    assert_address_equal(registrar_ens_address, state["ens"]["address"], "ENSSubdomainRegistrar: ENS address")
    log.success(f"registry.registrar.ens: {registrar_ens_address}")

    root_node = registrar.call("rootNode")
    lido_apm_root_node = namehash(state["lidoApmEnsName"])
    assert_equal(root_node, lido_apm_root_node, "ENSSubdomainRegistrar: root node")
    log.success(f"registry.registrar.rootNode: {lido_apm_root_node}")

    ens = ctx.at("ENS", ens_address)
    root_node_owner = get_ens_node_owner(ens, lido_apm_root_node)
    assert_address_equal(root_node_owner, registrar_address, "ENSSubdomainRegistrar: root node owner")
    log.success(f"registry.registrar.rootNode owner: {root_node_owner}")

    registry_kernel_address = registry.call("kernel")
    registry_kernel = ctx.at("Kernel", registry_kernel_address)
    log.success(f"registry.kernel: {registry_kernel_address}")

    registry_acl_address = registry_kernel.call("acl")
    registry_acl = ctx.at("ACL", registry_acl_address)
    log.success(f"registry.kernel.acl: {registry_acl_address}")

    registrar_kernel_address = registrar.call("kernel")
    assert_address_equal(registrar_kernel_address, registry_kernel_address, "registrar kernel")
    log.success(f"registry.registrar.kernel: {registrar_kernel_address}")

    assert_apm_registry_permissions(
        registry=registry,
        registrar=registrar,
        registry_acl=registry_acl,
        registry_kernel=registry_kernel,
        root_address=template_address,
        from_block=deploy_block,
        log=log,
    )

    log.splitter()

    state["lidoApm"] = {
        **(state.get("lidoApm") or {}),
        "address": registry_address,
    }
    ctx.persist_state(state)
    return state
