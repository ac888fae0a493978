"""
Issue vested DAO tokens to the holders listed in the network state.

Holders are sent to ``LidoTemplate.issueTokens`` in batches of at most
``MAX_HOLDERS_IN_ONE_TX``, each batch carrying the total supply expected once
it is issued. Gas used by the batches is added to the state file.

Usage:
    python -m dao_deploy issue-tokens --network mainnet
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from dao_deploy.context import ScriptContext
from dao_deploy.helpers.batch_issuer import (
    MAX_HOLDERS_IN_ONE_TX,
    batch_count,
    big_sum,
    format_ether,
    issue_in_batches,
    parse_amount,
    share_percent,
)
from dao_deploy.helpers.contracts import make_tx
from dao_deploy.helpers.events import assert_last_event
from dao_deploy.helpers.network_state import assert_required_network_state


REQUIRED_NET_STATE = ["lidoTemplate", "vestingParams"]


def format_date(unix_timestamp: Any) -> str:
    return datetime.fromtimestamp(int(unix_timestamp), tz=timezone.utc).strftime("%a, %d %b %Y %H:%M:%S GMT")


def issue_tokens(ctx: ScriptContext, max_holders_in_one_tx: int = MAX_HOLDERS_IN_ONE_TX) -> int:
    log = ctx.log

    log.splitter()
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
    assert_last_event(template, "TmplDAOAndTokenDeployed", None, deploy_block)
    log.splitter()

    vesting = state["vestingParams"]
    holders = list(vesting["holders"].keys())
    amounts = [parse_amount(a) for a in vesting["holders"].values()]
    unvested = parse_amount(vesting.get("unvestedTokensAmount") or 0)

    log("Using vesting settings:")
    log("  Start:", format_date(vesting["start"]))
    log("  Cliff:", format_date(vesting["cliff"]))
    log("  End:", format_date(vesting["end"]))
    log("  Revokable:", vesting["revokable"])

    total_supply = big_sum(amounts, unvested)

    log("  Total supply:", format_ether(total_supply))
    log("  Unvested tokens amount:", format_ether(unvested))
    log(f"  Token receivers (total {len(holders)}):")

    for addr, amount in zip(holders, amounts):
        log(f"    {addr}: {format_ether(amount)} ({share_percent(amount, total_supply)}%)")

    log.splitter()
    log("Total batches:", batch_count(len(holders), max_holders_in_one_tx))

    def issue_batch(batch_holders: list[str], batch_amounts: list[int], end_total_supply: int) -> None:
        make_tx(
            template,
            "issueTokens",
            [
                batch_holders,
                batch_amounts,
                int(vesting["start"]),
                int(vesting["cliff"]),
                int(vesting["end"]),
                bool(vesting["revokable"]),
                end_total_supply,
            ],
            sender=state.get("deployer"),
            gas_counter=ctx.gas_counter,
            log=log,
        )

    # Unvested tokens are minted at DAO finalization, after this script, so
    # the on-chain supply during issuance starts from zero.
    end_total_supply = issue_in_batches(holders, amounts, max_holders_in_one_tx, 0, issue_batch)
    log.success(f"Issued tokens, expected total supply {format_ether(end_total_supply)}")

    ctx.gas_counter.increment_total_gas_used_in_state_file(ctx.state_store, ctx.network_name, ctx.network_id)
    return end_total_supply
