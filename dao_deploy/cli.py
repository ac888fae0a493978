#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from dao_deploy.config.logging_config import get_script_log
from dao_deploy.config.network import get_network_name
from dao_deploy.context import build_context
from dao_deploy.extract_abi import ABIS_DIR, ARAGON_ARTIFACT_PATHS, extract_abis
from dao_deploy.helpers.artifacts import get_artifacts_dir
from dao_deploy.helpers.errors import DeployScriptError
from dao_deploy.helpers.network_state import NetworkStateStore
from dao_deploy.helpers.script_runner import (
    EXIT_UNEXPECTED_FAILURE,
    EXIT_VALIDATION_FAILURE,
    run_script,
)
from dao_deploy.scratch.issue_tokens import issue_tokens
from dao_deploy.scratch.obtain_deployed_apm import obtain_deployed_apm


def _run_network_script(args: argparse.Namespace, script_name: str, script) -> int:
    if args.env_file:
        load_dotenv(args.env_file)
    log = get_script_log(script_name, debug=args.debug)
    try:
        ctx = build_context(
            log,
            rpc_url=args.rpc_url,
            network_name=args.network,
            state_file=args.state_file,
        )
    except (ConnectionError, ValueError) as e:
        log.error(str(e))
        return EXIT_VALIDATION_FAILURE
    return run_script(script, ctx, log)


def cmd_obtain_apm(args: argparse.Namespace) -> int:
    return _run_network_script(args, "obtain_deployed_apm", obtain_deployed_apm)


def cmd_issue_tokens(args: argparse.Namespace) -> int:
    def script(ctx):
        return issue_tokens(ctx, max_holders_in_one_tx=args.batch_size)
    return _run_network_script(args, "issue_tokens", script)


def cmd_extract_abi(args: argparse.Namespace) -> int:
    log = get_script_log("extract_abi", debug=args.debug)
    artifacts_dir = Path(args.artifacts) if args.artifacts else get_artifacts_dir()
    try:
        written = extract_abis(
            artifacts_dir,
            Path(args.out),
            [] if args.no_aragon else ARAGON_ARTIFACT_PATHS,
            log=log,
        )
    except Exception as e:
        log.error(f"ABI extraction failed: {e!r}")
        return EXIT_UNEXPECTED_FAILURE
    log.success(f"All done! {len(written)} ABIs written to {args.out}")
    return 0


def cmd_show_state(args: argparse.Namespace) -> int:
    if args.env_file:
        load_dotenv(args.env_file)
    store = NetworkStateStore(state_file=args.state_file) if args.state_file else NetworkStateStore.from_env()
    network_name = (args.network or get_network_name()).lower()
    try:
        network_ids = [args.network_id] if args.network_id else store.network_ids(network_name)
        records = {nid: store.read(network_name, nid) for nid in network_ids}
    except DeployScriptError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_FAILURE
    print(json.dumps(records, indent=2))
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--network", help="Network name used for the state file (default NETWORK_NAME or chain id lookup)")
    p.add_argument("--state-file", dest="state_file", help="Explicit network state file (default deployed-<network>.json)")
    p.add_argument("--env-file", dest="env_file", help="Path to .env file to load before resolving env vars")
    p.add_argument("--debug", action="store_true", help="Verbose logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="DAO deployment scripts")
    sub = parser.add_subparsers(dest="cmd")

    # obtain-apm
    p_apm = sub.add_parser("obtain-apm", help="Verify the APM registry deployed by LidoTemplate and record it")
    _add_common(p_apm)
    p_apm.add_argument("--rpc-url", dest="rpc_url", help="RPC endpoint (default RPC_URL)")
    p_apm.set_defaults(func=cmd_obtain_apm)

    # issue-tokens
    p_issue = sub.add_parser("issue-tokens", help="Issue vested tokens to the holders in vestingParams")
    _add_common(p_issue)
    p_issue.add_argument("--rpc-url", dest="rpc_url", help="RPC endpoint (default RPC_URL)")
    p_issue.add_argument("--batch-size", dest="batch_size", type=int, default=30, help="Max holders per transaction (default 30)")
    p_issue.set_defaults(func=cmd_issue_tokens)

    # extract-abi
    p_abi = sub.add_parser("extract-abi", help="Extract ABIs from compiled artifacts")
    p_abi.add_argument("--artifacts", help="Artifacts directory (default ARTIFACTS_DIR or ./artifacts)")
    p_abi.add_argument("--out", default=str(ABIS_DIR), help="Output directory (default lib/abi)")
    p_abi.add_argument("--no-aragon", action="store_true", help="Skip the bundled Aragon app artifacts")
    p_abi.add_argument("--debug", action="store_true", help="Verbose logging")
    p_abi.set_defaults(func=cmd_extract_abi)

    # show-state
    p_show = sub.add_parser("show-state", help="Print the persisted network state")
    _add_common(p_show)
    p_show.add_argument("--network-id", dest="network_id", help="Only this network id")
    p_show.set_defaults(func=cmd_show_state)

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 2
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
