#!/usr/bin/env python3
"""
Extract contract ABIs from the compiled artifacts into lib/abi/.

Run from the repo root after compiling::

    python -m dao_deploy extract-abi
"""

from __future__ import annotations

import json
import re
import shutil
from pathlib import Path


ABIS_DIR = Path("lib") / "abi"

SKIP_NAMES = re.compile(r"(Mock|test_helpers|Imports|deposit_contract|Pausable|\.dbg\.json|build-info|interfaces)")

ARAGON_ARTIFACT_PATHS = [
    "@aragon/apps-finance/contracts/Finance.sol/Finance.json",
    "@aragon/apps-vault/contracts/Vault.sol/Vault.json",
    "@aragon/apps-lido/apps/voting/contracts/Voting.sol/Voting.json",
    "@aragon/apps-lido/apps/token-manager/contracts/TokenManager.sol/TokenManager.json",
]


def list_artifact_paths(artifacts_dir: Path) -> list[str]:
    """Own contract artifacts, relative to ``artifacts_dir``, minus skipped names."""
    paths = []
    for p in sorted(artifacts_dir.rglob("*")):
        if not p.is_file():
            continue
        rel = p.relative_to(artifacts_dir).as_posix()
        if SKIP_NAMES.search(rel):
            continue
        if rel.startswith("contracts/"):
            paths.append(rel)
    return paths


def extract_abis(
    artifacts_dir: Path,
    abis_dir: Path,
    extra_paths: list[str] | None = None,
    log=None,
) -> list[Path]:
    artifact_paths = list_artifact_paths(artifacts_dir) + list(extra_paths or [])

    if abis_dir.exists():
        shutil.rmtree(abis_dir)
    abis_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for rel in artifact_paths:
        with open(artifacts_dir / rel) as f:
            artifact = json.load(f)
        abi = artifact.get("abi")
        if not abi:
            continue
        name = artifact["contractName"]
        if log is not None:
            log(f"Extracting ABI for {name}...")
        out_path = abis_dir / f"{name}.json"
        out_path.write_text(json.dumps(abi))
        written.append(out_path)
    return written
