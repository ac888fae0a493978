"""
Compiled contract artifact loading.

``load_artifact("LidoTemplate")`` searches the artifacts tree for
``LidoTemplate.json``; ``load_artifact("external:APMRegistry", "mainnet")``
reads ``<artifacts>/external/mainnet/APMRegistry.json``, i.e. an artifact of a
contract that was deployed by someone else and pinned per network.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


EXTERNAL_PREFIX = "external:"


def get_artifacts_dir() -> Path:
    return Path(os.getenv("ARTIFACTS_DIR", "artifacts"))


def load_artifact(
    name: str,
    network_name: str | None = None,
    artifacts_dir: Path | None = None,
) -> dict[str, Any]:
    base = artifacts_dir or get_artifacts_dir()

    if name.startswith(EXTERNAL_PREFIX):
        contract_name = name[len(EXTERNAL_PREFIX):]
        if not network_name:
            raise ValueError(f"Network name is required to load external artifact {contract_name}")
        path = base / "external" / network_name / f"{contract_name}.json"
        if not path.exists():
            raise FileNotFoundError(f"External artifact not found: {path}")
    else:
        candidates = sorted(
            p for p in base.rglob(f"{name}.json")
            if "build-info" not in p.parts and not p.name.endswith(".dbg.json")
        )
        if not candidates:
            raise FileNotFoundError(f"Artifact {name} not found under {base}")
        path = candidates[0]

    with open(path) as f:
        return json.load(f)


def deployed_bytecode(artifact: dict[str, Any]) -> str:
    """Runtime bytecode hex (no 0x) from a hardhat, truffle or solc/forge artifact."""
    code = artifact.get("deployedBytecode")
    if isinstance(code, dict):
        code = code.get("object")
    if not code:
        raise ValueError(f"Artifact {artifact.get('contractName', '?')} has no deployed bytecode")
    return code[2:] if code.startswith("0x") else code


def masked_segments(artifact: dict[str, Any]) -> list[tuple[int, int]]:
    """(start, length) byte ranges whose content is fixed only at deploy time.

    Covers linked library addresses and immutable variables.
    """
    segments: list[tuple[int, int]] = []

    link_refs = artifact.get("deployedLinkReferences")
    immutable_refs = artifact.get("immutableReferences")
    code = artifact.get("deployedBytecode")
    if isinstance(code, dict):
        link_refs = link_refs or code.get("linkReferences")
        immutable_refs = immutable_refs or code.get("immutableReferences")

    for libs in (link_refs or {}).values():
        for refs in libs.values():
            segments.extend((int(r["start"]), int(r["length"])) for r in refs)
    for refs in (immutable_refs or {}).values():
        segments.extend((int(r["start"]), int(r["length"])) for r in refs)

    return sorted(segments)
