#!/usr/bin/env python3
"""
Persisted network state

Each deployment environment keeps one JSON file, ``deployed-<network>.json``,
holding every deployment fact recorded so far, keyed by network id::

    {
      "networks": {
        "1": {
          "deployer": "0x...",
          "lidoTemplate": {"address": "0x...", "deployBlock": 123},
          "vestingParams": {"holders": {"0x...": "1000000000000000000"}, ...}
        }
      }
    }

A script reads its network's record once at start, mutates it in memory and
writes it back once at the end. Writes replace the whole record for that
network and leave other networks in the file untouched.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from .errors import MissingStateError, StateNotFoundError


NETWORK_STATE_FILE_BASENAME = "deployed"
NETWORKS_KEY = "networks"


def state_file_name(network_name: str) -> str:
    return f"{NETWORK_STATE_FILE_BASENAME}-{network_name}.json"


def write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(prefix=".state_", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(tmp_fd, "w") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


class NetworkStateStore:
    """Reads and writes per-network records in the state file.

    ``state_file`` pins a single file for every network name; otherwise the
    file name is derived from the network name inside ``state_dir``.
    """

    def __init__(self, state_dir: Path | str | None = None, state_file: Path | str | None = None):
        self.state_dir = Path(state_dir) if state_dir is not None else Path(".")
        self.state_file = Path(state_file) if state_file is not None else None

    @classmethod
    def from_env(cls) -> "NetworkStateStore":
        return cls(
            state_dir=os.getenv("NETWORK_STATE_DIR") or ".",
            state_file=os.getenv("NETWORK_STATE_FILE") or None,
        )

    def path_for(self, network_name: str) -> Path:
        if self.state_file is not None:
            return self.state_file
        return self.state_dir / state_file_name(network_name)

    def _load_file(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {NETWORKS_KEY: {}}
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Malformed network state file {path}: expected a JSON object")
        data.setdefault(NETWORKS_KEY, {})
        return data

    def read(self, network_name: str, network_id: int | str, allow_missing: bool = False) -> dict[str, Any]:
        path = self.path_for(network_name)
        data = self._load_file(path)
        record = data[NETWORKS_KEY].get(str(network_id))
        if record is None:
            if allow_missing:
                return {}
            raise StateNotFoundError(network_name, network_id, str(path))
        return record

    def write(self, network_name: str, network_id: int | str, record: dict[str, Any]) -> Path:
        path = self.path_for(network_name)
        data = self._load_file(path)
        data[NETWORKS_KEY][str(network_id)] = record
        write_json_atomic(path, data)
        return path

    def network_ids(self, network_name: str) -> list[str]:
        return sorted(self._load_file(self.path_for(network_name))[NETWORKS_KEY])


_default_store: NetworkStateStore | None = None


def default_store() -> NetworkStateStore:
    global _default_store
    if _default_store is None:
        _default_store = NetworkStateStore.from_env()
    return _default_store


def read_network_state(network_name: str, network_id: int | str, allow_missing: bool = False) -> dict[str, Any]:
    return default_store().read(network_name, network_id, allow_missing=allow_missing)


def persist_network_state(network_name: str, network_id: int | str, record: dict[str, Any]) -> Path:
    return default_store().write(network_name, network_id, record)


# --------------------------------------------------------------------------- #
# Preconditions                                                               #
# --------------------------------------------------------------------------- #

def collect_missing_keys(record: dict[str, Any], required_keys: list[str]) -> list[str]:
    """All required keys that are absent or null, in the order given."""
    return [key for key in required_keys if record.get(key) is None]


def assert_required_network_state(
    record: dict[str, Any],
    required_keys: list[str],
    network_name: str | None = None,
) -> None:
    """Fail on the first required key that is absent or null."""
    for key in required_keys:
        if record.get(key) is None:
            raise MissingStateError(key, network_name)
