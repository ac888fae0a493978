from __future__ import annotations

from dao_deploy.helpers.errors import MissingStateError
from dao_deploy.helpers.script_runner import (
    EXIT_OK,
    EXIT_UNEXPECTED_FAILURE,
    EXIT_VALIDATION_FAILURE,
    run_script,
)


def test_success(script_log) -> None:
    seen = []
    assert run_script(seen.append, "ctx", script_log) == EXIT_OK
    assert seen == ["ctx"]


def test_expected_failure_exit_code(script_log, caplog) -> None:
    def script(ctx):
        raise MissingStateError("ens", "mainnet")

    assert run_script(script, None, script_log) == EXIT_VALIDATION_FAILURE
    assert "Missing required network state key 'ens'" in caplog.text


def test_unexpected_failure_exit_code(script_log, caplog) -> None:
    def script(ctx):
        raise KeyError("boom")

    assert run_script(script, None, script_log) == EXIT_UNEXPECTED_FAILURE
    assert "Traceback" in caplog.text
    assert EXIT_UNEXPECTED_FAILURE != EXIT_VALIDATION_FAILURE
