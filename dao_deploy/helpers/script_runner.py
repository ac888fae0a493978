"""
Runs a deployment script and maps its outcome to a process exit status.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from typing import Any

from dao_deploy.config.logging_config import ScriptLog

from .errors import DeployScriptError


EXIT_OK = 0
EXIT_VALIDATION_FAILURE = 1
EXIT_UNEXPECTED_FAILURE = 10


def run_script(script: Callable[[Any], Any], ctx: Any, log: ScriptLog) -> int:
    """Run ``script(ctx)`` and return the exit status.

    Partial progress (confirmed transactions, a state file written by an
    earlier step) is left as is; the next run resumes from it.
    """
    try:
        script(ctx)
    except DeployScriptError as e:
        log.error(str(e))
        return EXIT_VALIDATION_FAILURE
    except KeyboardInterrupt:
        log.error("Interrupted")
        return EXIT_UNEXPECTED_FAILURE
    except Exception:
        log.error("Unexpected failure:\n" + traceback.format_exc())
        return EXIT_UNEXPECTED_FAILURE
    log.success("All done!")
    return EXIT_OK
