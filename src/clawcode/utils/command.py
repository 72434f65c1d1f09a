"""Shell command execution for plan commands."""

import logging
import subprocess
from pathlib import Path

from clawcode.agents.exceptions import CommandExecutionError

logger = logging.getLogger(__name__)


def run_command(cwd: str | Path, command: str) -> None:
    """Run ``command`` through the shell in ``cwd`` with inherited stdio.

    Raises:
        CommandExecutionError: On a non-zero exit code or if the process
            cannot be started.
    """
    logger.info("Running command in %s: %s", cwd, command)
    try:
        result = subprocess.run(command, cwd=str(cwd), shell=True)
    except OSError as exc:
        raise CommandExecutionError(f"Failed to start command '{command}': {exc}") from exc

    if result.returncode != 0:
        raise CommandExecutionError(f"Exit {result.returncode}")
