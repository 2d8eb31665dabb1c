"""Run generated docker commands.

Commands run through the host shell, one at a time, with the terminal
attached so docker output is shown as it happens.
"""

from __future__ import annotations

import logging
import subprocess

from onload_image.lib.errors import ExternalCommandError

logger = logging.getLogger(__name__)


def run_command(cmd: str, description: str) -> None:
    """Run a shell command and wait for it.

    Args:
        cmd: Command line, passed to the shell as-is
        description: Short name for messages (e.g. 'docker build')

    Raises:
        ExternalCommandError: If the command cannot be started or exits non-zero
    """
    logger.debug(f"Running: {cmd}")
    try:
        result = subprocess.run(cmd, shell=True, check=False)
    except OSError as e:
        raise ExternalCommandError(f"{description} could not be started: {e}") from e

    if result.returncode != 0:
        raise ExternalCommandError(f"{description} failed with code {result.returncode}")

    logger.info(f"{description} finished successfully")
