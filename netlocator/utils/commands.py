"""
Command execution utilities for NetLocator.

Every shell-out goes through run_command() so that each call has a bounded
timeout. A command that times out is treated exactly like one that failed.
"""

import shlex
import subprocess

from .. import config
from ..logging_config import get_logger

# Get module logger
logger = get_logger(__name__)


def run_command(
    command,
    capture=False,
    input=None,
    shell=False,
    quiet_on_error=False,
    timeout=config.COMMAND_TIMEOUT,
):
    """
    Execute a command with a timeout and logging.

    Args:
        command: Command to execute (list of strings or string if shell=True)
        capture: If True, return command output; if False, return success status
        input: Optional input to send to the command's stdin
        shell: If True, execute through the shell; if False, exec directly
        quiet_on_error: If True, suppress failure details for expected failures
        timeout: Seconds before the command is killed and treated as failed

    Returns:
        If capture=True: Command stdout, or None on failure
        If capture=False: True on success, False on failure
    """
    if shell and isinstance(command, list):
        command = shlex.join(command)

    logger.debug(f"Running command ({'shell' if shell else 'list'}): {command}")

    try:
        result = subprocess.run(
            command,
            shell=shell,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="ignore",
            input=input,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Command '{command}' timed out after {timeout}s")
        return None if capture else False
    except FileNotFoundError:
        cmd_name = command.split()[0] if shell else command[0]
        logger.error(f"Command not found: {cmd_name}")
        return None if capture else False

    if result.returncode != 0:
        if quiet_on_error:
            logger.debug(f"Command '{command}' failed (expected)")
        else:
            logger.debug(f"Command '{command}' failed with status {result.returncode}")
            if result.stderr:
                logger.debug(f"Stderr: {result.stderr.strip()}")
        return None if capture else False

    if result.stderr:
        logger.debug(f"Command succeeded with stderr: {result.stderr.strip()}")

    return result.stdout.strip() if capture else True
