"""
Command execution utilities.

This module runs external commands to completion and checks for the
presence of required executables.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


def run_command(
    command: Sequence[str], cwd: Optional[Path] = None
) -> Tuple[int, str]:
    """Execute a command and capture its combined output.

    Standard output and standard error are merged into one stream, in the
    order the command wrote them.

    Args:
        command: Argument vector; the first element is the executable.
        cwd: Working directory for the command (default: inherited).

    Returns:
        Tuple of (return_code, combined_output).
        return_code is -1 when the command could not be executed at all.
    """
    logger.debug(f"Executing command: {' '.join(command)}")
    try:
        process = subprocess.run(
            list(command),
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        return process.returncode, process.stdout
    except FileNotFoundError as e:
        logger.error(f"Command not found: {command[0]}: {type(e).__name__}: {e}")
        return -1, f"Error: Command not found '{command[0]}'"
    except PermissionError as e:
        logger.error(f"Command not executable: {command[0]}: {e}")
        return -1, f"Error: Permission denied executing '{command[0]}'"
    except OSError as e:
        logger.error(f"Failed to run '{command[0]}': {type(e).__name__}: {e}", exc_info=True)
        return -1, f"An unexpected error occurred: {e}"


def check_command_installed(executable: str) -> bool:
    """Check whether an executable can be found on PATH (or at the given path)."""
    return shutil.which(executable) is not None
