"""Running external commands (git, make, hermes, cardano-cli)."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from caribic.errors import CommandError, ErrorCode

logger = logging.getLogger(__name__)


def run_command(
    *args: str,
    cwd: str | Path | None = None,
    check: bool = True,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command and capture its output.

    Args:
        *args: Command and arguments.
        cwd: Working directory.
        check: Whether to raise on non-zero exit code.
        timeout: Command timeout in seconds.

    Raises:
        CommandError: If cwd or the executable is missing, the command times out,
            or it fails and check=True.
    """
    cmd = list(args)
    logger.debug(f"Running command: {' '.join(cmd)} (cwd={cwd})")

    if cwd is not None and not Path(cwd).is_dir():
        raise CommandError(
            f"Working directory does not exist: {cwd}",
            command=cmd,
        )

    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CommandError(
            f"Command not found: {cmd[0]}",
            command=cmd,
            cause=e,
            suggestions=["Run 'caribic check' to verify prerequisites"],
        ) from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(
            f"Command timed out after {timeout}s: {' '.join(cmd)}",
            command=cmd,
            error_code=ErrorCode.COMMAND_TIMEOUT,
            cause=e,
        ) from e

    if result.stdout:
        logger.debug(result.stdout.rstrip())

    if check and result.returncode != 0:
        raise CommandError(
            f"Command failed: {' '.join(cmd)}",
            command=cmd,
            returncode=result.returncode,
            stderr=result.stderr,
        )

    return result
