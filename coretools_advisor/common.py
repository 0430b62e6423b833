"""
Common utilities shared across coretools_advisor modules.
"""

from __future__ import annotations

import os
import subprocess
import sys
from typing import Any

# Platform identifiers as reported by sys.platform
WINDOWS = "win32"
MACOS = "darwin"
LINUX = "linux"


def current_platform() -> str:
    """
    Get the platform identifier for the running interpreter.

    Returns:
        "win32", "darwin", "linux", or the raw sys.platform value otherwise
    """
    if sys.platform.startswith("linux"):
        return LINUX
    return sys.platform


def is_windows(platform: str | None = None) -> bool:
    """Check whether the given (or current) platform is Windows."""
    return (platform or current_platform()) == WINDOWS


class CommandError(Exception):
    """
    Raised when an external command fails.

    Attributes:
        command: Full command line that was executed
        exit_code: Process exit code (-1 when the process never ran or timed out)
        output: Combined stdout/stderr captured before the failure
    """
    def __init__(self, command: tuple[str, ...], exit_code: int, output: str = "", reason: str | None = None):
        self.command = command
        self.exit_code = exit_code
        self.output = output
        message = reason or f"Command \"{' '.join(command)}\" failed with exit code \"{exit_code}\""
        if output.strip():
            message += f":\n{output.strip()[:500]}"
        super().__init__(message)


def run_command(
    command: str,
    *args: str,
    output: Any = None,
    timeout: float | None = None,
) -> str:
    """
    Run an external command and return its standard output.

    Args:
        command: Executable name
        *args: Command arguments
        output: Optional output channel receiving the command line and its output
        timeout: Timeout in seconds (None waits indefinitely)

    Returns:
        Captured stdout (stderr is merged in)

    Raises:
        CommandError: If the command is missing, times out or exits non-zero
    """
    argv = (command, *args)
    vlog(f"Executing: {' '.join(argv)}")
    if output is not None:
        output.append_line(f"Running command: \"{' '.join(argv)}\"...")

    try:
        proc = subprocess.run(
            list(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            text=True,
            timeout=timeout,
            check=False,
            env={**os.environ, "TERM": "dumb"},
        )
    except FileNotFoundError as e:
        raise CommandError(argv, -1, reason=f"Command not found: {command}") from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(argv, -1, reason=f"Command timed out after {timeout}s: {' '.join(argv)}") from e

    stdout = proc.stdout or ""
    if output is not None and stdout:
        for line in stdout.splitlines():
            output.append_line(line)

    if proc.returncode != 0:
        raise CommandError(argv, proc.returncode, stdout)

    return stdout


def vlog(msg: str, verbose: bool = False) -> None:
    """
    Log verbose message using structured logging.

    Args:
        msg: Message to log
        verbose: Whether verbose mode is enabled
    """
    if verbose or os.environ.get("CORETOOLS_ADVISOR_DEBUG", "0") == "1":
        from .logging_config import get_logger
        get_logger().info(msg)
