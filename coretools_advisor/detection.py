"""
Local runtime detection and version extraction.

Runs the ``func`` CLI and parses the version it reports. Every failure
collapses to "no local version".
"""

from __future__ import annotations

import logging
import os
import re
from typing import Callable

from .common import CommandError, current_platform, is_windows, run_command
from .versions import ProjectRuntime, SemanticVersion, parse_semver

logger = logging.getLogger(__name__)

TIMEOUT_SECONDS = int(os.environ.get("CORETOOLS_ADVISOR_TIMEOUT_SECONDS", "10"))

FUNC_COMMAND = "func"

# First line reporting the Core Tools version, e.g. "Azure Functions Core Tools (2.0.1-beta.25)"
VERSION_LINE_RE = re.compile(r"(?:.*)Azure Functions Core Tools (.*)")

# Builds published with a broken version string, mapped to the version they really are
KNOWN_BAD_VERSIONS: dict[str, str] = {
    "220.0.0-beta.0": "2.0.1-beta.25",
}

Runner = Callable[..., str]


def normalize_version(version: str) -> str:
    """
    Replace a known-bad version literal with its real version.

    Args:
        version: Version text as reported by the CLI

    Returns:
        The corrected version, or the input unchanged
    """
    return KNOWN_BAD_VERSIONS.get(version, version)


def extract_version(output: str) -> str | None:
    """
    Extract the raw version text from ``func`` output.

    Args:
        output: Standard output of the CLI banner

    Returns:
        Version text with parentheses and whitespace removed, or None if no
        line mentions the Core Tools
    """
    for line in output.splitlines():
        match = VERSION_LINE_RE.match(line)
        if match:
            return re.sub(r"[()]", "", match.group(1)).strip()
    return None


def probe_local_version(
    runner: Runner = run_command,
    command: str = FUNC_COMMAND,
    timeout: float | None = None,
) -> SemanticVersion | None:
    """
    Get the version of the locally installed Core Tools.

    Args:
        runner: Command runner (see common.run_command)
        command: Executable to probe
        timeout: Probe timeout in seconds (default: TIMEOUT_SECONDS)

    Returns:
        The local version, or None if not installed or not parseable
    """
    try:
        output = runner(command, timeout=timeout or TIMEOUT_SECONDS)
    except (CommandError, OSError) as e:
        logger.debug("Could not run %s: %s", command, e)
        return None

    raw = extract_version(output)
    if raw is None:
        logger.debug("No Core Tools version in %s output", command)
        return None

    version = parse_semver(normalize_version(raw))
    if version is None:
        logger.debug("Ignoring invalid Core Tools version: %r", raw)
    return version


def func_tools_installed(
    runner: Runner = run_command,
    command: str = FUNC_COMMAND,
    timeout: float | None = None,
) -> bool:
    """Check whether ``func --version`` runs successfully."""
    try:
        runner(command, "--version", timeout=timeout or TIMEOUT_SECONDS)
        return True
    except (CommandError, OSError):
        return False


def try_get_local_runtime(
    platform: str | None = None,
    runner: Runner = run_command,
    command: str = FUNC_COMMAND,
) -> ProjectRuntime | None:
    """
    Guess the project runtime from the local Core Tools install.

    Only Windows has a v1 runtime, so other platforms always target beta.

    Returns:
        ProjectRuntime, or None if it cannot be determined
    """
    if not is_windows(platform or current_platform()):
        return ProjectRuntime.BETA

    version = probe_local_version(runner=runner, command=command)
    if version is None:
        return None
    if version.major == 2:
        return ProjectRuntime.BETA
    if version.major == 1:
        return ProjectRuntime.ONE
    return None
