"""
Package manager registry and detection.

Each platform has an ordered list of package managers to probe; the first
one whose detection command succeeds is offered to the user:

- linux: none (no supported package manager yet)
- darwin: Homebrew, then npm
- everything else: npm
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .common import LINUX, MACOS, CommandError, current_platform, run_command
from .detection import TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

PACKAGE_NAME = "azure-functions-core-tools"

Runner = Callable[..., str]


@dataclass(frozen=True)
class PackageManager:
    """
    Package manager able to install the Core Tools.

    Attributes:
        name: Package manager identifier ("npm", "brew")
        display_name: Human-readable name
        check_command: Command that succeeds if the manager is available
        installed_command_template: Command that succeeds if the Core Tools were
            installed with this manager (use {package} placeholder)
    """
    name: str
    display_name: str
    check_command: tuple[str, ...]
    installed_command_template: tuple[str, ...]

    def detection_command(self, is_func_installed: bool, package: str = PACKAGE_NAME) -> tuple[str, ...]:
        """
        Get the command used to detect this manager.

        Args:
            is_func_installed: Probe for the installed package rather than the manager
            package: Package name substituted into the template
        """
        if is_func_installed:
            return tuple(part.replace("{package}", package) for part in self.installed_command_template)
        return self.check_command

    def detect(
        self,
        is_func_installed: bool,
        runner: Runner = run_command,
        package: str = PACKAGE_NAME,
    ) -> bool:
        """
        Run the detection command.

        Returns:
            True if the command succeeded; failures never propagate
        """
        command = self.detection_command(is_func_installed, package)
        try:
            runner(*command, timeout=TIMEOUT_SECONDS)
            return True
        except (CommandError, OSError) as e:
            logger.debug("%s not detected: %s", self.display_name, e)
            return False


NPM = PackageManager(
    name="npm",
    display_name="npm",
    check_command=("npm", "--version"),
    installed_command_template=("npm", "ls", "-g", "{package}"),
)

BREW = PackageManager(
    name="brew",
    display_name="Homebrew",
    check_command=("brew", "--version"),
    installed_command_template=("brew", "ls", "{package}"),
)

PACKAGE_MANAGERS = (NPM, BREW)

_PM_BY_NAME = {pm.name: pm for pm in PACKAGE_MANAGERS}

# Probe order per platform; platforms not listed use DEFAULT_PROBE_ORDER.
# No probing on Linux: https://github.com/Microsoft/vscode-azurefunctions/issues/311
PLATFORM_PROBE_ORDER: dict[str, tuple[PackageManager, ...]] = {
    LINUX: (),
    MACOS: (BREW, NPM),
}
DEFAULT_PROBE_ORDER: tuple[PackageManager, ...] = (NPM,)


def get_package_manager(name: str) -> PackageManager | None:
    """
    Get package manager by name.

    Returns:
        PackageManager object, or None if not found
    """
    return _PM_BY_NAME.get(name)


def get_probe_order(platform: str | None = None) -> tuple[PackageManager, ...]:
    """Get the package managers to probe on a platform, in priority order."""
    return PLATFORM_PROBE_ORDER.get(platform or current_platform(), DEFAULT_PROBE_ORDER)


def resolve_package_manager(
    is_func_installed: bool,
    platform: str | None = None,
    runner: Runner = run_command,
    package: str = PACKAGE_NAME,
) -> PackageManager | None:
    """
    Find the package manager to offer for installing or upgrading the Core Tools.

    Args:
        is_func_installed: Look for the manager that installed the Core Tools
            (upgrade) rather than any available manager (first install)
        platform: Platform identifier (default: current platform)
        runner: Command runner (see common.run_command)
        package: Package name probed for

    Returns:
        First detected PackageManager, or None
    """
    for pm in get_probe_order(platform):
        if pm.detect(is_func_installed, runner=runner, package=package):
            logger.debug("Using %s for the Core Tools", pm.display_name)
            return pm
    return None
