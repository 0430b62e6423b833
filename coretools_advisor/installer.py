"""
Core Tools installation through a system package manager.

The installer only runs commands; it does not check what they installed.
A failing command surfaces as CommandError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .common import current_platform, is_windows, run_command
from .output import OutputChannel, StreamOutputChannel
from .package_managers import BREW, NPM, PACKAGE_NAME, PackageManager
from .prompts import MessageItem, Prompter
from .versions import RuntimeChannel

logger = logging.getLogger(__name__)

BREW_TAP = "azure/functions"

Runner = Callable[..., str]


@dataclass(frozen=True)
class InstallStep:
    """
    A single command of an installation.

    Attributes:
        description: Human-readable description of the step
        command: Command tuple to execute
    """
    description: str
    command: tuple[str, ...]


def get_install_steps(
    manager: PackageManager | None,
    channel: RuntimeChannel,
    package: str = PACKAGE_NAME,
    brew_tap: str = BREW_TAP,
) -> list[InstallStep]:
    """
    Get the commands installing the Core Tools for a channel.

    Homebrew has a single formula, so the channel does not change its steps.

    Returns:
        Steps to run in order (empty for an unknown manager)
    """
    if manager == NPM:
        if channel is RuntimeChannel.PREVIEW:
            return [InstallStep(
                f"Install {package}{channel.npm_suffix} with npm",
                ("npm", "install", "-g", f"{package}{channel.npm_suffix}", "--unsafe-perm", "true"),
            )]
        return [InstallStep(
            f"Install {package} with npm",
            ("npm", "install", "-g", package),
        )]

    if manager == BREW:
        return [
            InstallStep(f"Add Homebrew tap {brew_tap}", ("brew", "tap", brew_tap)),
            InstallStep(f"Install {package} with Homebrew", ("brew", "install", package)),
        ]

    return []


def select_install_channel(prompter: Prompter, platform: str | None = None) -> RuntimeChannel | None:
    """
    Choose which runtime to install when the caller did not specify one.

    Only Windows offers a choice; other platforms get the v2 runtime.

    Returns:
        The selected channel, or None if the user dismissed the prompt
    """
    if not is_windows(platform or current_platform()):
        return RuntimeChannel.PREVIEW

    items = [MessageItem(channel.label) for channel in RuntimeChannel]
    result = prompter.show_warning_message("Which version of the runtime do you want to install?", *items)
    return RuntimeChannel.from_label(result.title) if result else None


def install_runtime(
    manager: PackageManager | None,
    channel: RuntimeChannel,
    output: OutputChannel | None = None,
    runner: Runner = run_command,
    package: str = PACKAGE_NAME,
    brew_tap: str = BREW_TAP,
) -> None:
    """
    Install or upgrade the Core Tools.

    Args:
        manager: Package manager to use (None is a no-op)
        channel: Runtime channel to install
        output: Channel receiving command output (default: stdout)
        runner: Command runner (see common.run_command)

    Raises:
        CommandError: If a package manager command fails
    """
    steps = get_install_steps(manager, channel, package=package, brew_tap=brew_tap)
    if not steps:
        logger.debug("No install steps for package manager %s", manager)
        return

    output = output or StreamOutputChannel()
    output.show()
    for step in steps:
        logger.info(step.description)
        runner(*step.command, output=output)
