"""
Runtime version advisor.

Ties the probes together into the two user-facing flows:

- ``check()``: warn when the installed Core Tools are outdated and offer
  to upgrade them;
- ``ensure_installed()``: offer to install the Core Tools when missing.

Both flows run start to finish inside a telemetry wrapper and never raise
to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .collectors import get_newest_version
from .common import CommandError, current_platform, run_command
from .config import AdvisorConfig
from .detection import func_tools_installed, probe_local_version, try_get_local_runtime
from .installer import install_runtime, select_install_channel
from .output import OutputChannel, StreamOutputChannel
from .package_managers import resolve_package_manager
from .prompts import ConsolePrompter, DialogResponses, MessageItem, Prompter, open_url, prompt_until_resolved
from .settings import SHOW_CORE_TOOLS_WARNING, SHOW_FUNC_INSTALLATION, SettingsStore, YamlSettingsStore
from .telemetry import ActionContext, call_with_telemetry, report_properties
from .upgrade import UpgradeRecommendation, decide_upgrade
from .versions import UNKNOWN_CHANNEL, ProjectRuntime, RuntimeChannel, classify

logger = logging.getLogger(__name__)

VALIDATE_RUNTIME_EVENT = "azureFunctions.validateFunctionRuntime"
VALIDATE_INSTALLED_EVENT = "azureFunctions.validateFuncCoreToolsInstalled"

INSTALL_MESSAGE = "You must have the Azure Functions Core Tools installed to debug your local functions."
INSTALL_FAILED_MESSAGE = (
    "The Azure Functions Core Tools installation has failed and will have to be installed manually."
)


class RuntimeVersionAdvisor:
    """
    Advises on installing and upgrading the Azure Functions Core Tools.

    All host interaction goes through injected collaborators, so the same
    advisor runs inside an editor host or from the command line.

    Attributes:
        config: Static configuration (URLs, command and package names)
        settings: Preference store for the "don't warn again" toggles
        prompter: Shows warnings and returns the user's choice
        runner: Runs external commands (see common.run_command)
        output: Channel receiving package manager output
        opener: Opens documentation URLs
        telemetry: Wraps each flow, reporting its outcome and swallowing errors
        platform: Platform identifier used for package manager selection
    """

    def __init__(
        self,
        config: AdvisorConfig | None = None,
        settings: SettingsStore | None = None,
        prompter: Prompter | None = None,
        runner: Callable[..., str] = run_command,
        output: OutputChannel | None = None,
        opener: Callable[[str], None] = open_url,
        telemetry: Callable[[str, Callable[[ActionContext], Any]], Any] = call_with_telemetry,
        platform: str | None = None,
    ):
        self.config = config or AdvisorConfig()
        self.settings = settings or YamlSettingsStore()
        self.prompter = prompter or ConsolePrompter()
        self.runner = runner
        self.output = output or StreamOutputChannel()
        self.opener = opener
        self.telemetry = telemetry
        self.platform = platform or current_platform()

    def check(self) -> UpgradeRecommendation | None:
        """
        Warn about an outdated local runtime and offer to upgrade it.

        Returns:
            The recommendation that was shown, or None if none was
        """
        return self.telemetry(VALIDATE_RUNTIME_EVENT, self._check)

    def _check(self, context: ActionContext) -> UpgradeRecommendation | None:
        context.suppress_error_display = True
        context.properties["isActivationEvent"] = "true"

        if not self.settings.get(SHOW_CORE_TOOLS_WARNING):
            return None

        local = probe_local_version(runner=self.runner, command=self.config.func_command)
        if local is None:
            return None
        report_properties(context, localVersion=local)

        channel = classify(local.major)
        if channel is UNKNOWN_CHANNEL:
            logger.debug("No runtime channel for Core Tools %s", local)
            return None

        remote = get_newest_version(
            channel,
            context,
            url=self.config.dist_tags_url,
            timeout=self.config.timeout_seconds,
        )
        if remote is None:
            return None

        recommendation = decide_upgrade(local, remote, channel)
        if recommendation is None:
            logger.debug("Core Tools %s are up to date", local)
            return None

        manager = resolve_package_manager(
            True,
            platform=self.platform,
            runner=self.runner,
            package=self.config.package_name,
        )

        items: list[MessageItem] = [DialogResponses.LEARN_MORE, DialogResponses.DONT_WARN_AGAIN]
        if manager is not None:
            items.insert(0, DialogResponses.UPDATE)

        result = prompt_until_resolved(
            self.prompter,
            recommendation.message(),
            items,
            self.config.outdated_learn_more_url,
            opener=self.opener,
        )
        report_properties(context, dialogResult=result.title if result else "dismissed")

        if result == DialogResponses.UPDATE:
            try:
                self._install(manager, channel)
            except CommandError as e:
                logger.warning("Core Tools upgrade failed: %s", e)
                report_properties(context, installError=e)
                self._show_install_failed()
        elif result == DialogResponses.DONT_WARN_AGAIN:
            self.settings.set(SHOW_CORE_TOOLS_WARNING, False)

        return recommendation

    def ensure_installed(self, force_prompt: bool = False) -> bool:
        """
        Offer to install the Core Tools if they are missing.

        Args:
            force_prompt: Prompt (modally) even if the user opted out

        Returns:
            True if the Core Tools are installed when the flow ends
        """
        selection: MessageItem | None = None
        installed = False

        def action(context: ActionContext) -> None:
            nonlocal selection, installed
            context.suppress_error_display = True
            report_properties(context, forcePrompt=force_prompt)

            if not force_prompt and not self.settings.get(SHOW_FUNC_INSTALLATION):
                return

            if func_tools_installed(runner=self.runner, command=self.config.func_command):
                installed = True
                return

            manager = resolve_package_manager(
                False,
                platform=self.platform,
                runner=self.runner,
                package=self.config.package_name,
            )
            items: list[MessageItem] = []
            if manager is not None:
                items.append(DialogResponses.INSTALL)
                items.append(DialogResponses.CANCEL if force_prompt else DialogResponses.SKIP_FOR_NOW)
            else:
                items.append(DialogResponses.LEARN_MORE)
            if not force_prompt:
                items.append(DialogResponses.DONT_WARN_AGAIN)

            result = self.prompter.show_warning_message(INSTALL_MESSAGE, *items, modal=force_prompt)
            report_properties(context, dialogResult=result.title if result else "dismissed")

            if result == DialogResponses.INSTALL:
                channel = select_install_channel(self.prompter, self.platform)
                if channel is None:
                    return
                selection = result
                self._install(manager, channel)
                installed = func_tools_installed(runner=self.runner, command=self.config.func_command)
            elif result == DialogResponses.DONT_WARN_AGAIN:
                self.settings.set(SHOW_FUNC_INSTALLATION, False)
            elif result == DialogResponses.LEARN_MORE:
                self.opener(self.config.install_learn_more_url)

        self.telemetry(VALIDATE_INSTALLED_EVENT, action)

        if selection == DialogResponses.INSTALL and not installed:
            self._show_install_failed()

        return installed

    def local_runtime(self) -> ProjectRuntime | None:
        """Guess the project runtime from the local Core Tools install."""
        return try_get_local_runtime(
            platform=self.platform,
            runner=self.runner,
            command=self.config.func_command,
        )

    def _install(self, manager, channel: RuntimeChannel) -> None:
        install_runtime(
            manager,
            channel,
            output=self.output,
            runner=self.runner,
            package=self.config.package_name,
            brew_tap=self.config.brew_tap,
        )

    def _show_install_failed(self) -> None:
        result = self.prompter.show_warning_message(INSTALL_FAILED_MESSAGE, DialogResponses.LEARN_MORE)
        if result == DialogResponses.LEARN_MORE:
            self.opener(self.config.install_learn_more_url)
