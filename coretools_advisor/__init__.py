"""
coretools-advisor - Install and upgrade advice for the Azure Functions Core Tools.

Core Modules:
- Detection: local version probe, remote distribution tags, package managers
- Decision: semantic versions, runtime channels, upgrade recommendation
- Action: prompts, installer, preference storage
- Orchestration: RuntimeVersionAdvisor.check() and ensure_installed()
"""

__version__ = "1.0.0"

VERSION = __version__

# Versions and channels
from .versions import (
    SemanticVersion,
    RuntimeChannel,
    ProjectRuntime,
    CHANNEL_BY_MAJOR,
    UNKNOWN_CHANNEL,
    classify,
    parse_semver,
    valid_semver,
)

# Detection
from .common import CommandError, run_command
from .detection import (
    KNOWN_BAD_VERSIONS,
    normalize_version,
    extract_version,
    probe_local_version,
    func_tools_installed,
    try_get_local_runtime,
)
from .collectors import (
    CollectionError,
    NetworkError,
    ParseError,
    DistTags,
    fetch_dist_tags,
    get_newest_version,
)
from .package_managers import (
    PackageManager,
    NPM,
    BREW,
    get_package_manager,
    resolve_package_manager,
)

# Decision and action
from .upgrade import UpgradeRecommendation, decide_upgrade
from .installer import InstallStep, get_install_steps, install_runtime, select_install_channel
from .prompts import MessageItem, DialogResponses, Prompter, ConsolePrompter, UserCancelledError
from .output import OutputChannel, StreamOutputChannel, BufferedOutputChannel
from .settings import (
    SettingsStore,
    InMemorySettingsStore,
    YamlSettingsStore,
    SHOW_CORE_TOOLS_WARNING,
    SHOW_FUNC_INSTALLATION,
)
from .config import AdvisorConfig, load_config, load_config_file
from .telemetry import ActionContext, call_with_telemetry

# Orchestration
from .advisor import RuntimeVersionAdvisor

from .logging_config import setup_logging, get_logger

__all__ = [
    "__version__",
    "VERSION",
    # Versions and channels
    "SemanticVersion",
    "RuntimeChannel",
    "ProjectRuntime",
    "CHANNEL_BY_MAJOR",
    "UNKNOWN_CHANNEL",
    "classify",
    "parse_semver",
    "valid_semver",
    # Detection
    "CommandError",
    "run_command",
    "KNOWN_BAD_VERSIONS",
    "normalize_version",
    "extract_version",
    "probe_local_version",
    "func_tools_installed",
    "try_get_local_runtime",
    "CollectionError",
    "NetworkError",
    "ParseError",
    "DistTags",
    "fetch_dist_tags",
    "get_newest_version",
    "PackageManager",
    "NPM",
    "BREW",
    "get_package_manager",
    "resolve_package_manager",
    # Decision and action
    "UpgradeRecommendation",
    "decide_upgrade",
    "InstallStep",
    "get_install_steps",
    "install_runtime",
    "select_install_channel",
    "MessageItem",
    "DialogResponses",
    "Prompter",
    "ConsolePrompter",
    "UserCancelledError",
    "OutputChannel",
    "StreamOutputChannel",
    "BufferedOutputChannel",
    "SettingsStore",
    "InMemorySettingsStore",
    "YamlSettingsStore",
    "SHOW_CORE_TOOLS_WARNING",
    "SHOW_FUNC_INSTALLATION",
    "AdvisorConfig",
    "load_config",
    "load_config_file",
    "ActionContext",
    "call_with_telemetry",
    # Orchestration
    "RuntimeVersionAdvisor",
    # Logging
    "setup_logging",
    "get_logger",
]
