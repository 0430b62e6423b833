"""
Configuration file parsing and management.

Reads YAML configuration files and merges them from multiple sources
(custom → project → user → system → defaults).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

import yaml

from .common import vlog


# Configuration file locations (in priority order)
CONFIG_LOCATIONS = [
    ".coretools-advisor.yml",                                    # Project root (highest priority)
    ".coretools-advisor.yaml",
    os.path.expanduser("~/.config/coretools-advisor/config.yml"),  # User global
    os.path.expanduser("~/.config/coretools-advisor/config.yaml"),
    "/etc/coretools-advisor/config.yml",                         # System global
    "/etc/coretools-advisor/config.yaml",
]

DEFAULT_DIST_TAGS_URL = "https://aka.ms/W2mvv3"
DEFAULT_OUTDATED_LEARN_MORE_URL = "https://aka.ms/azFuncOutdated"
DEFAULT_INSTALL_LEARN_MORE_URL = "https://aka.ms/Dqur4e"

# AdvisorConfig field -> (section, key) in a configuration file
FILE_KEYS: dict[str, tuple[str, str]] = {
    "dist_tags_url": ("registry", "url"),
    "timeout_seconds": ("registry", "timeout_seconds"),
    "func_command": ("runtime", "command"),
    "package_name": ("runtime", "package"),
    "brew_tap": ("runtime", "brew_tap"),
    "outdated_learn_more_url": ("links", "outdated"),
    "install_learn_more_url": ("links", "install"),
}


@dataclass(frozen=True)
class AdvisorConfig:
    """
    Static configuration for the runtime advisor.

    Attributes:
        dist_tags_url: Registry endpoint returning the runtime's distribution tags
        timeout_seconds: Timeout for the registry request
        func_command: Executable name of the Functions runtime CLI
        package_name: Package/formula name used by npm and brew
        brew_tap: Homebrew tap providing the formula
        outdated_learn_more_url: Documentation opened from the upgrade prompt
        install_learn_more_url: Documentation opened from the install prompt
        source: Path to the configuration file that was loaded
        explicit_fields: Fields set by a configuration file rather than defaulted
    """
    dist_tags_url: str = DEFAULT_DIST_TAGS_URL
    timeout_seconds: int = 5
    func_command: str = "func"
    package_name: str = "azure-functions-core-tools"
    brew_tap: str = "azure/functions"
    outdated_learn_more_url: str = DEFAULT_OUTDATED_LEARN_MORE_URL
    install_learn_more_url: str = DEFAULT_INSTALL_LEARN_MORE_URL
    source: str = ""
    explicit_fields: frozenset[str] = field(default=frozenset(), compare=False, repr=False)

    def __post_init__(self):
        """Validate config after initialization."""
        if not isinstance(self.timeout_seconds, int) or not 1 <= self.timeout_seconds <= 60:
            raise ValueError(
                f"Invalid timeout_seconds: {self.timeout_seconds}. "
                "Must be between 1 and 60"
            )

        if not self.dist_tags_url.startswith(("https://", "http://")):
            raise ValueError(f"Invalid dist_tags_url: {self.dist_tags_url}. Must be an http(s) URL")

        for name in ("func_command", "package_name", "brew_tap"):
            if not getattr(self, name):
                raise ValueError(f"Invalid {name}: must not be empty")

    @staticmethod
    def from_dict(data: dict[str, Any], source: str = "") -> AdvisorConfig:
        """Create AdvisorConfig from dictionary, remembering which keys it set."""
        values: dict[str, Any] = {}
        for name, (section, key) in FILE_KEYS.items():
            table = data.get(section, {})
            if not isinstance(table, dict):
                raise ValueError(f"Invalid section {section}: must be a mapping")
            if key in table:
                values[name] = table[key]

        return AdvisorConfig(source=source, explicit_fields=frozenset(values), **values)

    def merge_with(self, other: AdvisorConfig) -> AdvisorConfig:
        """
        Merge this config with another, preferring values this config set explicitly.

        Args:
            other: Other config to merge (lower priority)

        Returns:
            New merged AdvisorConfig object
        """
        merged = {
            name: getattr(self if name in self.explicit_fields else other, name)
            for name in FILE_KEYS
        }
        return AdvisorConfig(
            source=self.source or other.source,
            explicit_fields=self.explicit_fields | other.explicit_fields,
            **merged,
        )


def _load_yaml(file_path: str) -> dict[str, Any] | None:
    """
    Load YAML configuration file.

    Returns:
        Parsed configuration dictionary, or None if the file is unreadable or invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return None


def load_config_file(file_path: str, verbose: bool = False) -> AdvisorConfig | None:
    """
    Load configuration from a single file.

    Args:
        file_path: Path to configuration file
        verbose: Enable verbose logging

    Returns:
        AdvisorConfig object, or None if file cannot be loaded
    """
    if not os.path.exists(file_path):
        return None

    vlog(f"Loading config from: {file_path}", verbose)

    data = _load_yaml(file_path)
    if data is None:
        vlog(f"Invalid config file: {file_path}", verbose)
        return None

    try:
        config = AdvisorConfig.from_dict(data, source=file_path)
        vlog(f"Loaded config successfully: {file_path}", verbose)
        return config
    except (ValueError, TypeError, AttributeError) as e:
        vlog(f"Config validation failed for {file_path}: {e}", verbose)
        return None


def load_config(
    custom_path: str | None = None,
    verbose: bool = False,
) -> AdvisorConfig:
    """
    Load and merge configuration from all sources.

    Configuration precedence (highest to lowest):
    1. Custom path (if provided)
    2. Project .coretools-advisor.yml
    3. User ~/.config/coretools-advisor/config.yml
    4. System /etc/coretools-advisor/config.yml
    5. Default configuration

    Raises:
        ValueError: If custom_path is provided but file cannot be loaded
    """
    configs: list[AdvisorConfig] = []

    if custom_path:
        config = load_config_file(custom_path, verbose)
        if config is None:
            raise ValueError(f"Could not load config from specified path: {custom_path}")
        configs.append(config)

    for location in CONFIG_LOCATIONS:
        config = load_config_file(location, verbose)
        if config is not None:
            configs.append(config)

    if not configs:
        vlog("No config files found, using defaults", verbose)
        return AdvisorConfig()

    merged = configs[0]
    for config in configs[1:]:
        merged = merged.merge_with(config)

    vlog(f"Merged {len(configs)} config files", verbose)
    return merged
