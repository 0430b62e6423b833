"""
User preference storage.

Preferences are boolean toggles the user flips from a prompt
("Don't warn again"). They are read at the start of a check cycle and
written only in response to an explicit choice.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from .common import vlog

SHOW_CORE_TOOLS_WARNING = "showCoreToolsWarning"
SHOW_FUNC_INSTALLATION = "showFuncInstallation"

DEFAULT_SETTINGS_PATH = os.path.expanduser("~/.config/coretools-advisor/settings.yml")


class SettingsStore:
    """Key/value store of boolean preferences. Unset keys read as True."""

    def get(self, key: str) -> bool:
        raise NotImplementedError

    def set(self, key: str, value: bool) -> None:
        raise NotImplementedError


class InMemorySettingsStore(SettingsStore):
    """Settings held in a dict, for hosts that persist preferences themselves."""

    def __init__(self, values: dict[str, bool] | None = None):
        self.values: dict[str, bool] = dict(values or {})

    def get(self, key: str) -> bool:
        return bool(self.values.get(key, True))

    def set(self, key: str, value: bool) -> None:
        self.values[key] = bool(value)


class YamlSettingsStore(SettingsStore):
    """
    Settings persisted as a flat YAML mapping.

    Attributes:
        path: Settings file location
    """

    def __init__(self, path: str | None = None, verbose: bool = False):
        self.path = Path(path or DEFAULT_SETTINGS_PATH)
        self.verbose = verbose

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            vlog(f"Ignoring unreadable settings file {self.path}: {e}", self.verbose)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> bool:
        value = self._read().get(key, True)
        return value if isinstance(value, bool) else True

    def set(self, key: str, value: bool) -> None:
        data = self._read()
        data[key] = bool(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
        vlog(f"Saved setting {key}={value} to {self.path}", self.verbose)
