"""
Tests for configuration parsing (coretools_advisor/config.py) and
preference storage (coretools_advisor/settings.py).
"""

from unittest.mock import patch

import pytest
import yaml

from coretools_advisor.config import (
    DEFAULT_DIST_TAGS_URL,
    AdvisorConfig,
    _load_yaml,
    load_config,
    load_config_file,
)
from coretools_advisor.settings import (
    SHOW_CORE_TOOLS_WARNING,
    SHOW_FUNC_INSTALLATION,
    InMemorySettingsStore,
    YamlSettingsStore,
)

CONFIG_FULL = """
registry:
  url: https://registry.example.test/dist-tags
  timeout_seconds: 10
runtime:
  command: func4
  package: my-core-tools
  brew_tap: example/tap
links:
  outdated: https://docs.example.test/outdated
  install: https://docs.example.test/install
"""


def write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestAdvisorConfig:
    """Tests for AdvisorConfig dataclass."""

    def test_defaults(self):
        config = AdvisorConfig()
        assert config.dist_tags_url == DEFAULT_DIST_TAGS_URL
        assert config.timeout_seconds == 5
        assert config.func_command == "func"
        assert config.package_name == "azure-functions-core-tools"
        assert config.brew_tap == "azure/functions"

    def test_from_dict(self):
        config = AdvisorConfig.from_dict(yaml.safe_load(CONFIG_FULL), source="test.yml")
        assert config.dist_tags_url == "https://registry.example.test/dist-tags"
        assert config.timeout_seconds == 10
        assert config.func_command == "func4"
        assert config.package_name == "my-core-tools"
        assert config.brew_tap == "example/tap"
        assert config.install_learn_more_url == "https://docs.example.test/install"
        assert config.source == "test.yml"

    def test_from_dict_partial(self):
        config = AdvisorConfig.from_dict({"registry": {"timeout_seconds": 30}})
        assert config.timeout_seconds == 30
        assert config.dist_tags_url == DEFAULT_DIST_TAGS_URL

    @pytest.mark.parametrize("timeout", [0, 61, "5"])
    def test_invalid_timeout(self, timeout):
        with pytest.raises(ValueError, match="timeout_seconds"):
            AdvisorConfig(timeout_seconds=timeout)

    def test_invalid_url(self):
        with pytest.raises(ValueError, match="dist_tags_url"):
            AdvisorConfig(dist_tags_url="ftp://example.test")

    def test_empty_command(self):
        with pytest.raises(ValueError, match="func_command"):
            AdvisorConfig(func_command="")

    def test_from_dict_records_explicit_fields(self):
        config = AdvisorConfig.from_dict({"registry": {"timeout_seconds": 5}, "runtime": {"command": "func4"}})
        assert config.explicit_fields == {"timeout_seconds", "func_command"}

    def test_from_dict_rejects_non_mapping_section(self):
        with pytest.raises(ValueError, match="registry"):
            AdvisorConfig.from_dict({"registry": "https://example.com"})

    def test_merge_prefers_explicit_values(self):
        project = AdvisorConfig.from_dict({"runtime": {"command": "func4"}}, source="project.yml")
        user = AdvisorConfig.from_dict({"runtime": {"command": "func3"}, "registry": {"timeout_seconds": 20}}, source="user.yml")
        merged = project.merge_with(user)
        assert merged.func_command == "func4"
        assert merged.timeout_seconds == 20
        assert merged.source == "project.yml"

    def test_merge_explicit_default_overrides_lower_priority(self):
        project = AdvisorConfig.from_dict({"registry": {"timeout_seconds": 5}})
        user = AdvisorConfig.from_dict({"registry": {"timeout_seconds": 10}})
        assert project.merge_with(user).timeout_seconds == 5


class TestLoadConfig:
    """Tests for configuration loading."""

    def test_load_yaml_invalid(self, tmp_path):
        path = write(tmp_path, "bad.yml", "registry: [unclosed")
        assert _load_yaml(path) is None

    def test_load_yaml_non_mapping(self, tmp_path):
        path = write(tmp_path, "list.yml", "- a\n- b\n")
        assert _load_yaml(path) == {}

    def test_load_config_file_missing(self, tmp_path):
        assert load_config_file(str(tmp_path / "missing.yml")) is None

    def test_load_config_file_invalid_values(self, tmp_path):
        path = write(tmp_path, "invalid.yml", "registry:\n  timeout_seconds: 600\n")
        assert load_config_file(path) is None

    def test_load_config_file(self, tmp_path):
        path = write(tmp_path, "config.yml", CONFIG_FULL)
        config = load_config_file(path)
        assert config.func_command == "func4"
        assert config.source == path

    def test_load_config_defaults(self):
        with patch("coretools_advisor.config.CONFIG_LOCATIONS", []):
            assert load_config() == AdvisorConfig()

    def test_load_config_custom_path_missing(self, tmp_path):
        with pytest.raises(ValueError, match="Could not load config"):
            load_config(str(tmp_path / "missing.yml"))

    def test_load_config_merges_locations(self, tmp_path):
        project = write(tmp_path, "project.yml", "runtime:\n  command: func4\n")
        user = write(tmp_path, "user.yml", "runtime:\n  command: func3\nregistry:\n  timeout_seconds: 20\n")
        with patch("coretools_advisor.config.CONFIG_LOCATIONS", [project, user]):
            config = load_config()
        assert config.func_command == "func4"
        assert config.timeout_seconds == 20

    def test_project_file_can_restore_default(self, tmp_path):
        project = write(tmp_path, "project.yml", "registry:\n  timeout_seconds: 5\n")
        user = write(tmp_path, "user.yml", "registry:\n  timeout_seconds: 10\n")
        with patch("coretools_advisor.config.CONFIG_LOCATIONS", [project, user]):
            assert load_config().timeout_seconds == 5


class TestInMemorySettingsStore:
    """Tests for InMemorySettingsStore."""

    def test_defaults_to_true(self):
        store = InMemorySettingsStore()
        assert store.get(SHOW_CORE_TOOLS_WARNING) is True
        assert store.get(SHOW_FUNC_INSTALLATION) is True

    def test_set(self):
        store = InMemorySettingsStore()
        store.set(SHOW_CORE_TOOLS_WARNING, False)
        assert store.get(SHOW_CORE_TOOLS_WARNING) is False
        assert store.get(SHOW_FUNC_INSTALLATION) is True


class TestYamlSettingsStore:
    """Tests for YamlSettingsStore."""

    def test_missing_file_defaults_to_true(self, tmp_path):
        store = YamlSettingsStore(str(tmp_path / "settings.yml"))
        assert store.get(SHOW_CORE_TOOLS_WARNING) is True

    def test_set_persists(self, tmp_path):
        path = tmp_path / "nested" / "settings.yml"
        YamlSettingsStore(str(path)).set(SHOW_FUNC_INSTALLATION, False)

        assert yaml.safe_load(path.read_text()) == {SHOW_FUNC_INSTALLATION: False}
        assert YamlSettingsStore(str(path)).get(SHOW_FUNC_INSTALLATION) is False

    def test_set_keeps_other_keys(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("showCoreToolsWarning: false\ncustom: 3\n")
        YamlSettingsStore(str(path)).set(SHOW_FUNC_INSTALLATION, False)

        data = yaml.safe_load(path.read_text())
        assert data == {SHOW_CORE_TOOLS_WARNING: False, SHOW_FUNC_INSTALLATION: False, "custom": 3}

    def test_non_boolean_value_defaults_to_true(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("showCoreToolsWarning: maybe\n")
        assert YamlSettingsStore(str(path)).get(SHOW_CORE_TOOLS_WARNING) is True

    def test_unreadable_file_defaults_to_true(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("showCoreToolsWarning: [unclosed\n")
        assert YamlSettingsStore(str(path)).get(SHOW_CORE_TOOLS_WARNING) is True
