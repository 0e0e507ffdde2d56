"""Unit tests for settings loading."""

import pytest

from cfngraph.config import (
    CONFIG_FILENAME,
    ENV_LAYOUT_DIRECTION,
    ENV_MIN_GROUP_SIZE,
    LayoutDirection,
    load_settings,
)
from cfngraph.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(ENV_LAYOUT_DIRECTION, raising=False)
    monkeypatch.delenv(ENV_MIN_GROUP_SIZE, raising=False)


class TestLoadSettings:
    def test_defaults_when_file_missing(self, tmp_path):
        settings = load_settings(tmp_path / CONFIG_FILENAME)
        assert settings.layout.direction == LayoutDirection.DOWN
        assert settings.layout.node_width == 200
        assert settings.layout.node_height == 80
        assert settings.layout.node_spacing == 100
        assert settings.layout.layer_spacing == 80
        assert settings.grouping.enabled is True
        assert settings.grouping.min_group_size == 2

    def test_default_path_is_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / CONFIG_FILENAME).write_text("grouping:\n  min_group_size: 4\n")
        monkeypatch.chdir(tmp_path)
        assert load_settings().grouping.min_group_size == 4

    def test_yaml_overrides(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text(
            "layout:\n"
            "  direction: RIGHT\n"
            "  node_spacing: 40\n"
            "grouping:\n"
            "  enabled: false\n"
        )
        settings = load_settings(path)
        assert settings.layout.direction == LayoutDirection.RIGHT
        assert settings.layout.node_spacing == 40
        assert settings.layout.node_width == 200
        assert settings.grouping.enabled is False

    def test_empty_file(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("")
        assert load_settings(path).grouping.min_group_size == 2

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("layout:\n  direction: DOWN\n")
        monkeypatch.setenv(ENV_LAYOUT_DIRECTION, "right")
        monkeypatch.setenv(ENV_MIN_GROUP_SIZE, "3")
        settings = load_settings(path)
        assert settings.layout.direction == LayoutDirection.RIGHT
        assert settings.grouping.min_group_size == 3

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("layout: [unclosed\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)

    @pytest.mark.parametrize("content", [
        "layout:\n  direction: UP\n",
        "grouping:\n  min_group_size: 0\n",
        "layout:\n  node_width: -5\n",
    ])
    def test_schema_violations(self, tmp_path, content):
        path = tmp_path / CONFIG_FILENAME
        path.write_text(content)
        with pytest.raises(ConfigError, match="Invalid settings"):
            load_settings(path)
