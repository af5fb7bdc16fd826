"""Tests for editor settings."""

import pytest

from dictionary_editor.config import EditorSettings, load_settings
from dictionary_editor.exceptions import ConfigError


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings(environ={})
        assert settings == EditorSettings()
        config = settings.autosave_config()
        assert (config.quiet_period, config.saved_display, config.error_display) == (2.0, 2.0, 3.0)

    def test_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("quiet_period: 0.5\neditor_mode: true\nlog_level: debug\n")
        settings = load_settings(path, environ={})
        assert settings.quiet_period == 0.5
        assert settings.editor_mode is True
        assert settings.log_level == "DEBUG"

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("quiet_period: 0.5\n")
        settings = load_settings(path, environ={
            "DICTIONARY_EDITOR_QUIET_PERIOD": "1.5",
            "DICTIONARY_EDITOR_EDITOR_MODE": "off",
        })
        assert settings.quiet_period == 1.5
        assert settings.editor_mode is False

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("quiet: 1\n")
        with pytest.raises(ConfigError, match="Unknown setting"):
            load_settings(path, environ={})

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- 1\n")
        with pytest.raises(ConfigError):
            load_settings(path, environ={})

    @pytest.mark.parametrize("name,value", [
        ("DICTIONARY_EDITOR_QUIET_PERIOD", "-1"),
        ("DICTIONARY_EDITOR_SAVED_DISPLAY", "soon"),
        ("DICTIONARY_EDITOR_EDITOR_MODE", "maybe"),
        ("DICTIONARY_EDITOR_LOG_LEVEL", "LOUD"),
    ])
    def test_invalid_values(self, name, value):
        with pytest.raises(ConfigError):
            load_settings(environ={name: value})
