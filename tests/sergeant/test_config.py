"""
Tests for sergeant/config.py.

Tests configuration loading including:
- YAML parsing into AppConfig
- Validation of section shapes
- Command-line overrides
"""

import argparse
import logging

import pytest

from sergeant import AppConfig, ConfigError, LoggingConfig, load_config
from sergeant.log import LEVEL_DISABLED


@pytest.mark.unit
class TestLoadConfig:
    """Test load_config()."""

    def test_full_file(self, tmp_path):
        path = tmp_path / "app.yaml"
        path.write_text(
            "name: helloworld\n"
            "description: Prints 'Hello World!' to the console.\n"
            "logging:\n"
            "  level: debug\n"
            "  colors: true\n"
        )

        config = load_config(path)

        assert config.name == "helloworld"
        assert config.description == "Prints 'Hello World!' to the console."
        assert config.logging.level == "debug"
        assert config.logging.colors is True
        assert config.source == path

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        config = load_config(str(path))

        assert config.name is None
        assert config.logging.level == "info"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.yaml")

        assert "cannot read config file" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("name: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert "invalid YAML" in str(exc_info.value)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert "must be a mapping" in str(exc_info.value)

    def test_logging_must_be_mapping(self):
        with pytest.raises(ConfigError):
            AppConfig.from_dict({"logging": "debug"})

    def test_name_must_be_string(self):
        with pytest.raises(ConfigError) as exc_info:
            AppConfig.from_dict({"name": 42})

        assert "'name' must be a string" in str(exc_info.value)

    def test_unknown_level_in_file(self, tmp_path):
        path = tmp_path / "app.yaml"
        path.write_text("logging:\n  level: loud\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert "Unknown log level 'loud'" in str(exc_info.value)
        assert "section=logging" in str(exc_info.value)

    def test_true_level_rejected(self):
        with pytest.raises(ConfigError):
            AppConfig.from_dict({"logging": {"level": True}})

    def test_false_level_disables_logging(self):
        config = AppConfig.from_dict({"logging": {"level": False}})

        assert config.logging.to_log_config().disabled

    @pytest.mark.parametrize("colors", ["false", "yes", 1])
    def test_colors_must_be_boolean(self, colors):
        with pytest.raises(ConfigError) as exc_info:
            AppConfig.from_dict({"logging": {"colors": colors}})

        assert "'logging.colors' must be true or false" in str(exc_info.value)


@pytest.mark.unit
class TestApplyArgs:
    """Test AppConfig.apply_args()."""

    def test_log_level_override(self):
        config = AppConfig()

        config.apply_args(argparse.Namespace(log_level="DEBUG", quiet=False))

        assert config.logging.level == logging.DEBUG

    def test_quiet_disables_logging(self):
        config = AppConfig()

        config.apply_args(argparse.Namespace(log_level="debug", quiet=True))

        assert config.logging.level == LEVEL_DISABLED

    def test_no_flags_keeps_config(self):
        config = AppConfig(logging=LoggingConfig(level="warning"))

        config.apply_args(argparse.Namespace())

        assert config.logging.level == "warning"

    def test_unknown_level(self):
        with pytest.raises(ConfigError) as exc_info:
            AppConfig().apply_args(argparse.Namespace(log_level="loud"))

        assert "--log-level" in str(exc_info.value)


@pytest.mark.unit
def test_logging_config_to_log_config():
    log_config = LoggingConfig(level="false", colors=True).to_log_config()

    assert log_config.disabled is True
    assert log_config.colors is True
