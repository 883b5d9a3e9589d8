"""
Application configuration.

Configuration is read from an optional YAML file and overridden by
command-line flags:

    name: helloworld
    description: Prints 'Hello World!' to the console.
    logging:
      level: debug
      colors: false

Precedence, highest first: CLI flags, YAML file, constructor defaults.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .log import LEVEL_DISABLED, LogConfig, resolve_level


@dataclass
class LoggingConfig:
    """Logging section of the configuration."""

    level: int | str | bool = "info"
    colors: bool = False

    def to_log_config(self) -> LogConfig:
        try:
            return LogConfig.from_params(self.level, colors=self.colors)
        except ValueError as e:
            raise ConfigError(str(e), section="logging") from e


@dataclass
class AppConfig:
    """Application identity and ambient settings."""

    name: str | None = None
    description: str | None = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Path | None = None) -> AppConfig:
        """
        Build a config from a parsed mapping.

        Raises:
            ConfigError: If a section has the wrong shape
        """
        if not isinstance(data, dict):
            raise ConfigError(
                "top-level configuration must be a mapping", file=source
            )

        section = data.get("logging") or {}
        if not isinstance(section, dict):
            raise ConfigError("'logging' must be a mapping", file=source)

        name = data.get("name")
        description = data.get("description")
        for key, value in (("name", name), ("description", description)):
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"'{key}' must be a string", file=source)

        colors = section.get("colors", False)
        if not isinstance(colors, bool):
            raise ConfigError("'logging.colors' must be true or false", file=source)

        logging_config = LoggingConfig(
            level=section.get("level", "info"), colors=colors
        )
        # Raises ConfigError for an unknown level
        logging_config.to_log_config()

        return cls(
            name=name, description=description, logging=logging_config, source=source
        )

    def apply_args(self, args: argparse.Namespace) -> None:
        """Apply global command-line flags on top of the loaded values."""
        if getattr(args, "quiet", False):
            self.logging.level = LEVEL_DISABLED
            return
        level = getattr(args, "log_level", None)
        if level is not None:
            try:
                self.logging.level = resolve_level(level)
            except ValueError as e:
                raise ConfigError(str(e), flag="--log-level") from e


def load_config(path: str | Path) -> AppConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        AppConfig: Parsed configuration

    Raises:
        ConfigError: If the file cannot be read or is not valid YAML
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file: {e.strerror}", file=path) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", file=path) from e

    return AppConfig.from_dict(data if data is not None else {}, source=path)
