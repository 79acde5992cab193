"""
User configuration management for keymapview.

This module handles user-specific configuration settings with multiple sources:
1. Environment variables (highest precedence)
2. Command-line provided config file
3. Config file in current directory
4. User's XDG config directory
5. Default values (lowest precedence)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from keymapview.config.models import ParserConfig
from keymapview.core.errors import ConfigError


logger = logging.getLogger(__name__)

ENV_PREFIX = "KEYMAPVIEW_"


class UserConfigData(BaseSettings):
    """User configuration data model with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables
    2. Constructor arguments (file data)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override file configuration."""
        return (env_settings, init_settings)

    log_level: str = Field(default="WARNING", description="Default log level")
    log_file: Path | None = Field(default=None, description="Optional JSON log file")
    parser: ParserConfig = Field(default_factory=ParserConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.strip().upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_log_file(cls, v: Any) -> Any:
        """Expand ``~`` in log file paths."""
        if isinstance(v, str) and v:
            return Path(v).expanduser()
        return v


class UserConfig:
    """Locates, loads and validates the user configuration."""

    def __init__(self, cli_config_path: str | Path | None = None):
        """
        Initialize the user configuration handler.

        Args:
            cli_config_path: Optional config file path provided via CLI
        """
        self._cli_config_path = (
            Path(cli_config_path).expanduser() if cli_config_path else None
        )
        self._config_paths = self._generate_config_paths()
        self.config_file: Path | None = None
        self._data = self._load_config()

    @property
    def data(self) -> UserConfigData:
        """The validated configuration."""
        return self._data

    @property
    def parser(self) -> ParserConfig:
        """Parser settings."""
        return self._data.parser

    def _generate_config_paths(self) -> list[Path]:
        """Generate a list of config paths to search in order of precedence."""
        config_paths = []

        if self._cli_config_path:
            config_paths.append(self._cli_config_path)

        config_paths.extend(
            [Path.cwd() / "keymapview.yaml", Path.cwd() / ".keymapview.yml"]
        )

        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        config_root = (
            Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
        )
        config_paths.extend(
            [
                config_root / "keymapview" / "config.yaml",
                config_root / "keymapview" / "config.yml",
            ]
        )

        return config_paths

    def _load_config(self) -> UserConfigData:
        """Load the first config file found and merge environment variables."""
        if self._cli_config_path and not self._cli_config_path.exists():
            raise ConfigError(
                f"Config file not found: {self._cli_config_path}",
                context={"path": str(self._cli_config_path)},
            )

        file_data: dict[str, Any] = {}
        for path in self._config_paths:
            if path.is_file():
                file_data = self._read_yaml(path)
                self.config_file = path
                logger.debug("Loaded configuration from %s", path)
                break
        else:
            logger.debug("No configuration file found, using defaults")

        try:
            return UserConfigData(**file_data)
        except ValidationError as e:
            source = str(self.config_file) if self.config_file else "environment"
            raise ConfigError(
                f"Invalid configuration: {e}", context={"source": source}
            ) from e

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        try:
            with path.open(encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Error parsing config file: {e}", context={"path": str(path)}
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Error reading config file: {e}", context={"path": str(path)}
            ) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigError(
                "Config file must contain a mapping", context={"path": str(path)}
            )
        return content


def create_user_config(cli_config_path: str | Path | None = None) -> UserConfig:
    """Create a UserConfig instance.

    Args:
        cli_config_path: Optional config file path provided via CLI

    Returns:
        Loaded UserConfig
    """
    return UserConfig(cli_config_path=cli_config_path)
