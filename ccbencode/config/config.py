"""Configuration management for ccbencode.

Loads configuration hierarchically from defaults → config file →
environment, validates it with pydantic and configures logging.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import toml

from ccbencode.models import Config, SourceConfig
from ccbencode.utils.exceptions import ConfigurationError
from ccbencode.utils.logging_config import setup_logging

CONFIG_FILE_NAME = "ccbencode.toml"

# Mapping of environment variables to config paths
ENV_MAPPINGS: dict[str, str] = {
    "CCBENCODE_LOG_LEVEL": "observability.log_level",
    "CCBENCODE_LOG_FILE": "observability.log_file",
    "CCBENCODE_STRUCTURED_LOGGING": "observability.structured_logging",
    "CCBENCODE_LOG_CORRELATION_ID": "observability.log_correlation_id",
    "CCBENCODE_MAX_SOURCE_BYTES": "source.max_source_bytes",
    "CCBENCODE_URL_TIMEOUT": "source.url_timeout",
}

# Global configuration instance
_config_manager: ConfigManager | None = None


class ConfigManager:
    """Manages configuration loading and validation."""

    def __init__(self, config_file: str | Path | None = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to TOML config file. If None, searches for ccbencode.toml

        """
        self.config_file = self._find_config_file(config_file)
        self.config = self._load_config()
        self._setup_logging()

    def _find_config_file(
        self,
        config_file: str | Path | None,
    ) -> Path | None:
        """Find configuration file in standard locations."""
        if config_file:
            return Path(config_file)

        # Search in current directory, then home directory
        search_paths = [
            Path.cwd() / CONFIG_FILE_NAME,
            Path.home() / ".config" / "ccbencode" / CONFIG_FILE_NAME,
            Path.home() / f".{CONFIG_FILE_NAME}",
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    def _load_config(self) -> Config:
        """Load configuration from file and environment."""
        config_data: dict[str, Any] = {}

        if self.config_file and self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    config_data.update(toml.load(f))
            except (OSError, toml.TomlDecodeError) as e:
                logging.getLogger(__name__).warning(
                    "Failed to load config file %s: %s", self.config_file, e
                )

        config_data = self._merge_config(config_data, self._get_env_config())

        try:
            return Config(**config_data)
        except Exception as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigurationError(msg) from e

    def _get_env_config(self) -> dict[str, Any]:
        """Get configuration from environment variables.

        Values are left as strings; pydantic converts each one to the type of
        the field it targets.
        """
        env_config: dict[str, Any] = {}

        def _set_nested(d: dict[str, Any], path: str, value: Any) -> None:
            parts = path.split(".")
            cur = d
            for p in parts[:-1]:
                cur = cur.setdefault(p, {})
            cur[parts[-1]] = value

        for env_name, cfg_path in ENV_MAPPINGS.items():
            raw = os.getenv(env_name)
            if raw is None:
                continue
            _set_nested(env_config, cfg_path, raw)

        return env_config

    def _merge_config(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Merge configuration dictionaries recursively."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value

        return result

    def export(self) -> str:
        """Export current configuration as a TOML string."""
        return toml.dumps(self.config.model_dump(mode="json", exclude_none=True))

    def _setup_logging(self) -> None:
        """Set up logging configuration."""
        setup_logging(self.config.observability)


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.config


def init_config(config_file: str | Path | None = None) -> ConfigManager:
    """Initialize the global configuration manager."""
    global _config_manager
    _config_manager = ConfigManager(config_file)
    return _config_manager


def reload_config() -> Config:
    """Reload configuration from file."""
    if _config_manager is None:
        msg = "Configuration not initialized"
        raise ConfigurationError(msg)

    _config_manager.config = _config_manager._load_config()  # noqa: SLF001
    _config_manager._setup_logging()  # noqa: SLF001
    return _config_manager.config


def set_config(new_config: Config) -> None:
    """Replace the global configuration at runtime and reconfigure logging."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(None)
    _config_manager.config = new_config
    _config_manager._setup_logging()  # noqa: SLF001


def reset_config() -> None:
    """Drop the global configuration so the next ``get_config()`` reloads it."""
    global _config_manager
    _config_manager = None


def current_source_config() -> SourceConfig:
    """Get the installed source configuration without loading one.

    Unlike ``get_config()`` this never reads config files or the environment
    and never touches logging; defaults apply until the application calls
    ``init_config()`` or ``set_config()``.
    """
    if _config_manager is None:
        return SourceConfig()
    return _config_manager.config.source
