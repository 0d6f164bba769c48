"""Tests for configuration loading."""

import pytest
import toml

pytestmark = [pytest.mark.unit, pytest.mark.config]

from ccbencode.config.config import (
    ConfigManager,
    current_source_config,
    get_config,
    init_config,
    reload_config,
    set_config,
)
from ccbencode.models import Config, LogLevel, ObservabilityConfig, SourceConfig
from ccbencode.utils.exceptions import ConfigurationError


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_defaults(self):
        """Test defaults apply when no file or environment is present."""
        manager = ConfigManager()
        assert manager.config_file is None
        assert manager.config.observability.log_level == LogLevel.INFO
        assert manager.config.source.max_source_bytes is None
        assert manager.config.source.url_timeout == 30.0

    def test_load_file(self, tmp_path):
        """Test values are read from an explicit TOML file."""
        path = tmp_path / "custom.toml"
        path.write_text(
            '[observability]\nlog_level = "DEBUG"\n\n[source]\nmax_source_bytes = 1024\n',
            encoding="utf-8",
        )
        manager = ConfigManager(path)
        assert manager.config.observability.log_level == LogLevel.DEBUG
        assert manager.config.source.max_source_bytes == 1024

    def test_search_current_directory(self, tmp_path):
        """Test ccbencode.toml in the working directory is found."""
        (tmp_path / "ccbencode.toml").write_text(
            "[source]\nurl_timeout = 2.5\n", encoding="utf-8"
        )
        manager = ConfigManager()
        assert manager.config_file.name == "ccbencode.toml"
        assert manager.config.source.url_timeout == 2.5

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test environment variables win over the file."""
        path = tmp_path / "custom.toml"
        path.write_text("[source]\nmax_source_bytes = 1024\n", encoding="utf-8")
        monkeypatch.setenv("CCBENCODE_MAX_SOURCE_BYTES", "1")
        monkeypatch.setenv("CCBENCODE_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("CCBENCODE_STRUCTURED_LOGGING", "yes")
        manager = ConfigManager(path)
        assert manager.config.source.max_source_bytes == 1
        assert manager.config.observability.log_level == LogLevel.WARNING
        assert manager.config.observability.structured_logging is True

    def test_env_values_follow_field_types(self, monkeypatch):
        """Test environment strings convert per field, not by their look."""
        monkeypatch.setenv("CCBENCODE_LOG_FILE", "2024")
        monkeypatch.setenv("CCBENCODE_URL_TIMEOUT", "15")
        monkeypatch.setenv("CCBENCODE_LOG_CORRELATION_ID", "off")
        manager = ConfigManager()
        assert manager.config.observability.log_file == "2024"
        assert manager.config.source.url_timeout == 15.0
        assert manager.config.observability.log_correlation_id is False

    def test_invalid_values(self, monkeypatch):
        """Test validation failures raise ConfigurationError."""
        monkeypatch.setenv("CCBENCODE_URL_TIMEOUT", "-1")
        with pytest.raises(ConfigurationError):
            ConfigManager()

    def test_unreadable_file_is_skipped(self, tmp_path, caplog):
        """Test a broken TOML file is logged and defaults are used."""
        path = tmp_path / "broken.toml"
        path.write_text("[source\n", encoding="utf-8")
        manager = ConfigManager(path)
        assert manager.config == Config()
        assert "Failed to load config file" in caplog.text

    def test_export(self, tmp_path):
        """Test the active configuration exports as TOML."""
        path = tmp_path / "custom.toml"
        path.write_text("[source]\nmax_source_bytes = 99\n", encoding="utf-8")
        exported = toml.loads(ConfigManager(path).export())
        assert exported["source"]["max_source_bytes"] == 99
        assert exported["observability"]["log_level"] == "INFO"
        assert "log_file" not in exported["observability"]


class TestGlobalConfig:
    """Test cases for the module level helpers."""

    def test_get_config_is_cached(self):
        """Test get_config returns the same instance until reset."""
        assert get_config() is get_config()

    def test_init_and_reload(self, tmp_path):
        """Test init_config installs a manager and reload_config rereads it."""
        path = tmp_path / "custom.toml"
        path.write_text("[source]\nmax_source_bytes = 5\n", encoding="utf-8")
        init_config(path)
        assert get_config().source.max_source_bytes == 5

        path.write_text("[source]\nmax_source_bytes = 6\n", encoding="utf-8")
        assert reload_config().source.max_source_bytes == 6

    def test_reload_requires_init(self):
        """Test reload_config fails before any configuration is loaded."""
        with pytest.raises(ConfigurationError):
            reload_config()

    def test_set_config(self):
        """Test set_config replaces the global configuration."""
        new_config = Config(
            observability=ObservabilityConfig(log_level=LogLevel.ERROR),
            source=SourceConfig(max_source_bytes=7),
        )
        set_config(new_config)
        assert get_config() is new_config

    def test_current_source_config(self, monkeypatch):
        """Test source settings default until a configuration is installed."""
        monkeypatch.setenv("CCBENCODE_MAX_SOURCE_BYTES", "8")
        assert current_source_config() == SourceConfig()

        set_config(Config(source=SourceConfig(max_source_bytes=9)))
        assert current_source_config().max_source_bytes == 9
