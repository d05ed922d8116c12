"""Unit tests for logging_module.config."""

import pytest

from logging_module.config import LoggingConfig


class TestLoggingConfig:
    """Tests for LoggingConfig class."""

    def test_default_values(self):
        """Test default configuration values."""
        config = LoggingConfig()

        assert config.log_level == "INFO"
        assert config.log_path is None
        assert config.log_file_max_bytes == 10 * 1024 * 1024
        assert config.log_file_backup_count == 5

    def test_from_env(self, monkeypatch):
        """Test configuration from environment variables."""
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("LOG_PATH", "/tmp/alerts-logs")
        monkeypatch.setenv("LOG_FILE_MAX_BYTES", "2048")
        monkeypatch.setenv("LOG_FILE_BACKUP_COUNT", "2")

        config = LoggingConfig.from_env()

        assert config.log_level == "WARNING"
        assert config.log_path == "/tmp/alerts-logs"
        assert config.log_file_max_bytes == 2048
        assert config.log_file_backup_count == 2

    def test_empty_log_path_means_console_only(self, monkeypatch):
        """An empty LOG_PATH disables the file handler."""
        monkeypatch.setenv("LOG_PATH", "")

        assert LoggingConfig.from_env().log_path is None

    def test_validate_invalid_log_level(self):
        """Test validation rejects unknown log levels."""
        with pytest.raises(ValueError, match="Invalid log_level"):
            LoggingConfig(log_level="VERBOSE").validate()

    def test_validate_small_log_file(self):
        """Test validation rejects tiny rotation sizes."""
        with pytest.raises(ValueError, match="log_file_max_bytes"):
            LoggingConfig(log_file_max_bytes=10).validate()

    def test_validate_backup_count(self):
        """Test validation rejects a zero backup count."""
        with pytest.raises(ValueError, match="log_file_backup_count"):
            LoggingConfig(log_file_backup_count=0).validate()
