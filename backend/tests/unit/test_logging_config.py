"""Tests for centralized logging configuration."""

import logging

import pytest
from pydantic import ValidationError

from logging_config import NOISY_LOGGERS, setup_logging


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_root_logger_level_default_info(self, monkeypatch):
        """Default LOG_LEVEL should set root logger to INFO."""
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        from config import Settings
        monkeypatch.setattr("logging_config.settings", Settings())

        setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_root_logger_level_from_settings(self, monkeypatch):
        """LOG_LEVEL setting should control root logger level."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        from config import Settings
        monkeypatch.setattr("logging_config.settings", Settings())

        setup_logging()

        assert logging.getLogger().level == logging.DEBUG

    def test_third_party_loggers_suppressed(self, monkeypatch):
        """SQLAlchemy, HTTP and OpenAI SDK loggers should be set to WARNING."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        from config import Settings
        monkeypatch.setattr("logging_config.settings", Settings())

        setup_logging()

        assert "openai" in NOISY_LOGGERS
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING, (
                f"{name} logger not suppressed"
            )

    def test_lines_tagged_with_service(self, monkeypatch):
        """Each handler format carries the service name."""
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        from config import Settings
        monkeypatch.setattr("logging_config.settings", Settings())

        setup_logging("stylist")

        formats = [h.formatter._fmt for h in logging.getLogger().handlers if h.formatter]
        assert any("[stylist]" in fmt for fmt in formats)


class TestSettingsValidation:
    """Validators on the Settings model."""

    def test_invalid_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "VERBOS")
        from config import Settings
        with pytest.raises(ValidationError, match="LOG_LEVEL"):
            Settings()

    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        from config import Settings
        assert Settings().LOG_LEVEL == "DEBUG"

    def test_storage_backend_normalized(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "SQL")
        from config import Settings
        assert Settings().STORAGE_BACKEND == "sql"

    def test_unknown_storage_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "redis")
        from config import Settings
        with pytest.raises(ValidationError, match="STORAGE_BACKEND"):
            Settings()

    def test_model_defaults(self, monkeypatch):
        monkeypatch.delenv("CHAT_MODEL", raising=False)
        monkeypatch.delenv("VISION_MODEL", raising=False)
        from config import Settings
        test_settings = Settings(_env_file=None)
        assert test_settings.CHAT_MODEL == "gpt-4"
        assert test_settings.VISION_MODEL == "gpt-4o"
