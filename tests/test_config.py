"""
Tests for settings and structlog configuration.
"""

import json
import logging

import pytest
import structlog

from barcheck import Barcode
from barcheck.config import Settings, configure_logging, get_settings


@pytest.fixture(autouse=True)
def _restore_logging():
    """Restore root logger state and cached settings after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package_logger = logging.getLogger("barcheck")
    package_level = package_logger.level
    get_settings.cache_clear()
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    package_logger.setLevel(package_level)
    structlog.reset_defaults()
    get_settings.cache_clear()


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("BARCHECK_DEFAULT_ADAPTER", "BARCHECK_LOG_LEVEL", "BARCHECK_LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings()
        assert settings.default_adapter == "ean13"
        assert settings.log_level == "INFO"
        assert settings.log_format == "text"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("BARCHECK_DEFAULT_ADAPTER", "code39")
        monkeypatch.setenv("barcheck_log_format", "json")
        settings = Settings()
        assert settings.default_adapter == "code39"
        assert settings.log_format == "json"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level(self):
        configure_logging(level="debug", log_format="text")
        assert logging.getLogger("barcheck").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_rejection_is_logged_as_json(self, capfd):
        configure_logging(level="DEBUG", log_format="json")
        barcode = Barcode("ean13")
        assert not barcode.is_valid("123")

        err = capfd.readouterr().err
        lines = [json.loads(line) for line in err.splitlines() if line.startswith("{")]
        rejected = [line for line in lines if line["event"] == "Barcode rejected"]
        assert rejected
        assert rejected[-1]["reason"] == "INVALID_LENGTH"
        assert rejected[-1]["logger"] == "barcheck.barcode.validator"
        assert rejected[-1]["level"] == "debug"

    def test_info_level_hides_debug(self, capfd):
        configure_logging(level="INFO", log_format="json")
        Barcode("ean13").is_valid("123")
        assert "Barcode rejected" not in capfd.readouterr().err


class TestLibraryLogging:
    """Logging from the validator core before any configuration."""

    def test_validation_writes_nothing_without_configuration(self, capsys):
        structlog.reset_defaults()
        barcode = Barcode("ean13")
        assert not barcode.is_valid("1234567890127")
        barcode.set_adapter("code39ext")
        barcode.use_checksum(True)
        assert barcode.is_valid("Abc!")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_core_logs_through_stdlib(self, caplog):
        caplog.set_level(logging.DEBUG, logger="barcheck")
        Barcode("ean13").is_valid("1234567890127")
        assert any(record.name == "barcheck.barcode.validator" for record in caplog.records)
