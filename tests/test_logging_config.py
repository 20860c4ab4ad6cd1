"""Tests for logging configuration."""

import logging

import pytest

from tcping.logging_config import configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    handlers = root.handlers[:]
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Test TCPING_LOG_LEVEL handling."""

    def test_default_is_warning(self, monkeypatch):
        """Test default level is WARNING."""
        monkeypatch.delenv("TCPING_LOG_LEVEL", raising=False)
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_level_is_case_insensitive(self, monkeypatch):
        """Log level is case-insensitive."""
        monkeypatch.setenv("TCPING_LOG_LEVEL", "debug")
        configure_logging()
        assert logging.getLogger().level == logging.DEBUG

    def test_invalid_level_falls_back(self, monkeypatch):
        """Unknown level falls back to WARNING."""
        monkeypatch.setenv("TCPING_LOG_LEVEL", "INVALID")
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_logs_to_stderr(self, monkeypatch, capsys):
        """Log records go to stderr, not stdout."""
        monkeypatch.setenv("TCPING_LOG_LEVEL", "INFO")
        configure_logging()

        logging.getLogger("tcping.test").info("hello from test")

        captured = capsys.readouterr()
        assert "tcping.test - INFO - hello from test" in captured.err
        assert captured.out == ""
