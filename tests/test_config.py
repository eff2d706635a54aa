"""Tests for settings and logging setup."""

import logging
import sys

import structlog

from symscan_mcp.config import Settings, DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_FILES
from symscan_mcp.logging import configure_logging
from symscan_mcp.parser import scan


def test_settings_defaults():
    """Test defaults with an empty environment."""
    settings = Settings.from_env({})

    assert settings.log_level == "WARNING"
    assert settings.log_format == "console"
    assert settings.json_logs is False
    assert settings.max_file_size == DEFAULT_MAX_FILE_SIZE
    assert settings.max_files == DEFAULT_MAX_FILES


def test_settings_from_env():
    """Test values are read from SYMSCAN_* variables."""
    settings = Settings.from_env({
        "SYMSCAN_LOG_LEVEL": "debug",
        "SYMSCAN_LOG_FORMAT": "JSON",
        "SYMSCAN_MAX_FILE_SIZE": "1024",
        "SYMSCAN_MAX_FILES": "20",
    })

    assert settings.log_level == "DEBUG"
    assert settings.json_logs is True
    assert settings.max_file_size == 1024
    assert settings.max_files == 20


def test_settings_invalid_values_fall_back():
    """Test bad values are ignored."""
    settings = Settings.from_env({
        "SYMSCAN_LOG_FORMAT": "xml",
        "SYMSCAN_MAX_FILE_SIZE": "big",
        "SYMSCAN_MAX_FILES": "-3",
    })

    assert settings.log_format == "console"
    assert settings.max_file_size == DEFAULT_MAX_FILE_SIZE
    assert settings.max_files == DEFAULT_MAX_FILES


def test_configure_logging_uses_stderr():
    """Test logging is routed to a single stderr handler."""
    configure_logging(level="INFO", json_format=True)

    root = logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 1
    assert root.handlers[0].stream is sys.stderr


def test_configure_logging_unknown_level():
    """Test an unknown level name falls back to WARNING."""
    configure_logging(level="chatty")

    assert logging.getLogger().level == logging.WARNING


def test_library_use_keeps_stdout_clean(capsys):
    """Test scanning without configure_logging prints nothing to stdout."""
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()

    scan("x = 1\n", "python")
    Settings.from_env({"SYMSCAN_MAX_FILES": "many"})

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "invalid_setting" in captured.err
