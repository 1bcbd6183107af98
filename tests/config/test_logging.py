"""Tests for the logging configuration module."""

import json
import logging

import pytest
import structlog

from scenewright.config import ScenewrightSettings, get_logger, reset_logging
from scenewright.config.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Restore the root logger after each test."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers.copy()

    yield

    for handler in root_logger.handlers.copy():
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(original_level)
    for handler in original_handlers:
        root_logger.addHandler(handler)


class TestConfigureLogging:
    """Test configure_logging."""

    @pytest.mark.parametrize(
        ("level_str", "level_const"),
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_log_level_configuration(self, level_str, level_const):
        """Test that the root logger follows the configured level."""
        configure_logging(ScenewrightSettings(log_level=level_str))

        assert logging.getLogger().level == level_const

    def test_httpx_is_quieted(self):
        """Test that httpx request logs stay at WARNING or above."""
        configure_logging(ScenewrightSettings(log_level="DEBUG"))

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_invalid_level_raises(self):
        """Test that a level unknown to logging is rejected."""
        settings = ScenewrightSettings.model_construct(log_level="VERBOSE")

        with pytest.raises(ValueError, match="Invalid log level 'VERBOSE'"):
            configure_logging(settings)

    @pytest.mark.parametrize("log_format", ["console", "json", "structured"])
    def test_console_handler_uses_processor_formatter(self, log_format):
        """Test that every format renders through structlog."""
        configure_logging(ScenewrightSettings(log_format=log_format))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_json_log_file(self, tmp_path):
        """Test that events are written to the log file as JSON."""
        log_file = tmp_path / "logs" / "scenewright.log"
        configure_logging(
            ScenewrightSettings(log_level="INFO", log_format="json", log_file=log_file)
        )

        structlog.get_logger("tests.logfile").info("Exported", pages=3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        record = json.loads(lines[-1])
        assert record["event"] == "Exported"
        assert record["pages"] == 3
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filters_file_output(self, tmp_path):
        """Test that records below the level are dropped."""
        log_file = tmp_path / "scenewright.log"
        configure_logging(
            ScenewrightSettings(log_level="ERROR", log_format="json", log_file=log_file)
        )

        structlog.get_logger("tests.logfile").warning("Ignored")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "Ignored" not in log_file.read_text(encoding="utf-8")


class TestGetLogger:
    """Test the cached logger accessor."""

    def test_loggers_are_cached(self):
        """Test that repeated lookups return the same logger."""
        assert get_logger("tests.cached") is get_logger("tests.cached")

    def test_reset_logging_clears_cache(self):
        """Test that reset forces a fresh logger on next lookup."""
        first = get_logger("tests.reset")

        reset_logging()

        assert get_logger("tests.reset") is not first
