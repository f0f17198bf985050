"""Unit tests for blockconf.utils.logging_config module."""

import logging
import logging.handlers
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from blockconf.utils import logging_config
from blockconf.utils.logging_config import (
    DEFAULT_FORMAT,
    DETAILED_FORMAT,
    LOG_LEVELS,
    LoggerAdapter,
    _create_console_handler,
    _create_file_handler,
    get_logger,
    set_log_level,
    setup_logger,
)


@pytest.fixture(autouse=True)
def clean_logger_cache():
    """Drop cached loggers and their handlers after each test."""
    yield
    for logger in logging_config._loggers.values():
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
    logging_config._loggers.clear()


class TestCreateHandlers:
    """Tests for the handler factory functions."""

    def test_create_console_handler_sets_level_and_formatter(self) -> None:
        """Test creating console handler with DEBUG level."""
        # Arrange
        formatter = logging.Formatter(DETAILED_FORMAT)

        # Act
        handler = _create_console_handler(logging.DEBUG, formatter)

        # Assert
        assert isinstance(handler, logging.StreamHandler)
        assert handler.level == logging.DEBUG
        assert handler.formatter is formatter

    def test_create_file_handler_sets_rotation_parameters(self, tmp_path: Path) -> None:
        """Test file handler rotation parameters and location."""
        # Act
        handler = _create_file_handler(
            "reader.log",
            str(tmp_path / "logs"),
            logging.INFO,
            logging.Formatter(DEFAULT_FORMAT),
            "a",
            1024,
            3,
        )

        # Assert
        try:
            assert isinstance(handler, logging.handlers.RotatingFileHandler)
            assert handler.maxBytes == 1024
            assert handler.backupCount == 3
            assert (tmp_path / "logs").is_dir()
        finally:
            handler.close()


class TestSetupLogger:
    """Tests for setup_logger and get_logger functions."""

    @patch("blockconf.utils.logging_config._create_console_handler")
    def test_setup_logger_with_console_creates_console_handler(
        self, mock_console_handler: Mock
    ) -> None:
        """Test setup_logger with console output only."""
        # Arrange
        mock_console_handler.return_value = logging.NullHandler()

        # Act
        logger = setup_logger("blockconf.test_console", level="WARNING")

        # Assert
        assert logger.name == "blockconf.test_console"
        assert logger.level == logging.WARNING
        mock_console_handler.assert_called_once()

    def test_setup_logger_writes_to_file(self, tmp_path: Path) -> None:
        """Test that messages reach the log file."""
        # Act
        logger = setup_logger(
            "blockconf.test_file", log_file="reader.log", log_dir=str(tmp_path), console=False
        )
        logger.info("read finished")
        for handler in logger.handlers:
            handler.flush()

        # Assert
        assert "read finished" in (tmp_path / "reader.log").read_text()

    def test_setup_logger_caches_logger_instance(self) -> None:
        """Test that logger is cached and reused."""
        logger1 = setup_logger("blockconf.test_cached", console=False)
        logger2 = setup_logger("blockconf.test_cached", console=False)

        assert logger1 is logger2

    def test_unknown_level_falls_back_to_info(self) -> None:
        """Test that unknown level names use INFO."""
        logger = setup_logger("blockconf.test_unknown", level="LOUD", console=False)

        assert logger.level == logging.INFO

    def test_get_logger_returns_cached_logger(self) -> None:
        """Test that get_logger reuses a configured logger."""
        logger = setup_logger("blockconf.test_get", console=False)

        assert get_logger("blockconf.test_get") is logger


class TestSetLogLevel:
    """Tests for set_log_level function."""

    def test_set_log_level_updates_matching_loggers(self) -> None:
        """Test that loggers under the prefix and their handlers change level."""
        # Arrange
        inside = setup_logger("blockconf.reader_level", level="INFO")
        outside = setup_logger("other.reader_level", level="INFO")

        # Act
        set_log_level("DEBUG")

        # Assert
        assert inside.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in inside.handlers)
        assert outside.level == logging.INFO

    def test_log_levels_mapping(self) -> None:
        """Test the supported level names."""
        assert set(LOG_LEVELS) == {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class TestLoggerAdapter:
    """Tests for LoggerAdapter class."""

    def test_process_prefixes_context(self) -> None:
        """Test that extra context prefixes the message."""
        adapter = LoggerAdapter(logging.getLogger("blockconf.adapter"), {"file": "main.xml"})

        msg, kwargs = adapter.process("Reading", {})

        assert msg == "[file=main.xml] Reading"
        assert kwargs == {}

    def test_process_without_context_returns_message(self) -> None:
        """Test that an empty context leaves the message unchanged."""
        adapter = LoggerAdapter(logging.getLogger("blockconf.adapter"), {})

        msg, _ = adapter.process("Reading", {})

        assert msg == "Reading"
