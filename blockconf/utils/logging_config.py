"""
Centralized logging configuration for blockconf.

This module provides standardized logging setup for all blockconf components.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Any

# Default log format
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - [%(filename)s:%(lineno)d] - %(levelname)s - %(message)s"
)

# Log levels mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Global logger cache
_loggers: dict[str, logging.Logger] = {}


def _create_console_handler(
    log_level: int, formatter: logging.Formatter
) -> logging.StreamHandler:
    """
    Create and configure console handler.

    :param log_level: Logging level for the handler
    :type log_level: int
    :param formatter: Formatter for log messages
    :type formatter: logging.Formatter
    :return: Configured console handler
    :rtype: logging.StreamHandler
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    return console_handler


def _create_file_handler(
    log_file: str,
    log_dir: str | None,
    log_level: int,
    formatter: logging.Formatter,
    file_mode: str,
    max_bytes: int,
    backup_count: int,
) -> logging.handlers.RotatingFileHandler:
    """
    Create and configure rotating file handler.

    :param log_file: Name of the log file
    :type log_file: str
    :param log_dir: Directory for log files, defaults to logs/ in the working directory
    :type log_dir: str | None
    :param log_level: Logging level for the handler
    :type log_level: int
    :param formatter: Formatter for log messages
    :type formatter: logging.Formatter
    :param file_mode: File open mode ('a' for append, 'w' for overwrite)
    :type file_mode: str
    :param max_bytes: Maximum size of log file before rotation
    :type max_bytes: int
    :param backup_count: Number of backup files to keep
    :type backup_count: int
    :return: Configured rotating file handler
    :rtype: logging.handlers.RotatingFileHandler
    """
    log_dir_path = Path.cwd() / "logs" if log_dir is None else Path(log_dir)
    log_dir_path.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_dir_path / log_file,
        mode=file_mode,
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    return file_handler


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: str | None = None,
    log_dir: str | None = None,
    console: bool = True,
    file_mode: str = "a",
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Set up a standardized logger for blockconf modules.

    Creates a logger with optional file and console handlers. File handlers
    use rotation to prevent unbounded growth.

    :param name: Logger name (typically __name__ of the calling module)
    :param level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :param log_file: Optional log file name (created in log_dir)
    :param log_dir: Directory for log files (defaults to logs/ in the working directory)
    :param console: Whether to output to console
    :param file_mode: File open mode ('a' for append, 'w' for overwrite)
    :param max_bytes: Maximum size of log file before rotation
    :param backup_count: Number of backup files to keep
    :param format_string: Custom format string (uses DEFAULT_FORMAT if None)
    :return: Configured logger instance
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)
    logger.setLevel(log_level)

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    if console:
        logger.addHandler(_create_console_handler(log_level, formatter))

    if log_file:
        logger.addHandler(
            _create_file_handler(
                log_file, log_dir, log_level, formatter, file_mode, max_bytes, backup_count
            )
        )

    _loggers[name] = logger

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get an existing logger or create a basic one.

    :param name: Logger name (typically __name__)
    :return: Logger instance
    """
    if name in _loggers:
        return _loggers[name]

    return setup_logger(name)


def set_log_level(level: str, prefix: str = "blockconf") -> None:
    """
    Change the level of every cached logger under ``prefix`` and its handlers.

    :param level: Logging level as string
    :param prefix: Logger name prefix to match
    """
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)
    for name, logger in _loggers.items():
        if name == prefix or name.startswith(prefix + "."):
            logger.setLevel(log_level)
            for handler in logger.handlers:
                handler.setLevel(log_level)


class LoggerAdapter(logging.LoggerAdapter):
    """
    Custom logger adapter for adding contextual information.

    The reader uses it to prefix every message with the file being read.
    """

    def __init__(self, logger: logging.Logger, extra: dict[str, Any]):
        """
        Initialize adapter with extra context.

        :param logger: Base logger
        :param extra: Dictionary of extra context to add to all messages
        """
        super().__init__(logger, extra)

    def process(self, msg: Any, kwargs: Any) -> tuple[str, Any]:
        """
        Add extra context to log messages.

        :param msg: The log message
        :type msg: Any
        :param kwargs: Additional keyword arguments
        :type kwargs: Any
        :return: Processed message and kwargs
        :rtype: tuple[str, Any]
        """
        if self.extra:
            extra_str = " - ".join([f"{k}={v}" for k, v in self.extra.items()])
            return f"[{extra_str}] {msg}", kwargs
        return str(msg), kwargs
