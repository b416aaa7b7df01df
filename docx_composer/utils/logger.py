"""
Logger for docx_composer.

Handles logger lookup and application-level logging configuration.
The library never touches the root logger on import; applications and
the CLI call configure_logging() explicitly.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

_DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DEFAULT_DATEFMT = '%Y-%m-%d %H:%M:%S'


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for module.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")
    return logging.getLogger(name)


def configure_logging(level: str = "INFO", format_string: Optional[str] = None,
                      log_file: Optional[str] = None, max_file_size: int = 10 * 1024 * 1024,
                      backup_count: int = 5) -> None:
    """
    Configure logging for an application embedding the library.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        log_file: Log file path
        max_file_size: Maximum log file size in bytes
        backup_count: Number of backup files to keep
    """
    if level.upper() not in _LEVELS:
        raise ValueError(f"Invalid log level: {level}")

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        add_file_handler(root_logger, log_file, level, formatter, max_file_size, backup_count)


def add_file_handler(logger: logging.Logger, file_path: str, level: str = "INFO",
                     formatter: Optional[logging.Formatter] = None,
                     max_file_size: int = 10 * 1024 * 1024, backup_count: int = 5) -> None:
    """
    Add a rotating file handler to logger.

    Args:
        logger: Logger instance
        file_path: Log file path
        level: Log level for this handler
        formatter: Log formatter
        max_file_size: Maximum log file size in bytes
        backup_count: Number of backup files to keep
    """
    if not isinstance(logger, logging.Logger):
        raise ValueError("Logger must be a logging.Logger instance")

    if not file_path or not isinstance(file_path, str):
        raise ValueError("File path must be a non-empty string")

    log_dir = os.path.dirname(file_path)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    file_handler = RotatingFileHandler(
        file_path,
        maxBytes=max_file_size,
        backupCount=backup_count
    )
    file_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    file_handler.setFormatter(formatter or logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT))
    logger.addHandler(file_handler)
