"""
Logging Configuration and Utilities

Console and optional rotating file logging for envbridge, with a plain
colored format or a JSON format driven by the ``log`` configuration section.

Author: envbridge Project
License: MIT
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from pythonjsonlogger import jsonlogger
from typing import Optional

ROOT_LOGGER_NAME = "envbridge"


class ColoredFormatter(logging.Formatter):
    """
    Formatter for colored console output.
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m'
    }

    def format(self, record):
        """Format log record with colors without leaking them to other handlers."""
        original = record.levelname
        log_color = self.COLORS.get(original, self.COLORS['RESET'])
        record.levelname = f"{log_color}{original}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _build_formatter(log_format: str, colored: bool) -> logging.Formatter:
    if log_format == "json":
        return jsonlogger.JsonFormatter(
            '%(asctime)s %(name)s %(levelname)s %(module)s %(funcName)s %(message)s'
        )
    if colored:
        return ColoredFormatter(
            '[%(asctime)s] %(levelname)s - %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    return logging.Formatter(
        '[%(asctime)s] %(levelname)s - %(name)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "text",
    file_path: Optional[str] = None,
    keep_stdout: bool = True,
    log_rotation_size: int = 10485760,  # 10MB
    log_retention_count: int = 5
) -> logging.Logger:
    """
    Configure envbridge logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "text" or "json"
        file_path: Optional log file; enables a rotating file handler
        keep_stdout: Keep console output when logging to a file
        log_rotation_size: Max log file size before rotation (bytes)
        log_retention_count: Number of backup log files to keep

    Returns:
        Configured package logger
    """
    level = getattr(logging, str(log_level).upper())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    if keep_stdout or not file_path:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(_build_formatter(log_format, colored=True))
        logger.addHandler(console_handler)

    if file_path:
        log_path = Path(file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            str(log_path),
            maxBytes=log_rotation_size,
            backupCount=log_retention_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(_build_formatter(log_format, colored=False))
        logger.addHandler(file_handler)

    logger.propagate = False

    logger.info(f"Logging initialized at {log_level} level")
    if file_path:
        logger.info(f"File logging enabled: {file_path}")

    return logger


def setup_logging_from_config(log_config) -> logging.Logger:
    """Configure logging from a loaded ``log`` configuration section."""
    return setup_logging(
        log_level=log_config.level,
        log_format=log_config.format,
        file_path=log_config.file_path,
        keep_stdout=log_config.keep_stdout
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance under the envbridge namespace
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
