"""Module: init_logging.py

Author: Michael Economou
Date: 2026-10-02

Single entry point to initialize file logging for the application.

Functions:
    add_file_handler: Attaches a rotating file handler with a level and optional name filter.
    init_logging: Adds activity and error log files under the given app name.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from tablegroups.config import (
    APP_NAME,
    LOG_DATE_FORMAT,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_MAX_BYTES,
    LOG_FORMAT,
    LOG_LEVEL,
)


def add_file_handler(
    logger: logging.Logger,
    log_path: str,
    level: int = logging.INFO,
    max_bytes: int = LOG_FILE_MAX_BYTES,
    backup_count: int = LOG_FILE_BACKUP_COUNT,
    filter_by_name: str | None = None,
) -> RotatingFileHandler:
    """Attach a rotating file handler to a logger.

    Args:
        logger: The logger to attach the handler to.
        log_path: Path to the log file.
        level: Logging level for this file handler.
        max_bytes: Maximum file size before rotating.
        backup_count: Number of backup files to keep.
        filter_by_name: Only log records from loggers under this name.

    Returns:
        The attached handler.

    """
    log_dir = os.path.dirname(log_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    if filter_by_name:
        file_handler.addFilter(logging.Filter(filter_by_name))

    logger.addHandler(file_handler)
    return file_handler


def init_logging(app_name: str = APP_NAME, log_dir: str = "logs") -> logging.Logger:
    """Initialize logging for the application.

    Adds rotating file handlers for activity (LOG_LEVEL and up) and error (ERROR+) logs
    to the package root logger.

    Args:
        app_name: The base name for log files.
        log_dir: Directory for the log files.

    Returns:
        The package root logger.

    """
    logger = logging.getLogger("tablegroups")
    logger.setLevel(logging.DEBUG)

    activity_path = os.path.join(log_dir, f"{app_name}_activity.log")
    errors_path = os.path.join(log_dir, f"{app_name}_errors.log")
    add_file_handler(logger, activity_path, level=logging.getLevelName(LOG_LEVEL))
    add_file_handler(logger, errors_path, level=logging.ERROR)

    return logger
