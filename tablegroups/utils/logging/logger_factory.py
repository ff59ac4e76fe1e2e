"""Module: logger_factory.py

Author: Michael Economou
Date: 2026-10-02

Logger factory with caching.
Keeps a single logger instance per module name behind a lock, so every
module can call get_cached_logger(__name__) at import time.
"""

import logging
import threading

from tablegroups.utils.logging.logger_helper import get_logger


class LoggerFactory:
    """Thread-safe logger factory with caching."""

    _loggers: dict[str, logging.Logger] = {}
    _lock = threading.Lock()

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get or create a cached logger for the given name.

        Args:
            name: Logger name, typically __name__ from calling module

        Returns:
            Cached logger instance

        """
        with cls._lock:
            if name not in cls._loggers:
                cls._loggers[name] = get_logger(name)

            return cls._loggers[name]

    @classmethod
    def get_cached_names(cls) -> list[str]:
        """Return the names of all cached loggers."""
        with cls._lock:
            return list(cls._loggers.keys())


def get_cached_logger(name: str) -> logging.Logger:
    """Convenience function for getting a cached logger."""
    return LoggerFactory.get_logger(name)
