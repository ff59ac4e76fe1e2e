"""Module: logger_helper.py

Author: Michael Economou
Date: 2026-10-02

Builds named loggers with a console handler that hides dev-only records.

Functions:
    get_logger(name): Returns a logger with a filtered stdout handler.
    safe_text(text): Replaces problematic Unicode characters with ASCII equivalents.

DevOnlyFilter:
    A logging filter that hides records logged with extra={"dev_only": True}
    from the console, while file handlers still receive them.
"""

import logging
import re
import sys

from tablegroups.config import LOG_CONSOLE_LEVEL, LOG_TO_CONSOLE, SHOW_DEV_ONLY_IN_CONSOLE

_REPLACEMENTS = {
    "\u2192": "->",
    "\u2014": "--",
    "\u2013": "-",
    "\u2026": "...",
}
_REPLACEMENT_PATTERN = re.compile("|".join(map(re.escape, _REPLACEMENTS.keys())))


def safe_text(text: str) -> str:
    """Replace unsupported Unicode characters with ASCII-safe alternatives.

    Args:
        text: The original text.

    Returns:
        The text with arrows, dashes and ellipses replaced.

    """
    return _REPLACEMENT_PATTERN.sub(lambda m: _REPLACEMENTS[m.group(0)], text)


class DevOnlyFilter(logging.Filter):
    """Drop dev-only records unless SHOW_DEV_ONLY_IN_CONSOLE is enabled."""

    def filter(self, record: logging.LogRecord) -> bool:
        if SHOW_DEV_ONLY_IN_CONSOLE:
            return True
        return not getattr(record, "dev_only", False)


class SafeFormatter(logging.Formatter):
    """Formatter that falls back to ASCII replacements for console output."""

    def format(self, record: logging.LogRecord) -> str:
        return safe_text(super().format(record))


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger with a dev-only filtered console handler.

    The handler is attached to the package root logger only, so module
    loggers propagate to it instead of each owning a handler.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        Configured logger instance

    """
    logger = logging.getLogger(name or __name__)

    root_name = (name or __name__).split(".")[0]
    root_logger = logging.getLogger(root_name)
    if LOG_TO_CONSOLE and not getattr(root_logger, "_tablegroups_console", False):
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(LOG_CONSOLE_LEVEL)
        handler.addFilter(DevOnlyFilter())
        handler.setFormatter(SafeFormatter("[%(levelname)s] %(message)s"))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG)
        root_logger._tablegroups_console = True  # type: ignore[attr-defined]

    return logger
