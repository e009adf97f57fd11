"""Logging setup and utilities.

Loggers returned by `get_logger` share the handlers installed by
`init_logger`. Debug mode (`CMDTREE_DEBUG` or `set_debug`) lowers the level
to DEBUG and adds the logger name and call site to screen messages.
"""

import logging
import os
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from .config import Configuration

__all__ = [
    "LogObjects",
    "ScreenLogFormatter",
    "get_logger",
    "init_from_config",
    "init_logger",
    "is_debug",
    "set_debug",
    "use_colors",
]

DEBUG_ENV = "CMDTREE_DEBUG"

# SGR codes per level, levels not listed are printed as-is
LEVEL_COLORS = {
    logging.WARNING: "33;2",
    logging.ERROR: "31;2",
    logging.CRITICAL: "31;1",
}

_RESET = "\x1b[0m"


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []
    debug: bool = bool(os.environ.get(DEBUG_ENV))


def is_debug() -> bool:
    """Return True when debug mode is on."""
    return LogObjects.debug


def set_debug(value: bool) -> None:
    """Switch debug mode, affects loggers and formatters created afterwards."""
    LogObjects.debug = value


def use_colors(stream: TextIO | None = None) -> bool:
    """Tell if log lines written to `stream` (default: stderr) get colors.

    NO_COLOR disables them, FORCE_COLOR enables them, otherwise only a TTY gets them.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    stream = sys.stderr if stream is None else stream
    return hasattr(stream, "isatty") and stream.isatty()


class ScreenLogFormatter(logging.Formatter):
    """A formatter coloring warnings and errors."""

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        log_format = r"%(name)20s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        colors = use_colors(stream)
        self._plain = logging.Formatter(log_format)
        self._formatters = {
            level: logging.Formatter(f"\x1b[{code}m{log_format}{_RESET}" if colors else log_format)
            for level, code in LEVEL_COLORS.items()
        }

    def format(self, record: logging.LogRecord) -> str:
        return self._formatters.get(record.levelno, self._plain).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter(stream_handler.stream))
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "cmdtree", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name (str): logger's name
        level (int): logger's level (auto if not set)

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    else:
        logger.setLevel(level)
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.debug('Logger "%s" initialized', name)
    return logger


def init_from_config(config: "Configuration") -> None:
    """Initialize the logging system using the `debug` and `log_file` keys of the `[cmdtree]` section."""
    init_logger(config.get_str("log_file") or None, force_debug=config.get_bool("debug"))
