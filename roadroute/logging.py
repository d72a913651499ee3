"""Package-wide logging for roadroute.

Every module asks for its logger with ``get_logger(__name__)``. Those loggers
carry no level of their own, so one call to ``set_global_log_level`` (or the
CLI's ``--verbose``/``--quiet`` flags) moves the whole package at once. Output
goes through a single handler on the ``roadroute`` logger, stdout by default.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "roadroute"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

#: Level used when neither verbose nor quiet output is requested.
DEFAULT_LEVEL = logging.INFO

_installed_handler: Optional[logging.Handler] = None


def _package_logger() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER_NAME)


def setup_root_logger(
    level: int = DEFAULT_LEVEL,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Install the package handler on the ``roadroute`` logger.

    Only the first call after import (or after ``reset_logging()``) has an
    effect; later calls keep the handler that is already installed.

    Args:
        level: Initial package level.
        format_string: Record format; ``DEFAULT_FORMAT`` when omitted.
        handler: Handler to install; a stdout ``StreamHandler`` when omitted.
    """
    global _installed_handler

    if _installed_handler is not None:
        return

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    package_logger = _package_logger()
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    # caplog listens on the stdlib root logger
    package_logger.propagate = True

    _installed_handler = handler


def get_logger(name: str) -> logging.Logger:
    """Logger for one module; its effective level follows the package level."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Apply ``level`` to the package logger and its handlers."""
    setup_root_logger()
    package_logger = _package_logger()
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)


def level_for_flags(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI's output flags to a level; ``verbose`` wins over ``quiet``."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return DEFAULT_LEVEL


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(DEFAULT_LEVEL)


def reset_logging() -> None:
    """Drop the installed handler and level so the next setup starts clean.

    Used by tests.
    """
    global _installed_handler
    _installed_handler = None

    package_logger = _package_logger()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


setup_root_logger()
