"""Logging setup for the prosediff command line.

Handlers are attached to the ``prosediff`` logger, not the root logger, so
an application that embeds :func:`prosediff.filter_diff` keeps its own
logging configuration. Log records always go to stderr; stdout carries the
highlighted diff.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "prosediff"

# Handlers installed here carry this name prefix so they can be told apart
# from handlers added by an embedding application.
_HANDLER_PREFIX = "prosediff."

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(log_level: int | str) -> int:
    """Turn a level name or number into a numeric level.

    Unknown names fall back to INFO.
    """
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def reset_logging() -> logging.Logger:
    """Remove the handlers installed by :func:`configure_logging`.

    Handlers added by anybody else are left alone. The package logger
    propagates to the root logger again afterwards.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if (handler.get_name() or "").startswith(_HANDLER_PREFIX):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Send prosediff's log records to stderr, and optionally a file.

    Calling this again replaces the handlers of the previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.
    stream : TextIO, optional
        Console stream, ``sys.stderr`` at call time by default.

    Returns
    -------
    logging.Logger
        The configured ``prosediff`` logger.

    """
    level = resolve_level(log_level)
    logger = reset_logging()
    logger.setLevel(level)
    # Records handled here must not be printed a second time by root handlers
    logger.propagate = False

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.set_name(f"{_HANDLER_PREFIX}console")
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.set_name(f"{_HANDLER_PREFIX}file")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.debug("Logging to file: %s", log_file)

    return logger
