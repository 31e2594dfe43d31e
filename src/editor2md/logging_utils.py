#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the editor2md command line.

Only the ``editor2md`` package logger is touched. Records still propagate,
so an application or test harness that configured the root logger keeps
receiving them.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "editor2md"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second call replaces them
_HANDLER_MARKER = "_editor2md_cli_handler"


def resolve_log_level(log_level: int | str) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give INFO."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _remove_cli_handlers(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
            handler.close()


def _install(logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    setattr(handler, _HANDLER_MARKER, True)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send editor2md diagnostics (depth-guard warnings, footnote debug) to stderr.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "WARNING").
    log_file : str, optional
        Also append records to this file.
    trace_mode : bool, default False
        Prefix records with a timestamp and the emitting module.

    Returns
    -------
    logging.Logger
        The ``editor2md`` package logger.

    """
    level = resolve_log_level(log_level)
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(level)
    _remove_cli_handlers(logger)

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    _install(logger, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            _install(logger, file_handler, level, formatter)
            logger.info("Logging to file: %s", log_file)

    return logger
