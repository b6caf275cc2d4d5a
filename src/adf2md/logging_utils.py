#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the adf2md command-line interface.

Library modules only create ``logging.getLogger(__name__)`` loggers and
emit records; nothing is configured on import. The CLI calls
``configure_logging`` once per run.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "adf2md"

# Attribute set on handlers installed here, so a later call can find and replace them
_HANDLER_MARK = "_adf2md_cli_handler"


def _build_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    return logging.Formatter("%(levelname)s: %(message)s")


def _install(logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_MARK, True)
    logger.addHandler(handler)


def remove_cli_handlers(logger: Optional[logging.Logger] = None) -> None:
    """Detach and close the handlers installed by ``configure_logging``."""
    logger = logger or logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send adf2md log records to stderr and, optionally, a file.

    Handlers are attached to the ``adf2md`` package logger; the root
    logger is left untouched. Calling the function again replaces the
    handlers of the previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Path of a log file that receives the same records as stderr.
    trace_mode : bool, default False
        Emit timestamps and logger names, e.g. to read the timings
        recorded by ``debug_timer``.

    Returns
    -------
    logging.Logger
        The configured package logger.

    Examples
    --------
        >>> logger = configure_logging("DEBUG", trace_mode=True)
        >>> logger.name
        'adf2md'

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    remove_cli_handlers(package_logger)
    package_logger.setLevel(resolved_level)

    formatter = _build_formatter(trace_mode)
    _install(package_logger, logging.StreamHandler(sys.stderr), resolved_level, formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            _install(package_logger, file_handler, resolved_level, formatter)
            package_logger.info("Logging to file: %s", log_file)

    return package_logger
