#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the bbfilter command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "bbfilter"


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    rich_output: bool = False,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the package logger.

    Library code only ever calls ``logging.getLogger(__name__)``; handlers are
    installed here, by the CLI, and never on import.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "DEBUG").
    log_file : str, optional
        Path of a file that receives a copy of every record.
    trace_mode : bool, default False
        Include timestamps and logger names in each record.
    rich_output : bool, default False
        Use ``rich.logging.RichHandler`` for console output.

    Returns
    -------
    logging.Logger
        The configured ``bbfilter`` logger.

    """
    if isinstance(log_level, int):
        resolved_level = log_level
    else:
        resolved_level = getattr(logging, str(log_level).upper(), logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolved_level)
    logger.handlers.clear()
    logger.propagate = False

    if trace_mode:
        formatter = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler: logging.Handler
    if rich_output:
        from rich.logging import RichHandler

        console_handler = RichHandler(show_path=trace_mode, show_time=trace_mode)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
    console_handler.setLevel(resolved_level)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.debug("Logging to file: %s", log_file)

    return logger
