#!/usr/bin/env python3
"""
logging_setup.py
================
Configures the root logger with a console handler and, unless disabled, a
rotating file handler (``judge.log``, 1 MB, 2 backups by default).

Call :func:`setup_logging` once at startup, before the first run.
"""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

import config


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = config.LOG_FILE) -> None:
    """Apply a unified log format to both console and file output.

    Parameters
    ----------
    level : int
        Minimum severity level (e.g. ``logging.DEBUG``, ``logging.INFO``).
    log_file : str or None
        Path of the rotating log file; falsy disables file logging.
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)

    root.handlers.clear()
    root.addHandler(ch)

    if log_file:
        fh = RotatingFileHandler(
            log_file,
            maxBytes=config.LOG_MAX_BYTES,
            backupCount=config.LOG_BACKUP_COUNT,
        )
        fh.setFormatter(fmt)
        root.addHandler(fh)

