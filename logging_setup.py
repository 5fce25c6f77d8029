#!/usr/bin/env python3
"""
logging_setup.py
================
Configures the root logger with a console handler and a rotating file
handler (1 MB, 2 backups).

Call :func:`setup_logging` once at startup, before uvicorn installs its
own handlers.
"""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = "signal_server.log",
) -> None:
    """Apply a unified log format to both console and file output.

    Parameters
    ----------
    level : int or str
        Minimum severity level (e.g. ``logging.DEBUG`` or ``"INFO"``).
    log_file : str or None
        Path of the rotating log file.  ``None`` disables file output.
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(_FORMAT)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)

    root.handlers.clear()
    root.addHandler(ch)

    if log_file:
        fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=2)
        fh.setFormatter(fmt)
        root.addHandler(fh)
