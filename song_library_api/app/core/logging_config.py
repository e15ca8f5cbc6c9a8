"""
Basic logging configuration for the application.

The ``setup_logging`` function configures the root logger with a
console and an optional file handler, and routes uvicorn's own
loggers through it so server and application messages share one
format.  Configuration happens at most once per process.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers created by uvicorn that otherwise install their own handlers.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure root logger.

    If no handlers are attached to the root logger, attach a console
    handler and optionally a file handler.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, no file
        handler is added.  Paths are resolved relative to the
        current working directory.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured, e.g. by pytest or a second ``create_app`` call.
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = []
        server_logger.propagate = True
