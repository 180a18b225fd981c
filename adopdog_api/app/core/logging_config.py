"""
Logging configuration for the API process.

Every log line, whether it comes from the service, uvicorn or the
MongoDB driver, goes through the root logger so that it shares one
format and one set of handlers (console, plus an optional file set via
``LOG_FILE``).  ``run.py`` starts uvicorn with ``log_config=None`` for
that reason; ``setup_logging`` then makes uvicorn's loggers propagate
to the root logger instead of printing on their own.

pymongo logs every command, connection and server-selection event at
DEBUG.  Those records are only let through when the service itself
runs at DEBUG.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers owned by uvicorn; they are routed to the root handlers.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
# Driver loggers kept at WARNING unless the service runs at DEBUG.
DRIVER_LOGGERS = ("pymongo",)


def parse_level(level: str) -> int:
    """Return the numeric level for ``level``, ``INFO`` if it is unknown."""
    numeric_level = logging.getLevelName(level.upper())
    return numeric_level if isinstance(numeric_level, int) else logging.INFO


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger and align third-party loggers with it.

    Handlers are attached only if the root logger has none yet, so
    calling this again (tests, repeated ``create_app``) never duplicates
    output.  Levels of the uvicorn and driver loggers are applied on
    every call.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted or empty, no
        file handler is added.
    """
    numeric_level = parse_level(level)
    root = logging.getLogger()

    if not root.handlers:
        root.setLevel(numeric_level)
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

        if logfile:
            file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    driver_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(driver_level)
