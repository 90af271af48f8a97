"""
Logging configuration for the Social Events API.

``create_app`` calls ``setup_logging(settings.log_level,
settings.log_file)`` before building the application, so the store's
connection outcome at startup is already logged.  Records go to the
console; when ``LOG_FILE`` is set they are also appended to that file.
Services log through ``logging.getLogger(__name__)``; uvicorn keeps
its own access and error loggers.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach console (and optional file) handlers to the root logger.

    ``level`` comes from ``LOG_LEVEL``; unknown names fall back to
    ``INFO``.  ``logfile`` comes from ``LOG_FILE`` and is resolved
    against the working directory.  If the root logger already has
    handlers (the test suite builds one app per test, and uvicorn may
    have configured logging) nothing is changed.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
