"""Logging setup for the ``rota`` logger tree.

The terminal belongs to the UI while the browser runs, so records go to a
log file and never to stdout/stderr.
"""

from __future__ import annotations

import logging

from .config import BrowserConfig

LOGGER_NAME = "rota"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_INSTALLED_HANDLER: logging.Handler | None = None


def installed_handler() -> logging.Handler | None:
    """Return the handler attached by the last ``configure_logging`` call."""
    return _INSTALLED_HANDLER


def reset_logging() -> None:
    """Detach and close the handler installed by ``configure_logging``."""
    global _INSTALLED_HANDLER
    if _INSTALLED_HANDLER is None:
        return
    logging.getLogger(LOGGER_NAME).removeHandler(_INSTALLED_HANDLER)
    _INSTALLED_HANDLER.close()
    _INSTALLED_HANDLER = None


def configure_logging(config: BrowserConfig) -> logging.Handler:
    """Attach a file handler at the configured level and return it.

    Falls back to a ``NullHandler`` when the log file cannot be opened.
    Calling this again replaces the handler installed by the previous call.
    """
    global _INSTALLED_HANDLER
    reset_logging()

    handler: logging.Handler
    try:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        # Paths with undecodable bytes carry surrogate escapes.
        handler = logging.FileHandler(config.log_file, encoding="utf-8", errors="backslashreplace")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)
    logger.addHandler(handler)
    logger.propagate = False
    _INSTALLED_HANDLER = handler
    return handler
