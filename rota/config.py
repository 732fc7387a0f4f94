"""Persistent JSON config helpers.

Reads the input poll interval and logging preferences from one JSON file in
the user config directory. Missing or malformed config falls back to defaults
value by value; rota never writes this file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

APP_NAME = "rota"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "rota.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME

DEFAULT_POLL_TIMEOUT_MS = 50
MIN_POLL_TIMEOUT_MS = 10
MAX_POLL_TIMEOUT_MS = 1000
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class BrowserConfig:
    """Validated runtime settings."""

    poll_timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Path = field(default=DEFAULT_LOG_PATH)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_poll_timeout(value: object) -> int:
    """Accept integer milliseconds in the supported range, else the default."""
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_POLL_TIMEOUT_MS
    if not MIN_POLL_TIMEOUT_MS <= value <= MAX_POLL_TIMEOUT_MS:
        return DEFAULT_POLL_TIMEOUT_MS
    return value


def _coerce_log_level(value: object) -> str:
    if not isinstance(value, str):
        return DEFAULT_LOG_LEVEL
    name = value.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        return DEFAULT_LOG_LEVEL
    return name


def _coerce_log_file(value: object) -> Path:
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_LOG_PATH
    return Path(value.strip()).expanduser()


def load_browser_config() -> BrowserConfig:
    data = load_config()
    return BrowserConfig(
        poll_timeout_ms=_coerce_poll_timeout(data.get("poll_timeout_ms")),
        log_level=_coerce_log_level(data.get("log_level")),
        log_file=_coerce_log_file(data.get("log_file")),
    )
