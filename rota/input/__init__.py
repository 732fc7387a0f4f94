"""Input-layer public API for key decoding and browser key dispatch.

Exports are split between low-level terminal decoding (`read_key`,
`poll_key`) and the browser handler used by the runtime loop.
"""

from .keys import KEY_PRESS, KEY_RELEASE, KEY_REPEAT, KeyEvent
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, poll_key, read_key
from .key_registry import KeyComboBinding, KeyComboRegistry
from .key_browser import (
    HELP_TEXT,
    BrowserKeyContext,
    BrowserKeyHandler,
    build_browser_key_registry,
)

__all__ = [
    "KEY_PRESS",
    "KEY_REPEAT",
    "KEY_RELEASE",
    "KeyEvent",
    "read_key",
    "poll_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "HELP_TEXT",
    "BrowserKeyContext",
    "BrowserKeyHandler",
    "build_browser_key_registry",
]
