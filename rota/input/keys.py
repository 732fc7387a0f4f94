"""Decoded key event datatype and event-kind constants."""

from __future__ import annotations

from dataclasses import dataclass

KEY_PRESS = "press"
KEY_REPEAT = "repeat"
KEY_RELEASE = "release"

# Event-type field of the kitty keyboard protocol.
KITTY_EVENT_KINDS = {
    1: KEY_PRESS,
    2: KEY_REPEAT,
    3: KEY_RELEASE,
}


@dataclass(frozen=True)
class KeyEvent:
    """One key token plus whether it was a press, an auto-repeat, or a release.

    ``key`` is either a single printable character or an upper-case token
    such as ``"UP"``, ``"ENTER"`` or ``"CTRL_C"``.
    """

    key: str
    kind: str = KEY_PRESS

    @property
    def is_press(self) -> bool:
        return self.kind == KEY_PRESS


__all__ = [
    "KEY_PRESS",
    "KEY_REPEAT",
    "KEY_RELEASE",
    "KITTY_EVENT_KINDS",
    "KeyEvent",
]
