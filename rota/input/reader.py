"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyEvent`` values.
Handles ESC-sequence timing, legacy CSI/SS3 cursor keys, and kitty keyboard
protocol sequences that carry press/repeat/release event types.
"""

from __future__ import annotations

import os
import select

from .keys import KEY_PRESS, KITTY_EVENT_KINDS, KeyEvent

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_CSI_PARAMETER_BYTES = 32
_PENDING_BYTES: list[bytes] = []

_SINGLE_BYTE_KEYS = {
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CURSOR_FINALS = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
}

_TILDE_CODES = {
    "1": "HOME",
    "3": "DELETE",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
}

_KITTY_FUNCTIONAL_CODES = {
    9: "TAB",
    13: "ENTER",
    27: "ESC",
    127: "BACKSPACE",
}

KITTY_CTRL_MODIFIER = 0b100


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def poll_key(fd: int, timeout_ms: int) -> bool:
    """Return whether a key byte is available within ``timeout_ms``."""
    if _PENDING_BYTES:
        return True
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    return bool(ready)


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_text_key(fd: int, first: bytes) -> str:
    """Collect UTF-8 continuation bytes so multi-byte characters decode whole."""
    data = first
    for _ in range(_utf8_sequence_length(first[0]) - 1):
        more = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if more is None:
            break
        data += more
    return data.decode("utf-8", errors="replace")


def _event_kind(modifier_field: str) -> str:
    """Extract the kitty event type from a ``mods[:event]`` parameter field."""
    _mods, _sep, event = modifier_field.partition(":")
    if not event:
        return KEY_PRESS
    try:
        return KITTY_EVENT_KINDS.get(int(event), KEY_PRESS)
    except ValueError:
        return KEY_PRESS


def _modifier_bits(modifier_field: str) -> int:
    mods, _sep, _event = modifier_field.partition(":")
    try:
        return max(0, int(mods) - 1)
    except ValueError:
        return 0


def _decode_csi(params: str, final: str) -> KeyEvent:
    """Map one complete CSI sequence to a key event."""
    fields = params.split(";")
    modifier_field = fields[1] if len(fields) > 1 else ""
    kind = _event_kind(modifier_field)

    if final in _CURSOR_FINALS:
        return KeyEvent(_CURSOR_FINALS[final], kind)
    if final == "~":
        return KeyEvent(_TILDE_CODES.get(fields[0], "ESC"), kind)
    if final == "u":
        code_text = fields[0].partition(":")[0]
        try:
            code = int(code_text)
        except ValueError:
            return KeyEvent("ESC")
        if code in _KITTY_FUNCTIONAL_CODES:
            return KeyEvent(_KITTY_FUNCTIONAL_CODES[code], kind)
        try:
            text = chr(code)
        except (ValueError, OverflowError):
            return KeyEvent("ESC")
        if _modifier_bits(modifier_field) & KITTY_CTRL_MODIFIER:
            return KeyEvent(f"CTRL_{text.upper()}", kind)
        return KeyEvent(text, kind)
    return KeyEvent("ESC")


def _read_csi(fd: int) -> KeyEvent:
    """Read parameter bytes after ``ESC [`` up to the final byte."""
    params: list[str] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyEvent("ESC")
        ch = part.decode("ascii", errors="replace")
        if "@" <= ch <= "~":
            return _decode_csi("".join(params), ch)
        params.append(ch)
        if len(params) > MAX_CSI_PARAMETER_BYTES:
            return KeyEvent("ESC")


def read_key(fd: int, timeout_ms: int | None = None) -> KeyEvent | None:
    """Decode one key from ``fd``; ``None`` when nothing arrives in time."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None

        ch = os.read(fd, 1)
        if not ch:
            return None

    if ch in _SINGLE_BYTE_KEYS:
        return KeyEvent(_SINGLE_BYTE_KEYS[ch])

    if ch != b"\x1b":
        return KeyEvent(_read_text_key(fd, ch))

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("ESC")
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return KeyEvent("ESC")
        name = _CURSOR_FINALS.get(final.decode("ascii", errors="replace"))
        return KeyEvent(name or "ESC")
    _PENDING_BYTES.append(seq)
    return KeyEvent("ESC")


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "_PENDING_BYTES",
    "poll_key",
    "read_key",
]
