"""Text formatting for entry labels, sizes, and the details panel."""

from __future__ import annotations

import re

from ..input import HELP_TEXT
from ..navigation import Entry

# C0 controls, DEL, C1 controls, and surrogate escapes of undecodable bytes.
_UNSAFE_RE = re.compile(r"[\x00-\x1f\x7f-\x9f\udc80-\udcff]")

_SIZE_UNITS: tuple[tuple[str, int], ...] = (
    ("GiB", 1024**3),
    ("MiB", 1024**2),
    ("KiB", 1024),
)

DIR_MARKER = "[DIR] "
FILE_MARKER = "      "
NO_ENTRIES_TEXT = "No entries"
UNKNOWN_VALUE = "-"
MODIFIED_KNOWN_TEXT = "known (format later)"


def human_size(num_bytes: int) -> str:
    """Format a byte count in binary units with one decimal place.

    Counts below one KiB are printed exactly, e.g. ``"512 B"``.
    """
    for unit, scale in _SIZE_UNITS:
        if num_bytes >= scale:
            return f"{num_bytes / scale:.1f} {unit}"
    return f"{num_bytes} B"


def sanitize_terminal_text(text: str) -> str:
    """Escape control characters as ``\\xNN`` so names stay on one row.

    Newlines and tabs are escaped too since a name or path never spans rows.
    Surrogate escapes from undecodable filename bytes show as the raw byte.
    """
    if _UNSAFE_RE.search(text) is None:
        return text

    out: list[str] = []
    for ch in text:
        code = ord(ch)
        if 0xDC80 <= code <= 0xDCFF:
            code -= 0xDC00
        elif not _UNSAFE_RE.match(ch):
            out.append(ch)
            continue
        out.append(f"\\x{code:02x}")
    return "".join(out)


def entry_label(entry: Entry) -> str:
    prefix = DIR_MARKER if entry.is_dir else FILE_MARKER
    return f"{prefix}{sanitize_terminal_text(entry.name)}"


def status_text(last_error: str | None) -> str:
    """Footer text: the latest error when there is one, else key help."""
    if last_error:
        return f"ERROR: {sanitize_terminal_text(last_error)}"
    return HELP_TEXT


def details_text(entry: Entry | None) -> str:
    """Build the details panel body for the selected entry."""
    if entry is None:
        return NO_ENTRIES_TEXT

    kind = "Directory" if entry.is_dir else "File"
    size = human_size(entry.size) if entry.size is not None else UNKNOWN_VALUE
    # Timestamps are only reported as present or absent.
    modified = MODIFIED_KNOWN_TEXT if entry.modified is not None else UNKNOWN_VALUE
    return (
        f"Name: {sanitize_terminal_text(entry.name)}\n"
        f"Type: {kind}\n"
        f"Size: {size}\n"
        f"Modified: {modified}\n"
        "\n"
        f"Path:\n{sanitize_terminal_text(str(entry.path))}"
    )
