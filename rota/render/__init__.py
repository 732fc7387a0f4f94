"""Rendering engine for the split list/details terminal view.

Builds an immutable frame snapshot from navigation state and writes fully
composed ANSI frames. Rendering never mutates navigation state.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width, fit_ansi_line, wrap_text_block
from ..navigation import NavigationState
from .format import details_text, entry_label, human_size, sanitize_terminal_text, status_text
from .layout import FrameLayout, compute_layout, list_scroll_start

APP_TITLE = "rota"
HEADER_MODE_TEXT = "read-only"
ENTRIES_TITLE = "Entries"
STATUS_TITLE = "Status"
DETAILS_TITLE = "Details"


@dataclass(frozen=True)
class Frame:
    """Everything one drawn screen shows, detached from live state."""

    directory_label: str
    header_text: str
    items: tuple[str, ...]
    selected: int | None
    footer_text: str
    details_text: str
    list_start: int = 0


def build_frame(state: NavigationState, list_start: int = 0) -> Frame:
    selected = state.selected_index if state.entries else None
    return Frame(
        directory_label=sanitize_terminal_text(str(state.current_directory)),
        header_text=f"{APP_TITLE}  \033[1m{HEADER_MODE_TEXT}\033[0m",
        items=tuple(entry_label(entry) for entry in state.entries),
        selected=selected,
        footer_text=status_text(state.last_error),
        details_text=details_text(state.selected_entry()),
        list_start=list_start,
    )


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def draw_box(title: str, body: list[str], width: int, height: int) -> list[str]:
    """Return ``height`` rows of a titled, bordered box exactly ``width`` wide.

    Body rows past the inner height are dropped; missing rows are blank.
    """
    if height <= 0:
        return []
    if width < 2 or height < 2:
        return [" " * max(0, width) for _ in range(height)]

    inner_width = width - 2
    inner_rows = height - 2
    title_text = clip_ansi_line(title, inner_width)
    rows = ["┌" + title_text + "─" * (inner_width - display_width(title_text)) + "┐"]
    for idx in range(inner_rows):
        content = body[idx] if idx < len(body) else ""
        rows.append("│" + fit_ansi_line(content, inner_width) + "│")
    rows.append("└" + "─" * inner_width + "┘")
    return rows


def _list_body(frame: Frame, inner_width: int, visible_rows: int) -> list[str]:
    body: list[str] = []
    end = min(len(frame.items), frame.list_start + visible_rows)
    for idx in range(frame.list_start, end):
        row = fit_ansi_line(frame.items[idx], inner_width)
        if idx == frame.selected:
            row = selected_with_ansi(row)
        body.append(row)
    return body


def compose_frame(frame: Frame, width: int, height: int) -> str:
    """Compose one complete screen for ``frame`` at the given terminal size."""
    layout = compute_layout(width, height)
    inner_left = max(0, layout.left_width - 2)
    inner_right = max(0, layout.right_width - 2)

    left_rows = draw_box(
        frame.directory_label,
        [frame.header_text],
        layout.left_width,
        layout.header_rows,
    )
    left_rows += draw_box(
        ENTRIES_TITLE,
        _list_body(frame, inner_left, layout.visible_list_rows),
        layout.left_width,
        layout.list_rows,
    )
    left_rows += draw_box(
        STATUS_TITLE,
        wrap_text_block(frame.footer_text, inner_left, trim=True),
        layout.left_width,
        layout.footer_rows,
    )
    right_rows = draw_box(
        DETAILS_TITLE,
        wrap_text_block(frame.details_text, inner_right),
        layout.right_width,
        layout.height,
    )

    out: list[str] = ["\033[H\033[J"]
    for row in range(layout.height):
        left = left_rows[row] if row < len(left_rows) else " " * layout.left_width
        right = right_rows[row] if row < len(right_rows) else ""
        out.append(left + right)
        if row < layout.height - 1:
            out.append("\r\n")
    return "".join(out)


def render_frame(frame: Frame, width: int, height: int, stdout_fd: int | None = None) -> None:
    """Write one frame to the terminal."""
    fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    os.write(fd, compose_frame(frame, width, height).encode("utf-8", errors="replace"))


__all__ = [
    "Frame",
    "FrameLayout",
    "build_frame",
    "compose_frame",
    "compute_layout",
    "details_text",
    "draw_box",
    "human_size",
    "list_scroll_start",
    "render_frame",
    "sanitize_terminal_text",
    "selected_with_ansi",
    "status_text",
]
