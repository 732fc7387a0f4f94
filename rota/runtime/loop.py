"""Main interactive event loop for the terminal UI.

Each iteration snapshots navigation state, draws it when it changed, waits a
bounded time for one key, and dispatches that key. The loop is the only
writer of ``NavigationState``.
"""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from ..config import DEFAULT_POLL_TIMEOUT_MS
from ..input import BrowserKeyContext, BrowserKeyHandler, KeyEvent
from ..navigation import NavigationState
from ..render import Frame, build_frame, compute_layout, list_scroll_start
from .terminal import TerminalController

logger = logging.getLogger(__name__)


class LoopStatus(enum.Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected terminal operations used by ``run_main_loop``."""

    draw: Callable[[Frame, int, int], None]
    poll_key: Callable[[int, int], bool]
    read_key: Callable[[int], KeyEvent | None]
    terminal_size: Callable[[], os.terminal_size]


def run_main_loop(
    state: NavigationState,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> LoopStatus:
    """Run the browser until a quit key arrives and return the final status.

    Terminal mode is held for the whole loop and released on every exit path.
    """
    status = LoopStatus.RUNNING
    layout = compute_layout(80, 24)
    list_start = 0
    last_drawn: tuple[Frame, int, int] | None = None

    def page_rows() -> int:
        return layout.visible_list_rows

    handler = BrowserKeyHandler(BrowserKeyContext(state=state, page_rows=page_rows))
    logger.info("browser started in %s", state.current_directory)

    with terminal.raw_mode():
        while status is LoopStatus.RUNNING:
            term = callbacks.terminal_size()
            layout = compute_layout(term.columns, term.lines)
            list_start = list_scroll_start(
                state.selected_index,
                list_start,
                layout.visible_list_rows,
                len(state.entries),
            )
            frame = build_frame(state, list_start)
            if last_drawn != (frame, term.columns, term.lines):
                callbacks.draw(frame, term.columns, term.lines)
                last_drawn = (frame, term.columns, term.lines)

            try:
                if not callbacks.poll_key(stdin_fd, timing.poll_timeout_ms):
                    continue
                event = callbacks.read_key(stdin_fd)
            except KeyboardInterrupt:
                event = KeyEvent("CTRL_C")
            if event is None:
                continue
            if handler.handle(event):
                status = LoopStatus.TERMINATED

    logger.info("browser stopped in %s", state.current_directory)
    return status
