"""Runtime composition layer for rota.

Builds the initial navigation state, binds terminal operations, and starts
the loop. Non-interactive stdin gets a plain listing instead of the TUI.
"""

from __future__ import annotations

import os
import shutil
import sys
from functools import partial
from typing import TextIO

from ..config import BrowserConfig
from ..input import poll_key, read_key
from ..navigation import NavigationState
from ..render import human_size, render_frame
from ..render.format import entry_label, status_text
from .loop import LoopStatus, RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .terminal import TerminalController


def _terminal_size() -> os.terminal_size:
    return shutil.get_terminal_size((80, 24))


def format_listing(state: NavigationState) -> str:
    """Render the current listing as plain text lines for non-tty output."""
    lines: list[str] = []
    for entry in state.entries:
        label = entry_label(entry)
        if entry.size is not None:
            label = f"{label}  {human_size(entry.size)}"
        lines.append(label)
    return "".join(f"{line}\n" for line in lines)


def print_listing(state: NavigationState, out: TextIO, err: TextIO) -> None:
    out.write(format_listing(state))
    if state.last_error:
        err.write(f"{status_text(state.last_error)}\n")


def run_browser(config: BrowserConfig | None = None) -> LoopStatus | None:
    """Initialize browser state, wire terminal callbacks, and run the loop.

    Returns ``None`` when stdin is not a terminal and a plain listing was
    printed instead.
    """
    config = config if config is not None else BrowserConfig()
    state = NavigationState.from_cwd()

    if not os.isatty(sys.stdin.fileno()):
        print_listing(state, sys.stdout, sys.stderr)
        return None

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    callbacks = RuntimeLoopCallbacks(
        draw=partial(render_frame, stdout_fd=stdout_fd),
        poll_key=poll_key,
        read_key=read_key,
        terminal_size=_terminal_size,
    )
    return run_main_loop(
        state=state,
        terminal=terminal,
        stdin_fd=stdin_fd,
        timing=RuntimeLoopTiming(poll_timeout_ms=config.poll_timeout_ms),
        callbacks=callbacks,
    )
