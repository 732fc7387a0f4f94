"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, cursor visibility, and
the kitty keyboard protocol flags that let terminals report key releases.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[>3u"
LEAVE_TUI_SEQUENCE = b"\x1b[<u\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage the process-wide terminal mode for one browser session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with a hidden cursor."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Alternate screen, hide cursor, push kitty flags (disambiguate + event types).
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)

    def disable_tui_mode(self) -> None:
        """Restore the main screen, the cursor, and the saved tty attributes."""
        try:
            os.write(self.stdout_fd, LEAVE_TUI_SEQUENCE)
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
