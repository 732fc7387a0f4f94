"""Mutable navigation state for the browser session.

The state owns the browsed directory, its sorted listing, the selection
cursor, and the most recent failure message. Every operation keeps
``selected_index`` inside the listing and converts filesystem failures into
``last_error`` rather than raising.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .fs import ScandirFn, list_directory_children
from .types import Entry

logger = logging.getLogger(__name__)


@dataclass
class NavigationState:
    current_directory: Path
    entries: list[Entry] = field(default_factory=list)
    selected_index: int = 0
    last_error: str | None = None
    scandir: ScandirFn = field(default=os.scandir, repr=False, compare=False)

    @classmethod
    def from_cwd(cls, scandir: ScandirFn = os.scandir) -> NavigationState:
        """Seed state from the process working directory and read it once.

        ``Path.cwd()`` failures propagate; they are fatal for the session.
        """
        state = cls(current_directory=Path.cwd(), scandir=scandir)
        state.refresh()
        return state

    def refresh(self) -> None:
        """Re-read ``current_directory`` and replace ``entries`` wholesale."""
        self.last_error = None
        listing = list_directory_children(self.current_directory, scandir=self.scandir)

        if listing.failed:
            self.last_error = listing.error
            self.entries = []
            self.selected_index = 0
            return

        self.entries = listing.entries
        self.last_error = listing.error
        self.clamp_selection()

    def clamp_selection(self) -> None:
        """Pull ``selected_index`` back into range for the current listing."""
        if not self.entries:
            self.selected_index = 0
            return
        if self.selected_index >= len(self.entries):
            self.selected_index = len(self.entries) - 1
        elif self.selected_index < 0:
            self.selected_index = 0

    def move_selection(self, delta: int) -> None:
        """Shift the cursor by ``delta`` rows, stopping at either end."""
        if not self.entries:
            return
        last = len(self.entries) - 1
        self.selected_index = max(0, min(self.selected_index + delta, last))

    def enter_selected_dir(self) -> None:
        """Descend into the selected entry when it is a directory."""
        entry = self.selected_entry()
        if entry is None or not entry.is_dir:
            return
        logger.debug("entering %s", entry.path)
        self.current_directory = entry.path
        self.selected_index = 0
        self.refresh()

    def go_parent(self) -> None:
        """Ascend one level; does nothing at a filesystem root."""
        parent = self.current_directory.parent
        if parent == self.current_directory:
            return
        logger.debug("leaving %s for %s", self.current_directory, parent)
        self.current_directory = parent
        self.selected_index = 0
        self.refresh()

    def selected_entry(self) -> Entry | None:
        if 0 <= self.selected_index < len(self.entries):
            return self.entries[self.selected_index]
        return None
