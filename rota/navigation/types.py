"""Domain datatypes for one browsed directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Entry:
    """One child of the browsed directory plus whatever metadata was readable.

    ``size`` is only populated for regular files; ``modified`` holds
    ``st_mtime_ns`` when the stat probe succeeded.
    """

    name: str
    path: Path
    is_dir: bool = False
    size: int | None = None
    modified: int | None = None


@dataclass(frozen=True)
class DirectoryListing:
    """Result of one directory read: sorted entries and the last failure seen."""

    entries: list[Entry] = field(default_factory=list)
    error: str | None = None
    failed: bool = False


__all__ = [
    "Entry",
    "DirectoryListing",
]
