"""Filesystem scanning for the single-directory listing."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable, Iterable
from pathlib import Path

from .types import DirectoryListing, Entry

logger = logging.getLogger(__name__)

ScandirFn = Callable[[Path], Iterable[os.DirEntry]]


def entry_sort_key(entry: Entry) -> tuple[bool, str, str]:
    """Directories first, then case-insensitive name, then raw name for ties."""
    return (not entry.is_dir, entry.name.casefold(), entry.name)


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Return ``entries`` in browse order regardless of enumeration order."""
    return sorted(entries, key=entry_sort_key)


def probe_entry(child: os.DirEntry) -> Entry:
    """Build an ``Entry`` from one scandir child.

    A failing stat probe is not an error: the child is still listed, just
    without kind, size, or timestamp.
    """
    name = child.name
    path = Path(child.path)
    try:
        info = child.stat(follow_symlinks=False)
    except OSError as exc:
        logger.debug("metadata unavailable for %s: %s", path, exc)
        return Entry(name=name, path=path)

    is_dir = stat.S_ISDIR(info.st_mode)
    size = int(info.st_size) if stat.S_ISREG(info.st_mode) else None
    return Entry(
        name=name,
        path=path,
        is_dir=is_dir,
        size=size,
        modified=int(info.st_mtime_ns),
    )


def list_directory_children(directory: Path, scandir: ScandirFn = os.scandir) -> DirectoryListing:
    """Read the immediate children of ``directory`` into a sorted listing.

    If the scan cannot start, the listing is empty and ``failed`` is set. An
    error while advancing to the next child skips only that child; the last
    such message is kept in ``error``.
    """
    try:
        handle = scandir(directory)
    except OSError as exc:
        logger.warning("cannot read %s: %s", directory, exc)
        return DirectoryListing(error=f"read_dir failed: {exc}", failed=True)

    entries: list[Entry] = []
    error: str | None = None
    with handle as children:
        iterator = iter(children)
        while True:
            try:
                child = next(iterator)
            except StopIteration:
                break
            except OSError as exc:
                logger.debug("skipping unreadable child of %s: %s", directory, exc)
                error = f"read_dir entry error: {exc}"
                continue
            entries.append(probe_entry(child))

    return DirectoryListing(entries=sort_entries(entries), error=error)


__all__ = [
    "ScandirFn",
    "entry_sort_key",
    "sort_entries",
    "probe_entry",
    "list_directory_children",
]
