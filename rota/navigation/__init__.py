"""Navigation model for the directory browser.

This package contains non-UI primitives:
- entry/listing datatypes
- filesystem scanning with per-child failure isolation
- the mutable navigation state driven by the runtime loop
"""

from __future__ import annotations

from .types import DirectoryListing, Entry
from .fs import entry_sort_key, list_directory_children, probe_entry, sort_entries
from .state import NavigationState

__all__ = [
    "Entry",
    "DirectoryListing",
    "entry_sort_key",
    "sort_entries",
    "probe_entry",
    "list_directory_children",
    "NavigationState",
]
