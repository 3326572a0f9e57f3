"""Domain model for one directory listing plus the scanner that builds it.

This package contains non-UI listing primitives:
- entry/listing datatypes with aggregates, field widths and dirty flags
- synchronous directory (or glob pattern) scanning
- path probing helpers used when opening a listing
"""

from __future__ import annotations

from .scan import (
    canonical_path,
    default_directory,
    entry_from_stat,
    is_file_pattern,
    probe_path,
    scan,
    scan_entries,
    split_scan_target,
)
from .types import Column, ColumnLayout, DirectoryListing, DirEntry, DirtyFlags, FieldWidths, ListingCounts

__all__ = [
    "Column",
    "ColumnLayout",
    "DirectoryListing",
    "DirEntry",
    "DirtyFlags",
    "FieldWidths",
    "ListingCounts",
    "canonical_path",
    "default_directory",
    "entry_from_stat",
    "is_file_pattern",
    "probe_path",
    "scan",
    "scan_entries",
    "split_scan_target",
]
