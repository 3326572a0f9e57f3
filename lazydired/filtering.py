"""Visibility filtering and aggregate counts for listing entries."""

from __future__ import annotations

from collections.abc import Iterable

from .listing_model.types import DirEntry, ListingCounts
from .settings import SYSTEM_ARTIFACT_NAME, FilterSpec


def is_hidden_name(name: str, spec: FilterSpec) -> bool:
    """Whether ``name`` is hidden under ``spec``.

    Dot-files and the system artifact are separate conditions; an entry is
    hidden when either unmet condition applies.
    """
    if name.startswith(".") and not spec.show_dot_files:
        return True
    if name == SYSTEM_ARTIFACT_NAME and not spec.show_system_files:
        return True
    return False


def apply_filter(entries: Iterable[DirEntry], spec: FilterSpec) -> ListingCounts:
    """Tag ``is_hidden`` on every entry in place and return fresh aggregates."""
    counts = ListingCounts()
    for entry in entries:
        entry.is_hidden = is_hidden_name(entry.name, spec)
        if entry.is_hidden:
            if entry.is_dir:
                counts.hidden_dirs += 1
            else:
                counts.hidden_files += 1
        elif entry.is_dir:
            counts.dirs += 1
        else:
            counts.files += 1
            counts.total_bytes += entry.size_bytes
    return counts


__all__ = ["is_hidden_name", "apply_filter"]
