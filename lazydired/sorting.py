"""Total ordering of listing entries under a ``SortSpec``."""

from __future__ import annotations

import functools
import locale
from collections.abc import Iterable

from .listing_model.types import DirEntry
from .settings import SortKey, SortSpec


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def collate(left: str, right: str) -> int:
    """Locale-aware three-way comparison, tie-broken by code points."""
    result = _sign(locale.strcoll(left, right))
    if result:
        return result
    return (left > right) - (left < right)


def compare_entries(left: DirEntry, right: DirEntry, spec: SortSpec) -> int:
    """Return -1, 0 or 1 ordering ``left`` against ``right``.

    Directories lead when grouping is enabled, whatever the direction; the
    descending flag only reverses order within a group.
    """
    if spec.group_dirs and left.is_dir != right.is_dir:
        return -1 if left.is_dir else 1

    result = 0
    if spec.key is SortKey.DATE:
        result = _sign(left.modified_time - right.modified_time)
    elif spec.key is SortKey.SIZE:
        result = _sign(left.size_bytes - right.size_bytes)
    elif spec.key is SortKey.EXTENSION:
        result = collate(left.extension, right.extension)
    if not result:
        result = collate(left.name, right.name)
    return -result if spec.descending else result


def sort_entries(entries: Iterable[DirEntry], spec: SortSpec) -> list[DirEntry]:
    """Return ``entries`` ordered by ``spec``."""
    return sorted(entries, key=functools.cmp_to_key(lambda a, b: compare_entries(a, b, spec)))


__all__ = ["collate", "compare_entries", "sort_entries"]
