"""Tests for listing entry ordering."""

from __future__ import annotations

import itertools
import stat
import unittest
from pathlib import Path

from lazydired.listing_model import DirEntry
from lazydired.settings import SortKey, SortSpec
from lazydired.sorting import compare_entries, sort_entries


def _entry(name: str, *, is_dir: bool = False, size: int = 0, mtime: int = 0) -> DirEntry:
    mode = (stat.S_IFDIR | 0o755) if is_dir else (stat.S_IFREG | 0o644)
    return DirEntry(name=name, full_path=Path("/data") / name, mode=mode, size_bytes=size, modified_time=mtime)


def _names(entries: list[DirEntry]) -> list[str]:
    return [entry.name for entry in entries]


class SortEntriesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.entries = [
            _entry("gamma.txt", size=30, mtime=300),
            _entry("alpha.py", size=10, mtime=200),
            _entry("docs", is_dir=True, size=4096, mtime=100),
            _entry("beta.c", size=20, mtime=400),
            _entry("build", is_dir=True, size=4096, mtime=500),
        ]

    def test_name_order_groups_directories_first(self) -> None:
        ordered = sort_entries(self.entries, SortSpec())
        self.assertEqual(_names(ordered), ["build", "docs", "alpha.py", "beta.c", "gamma.txt"])

    def test_descending_keeps_directories_first(self) -> None:
        ordered = sort_entries(self.entries, SortSpec(descending=True))
        self.assertEqual(_names(ordered), ["docs", "build", "gamma.txt", "beta.c", "alpha.py"])

    def test_ungrouped_size_order(self) -> None:
        ordered = sort_entries(self.entries, SortSpec(key=SortKey.SIZE, group_dirs=False))
        self.assertEqual(_names(ordered), ["alpha.py", "beta.c", "gamma.txt", "build", "docs"])

    def test_date_order(self) -> None:
        ordered = sort_entries(self.entries, SortSpec(key=SortKey.DATE, group_dirs=False))
        self.assertEqual(_names(ordered), ["docs", "alpha.py", "gamma.txt", "beta.c", "build"])

    def test_extension_order_falls_through_to_name(self) -> None:
        entries = [_entry("z.py"), _entry("a.py"), _entry("m.c"), _entry("README")]
        ordered = sort_entries(entries, SortSpec(key=SortKey.EXTENSION))
        self.assertEqual(_names(ordered), ["README", "m.c", "a.py", "z.py"])

    def test_equal_keys_fall_through_to_name(self) -> None:
        entries = [_entry("b", size=5), _entry("a", size=5), _entry("c", size=1)]
        ordered = sort_entries(entries, SortSpec(key=SortKey.SIZE))
        self.assertEqual(_names(ordered), ["c", "a", "b"])

    def test_order_is_independent_of_input_order(self) -> None:
        spec = SortSpec(key=SortKey.SIZE, descending=True)
        expected = _names(sort_entries(self.entries, spec))
        for permutation in itertools.permutations(self.entries):
            self.assertEqual(_names(sort_entries(permutation, spec)), expected)


class CompareEntriesTests(unittest.TestCase):
    def test_comparison_is_antisymmetric(self) -> None:
        entries = [
            _entry("a", size=3, mtime=9),
            _entry("b", is_dir=True, size=1, mtime=1),
            _entry("c.x", size=3, mtime=2),
            _entry("d.a", size=0, mtime=9),
        ]
        specs = [
            SortSpec(key=key, group_dirs=group, descending=descending)
            for key in SortKey
            for group in (True, False)
            for descending in (True, False)
        ]
        for spec in specs:
            for left, right in itertools.permutations(entries, 2):
                result = compare_entries(left, right, spec)
                self.assertIn(result, (-1, 1))
                self.assertEqual(result, -compare_entries(right, left, spec))

    def test_same_entry_compares_equal(self) -> None:
        entry = _entry("same")
        self.assertEqual(compare_entries(entry, entry, SortSpec(descending=True)), 0)


if __name__ == "__main__":
    unittest.main()
