"""Tests for the explicit file-list view."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydired.render import LineStyle
from lazydired.settings import ListingConfig, ListingSettings, OwnerMode, SizeMode, TimeFormat
from lazydired.views import FileListView, format_file_entry
from lazydired.views.filelist import NAME_WIDTH_MIN, name_column_width


class FileListViewTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        (self.root / "notes.txt").write_text("x" * 42, encoding="utf-8")
        (self.root / "docs").mkdir()
        self.config = ListingConfig(
            time_format=TimeFormat.SECONDS,
            size_mode=SizeMode.EXACT,
            owner_mode=OwnerMode.NUMERIC,
        )
        self.settings = ListingSettings(self.config)

    def test_name_column_width(self) -> None:
        self.assertEqual(name_column_width([]), NAME_WIDTH_MIN)
        self.assertEqual(name_column_width(["short"]), NAME_WIDTH_MIN)
        self.assertEqual(name_column_width(["x" * 30]), 32)

    def test_format_file_entry_details(self) -> None:
        spans = format_file_entry("notes.txt", self.root, self.config, now=0, name_width=16)

        self.assertEqual(spans[0], (LineStyle.FILENAME, "notes.txt"))
        details = spans[1][1]
        self.assertTrue(details.startswith(" " * 7 + " " * 8 + "42  "))
        self.assertIn("  -rw", details)

    def test_directories_use_directory_style(self) -> None:
        spans = format_file_entry("docs", self.root, self.config, now=0)
        self.assertEqual(spans[0], (LineStyle.DIRECTORY, "docs"))

    def test_missing_file_shows_bare_name(self) -> None:
        self.assertEqual(
            format_file_entry("missing.bin", self.root, self.config, now=0),
            [(LineStyle.NORMAL, "missing.bin")],
        )

    def test_scan_renders_each_name_and_targets_cursor(self) -> None:
        view = FileListView(["notes.txt", "", "docs", "missing.bin"], self.settings)

        view.scan(self.root, target="docs")

        texts = [line.text for line in view.lines()]
        self.assertEqual(len(texts), 3)
        self.assertTrue(texts[0].startswith("notes.txt "))
        self.assertEqual(texts[2], "missing.bin")
        self.assertEqual(view.cursor_line, 1)

    def test_select_returns_readable_paths_only(self) -> None:
        view = FileListView(["notes.txt", "missing.bin"], self.settings, base_dir=self.root)
        view.refresh()

        self.assertEqual(view.select(), self.root / "notes.txt")
        view.move(5)
        self.assertEqual(view.cursor_line, 1)
        self.assertIsNone(view.select())

    def test_select_respects_access_check(self) -> None:
        view = FileListView(["notes.txt"], self.settings, base_dir=self.root)
        with mock.patch("lazydired.views.filelist.os.access", return_value=False) as access:
            self.assertIsNone(view.select())
        access.assert_called_once_with(self.root / "notes.txt", os.R_OK)

    def test_update_rerenders_only_after_policy_change(self) -> None:
        view = FileListView(["notes.txt"], self.settings, base_dir=self.root)
        view.refresh()

        self.assertFalse(view.update())
        self.settings.cycle_size_mode()
        self.assertTrue(view.update())
        self.assertFalse(view.update(width=10))


if __name__ == "__main__":
    unittest.main()
