"""Tests for field measurement and adaptive column layout."""

from __future__ import annotations

import stat
import unittest
from pathlib import Path

from lazydired.columns import clamp_name_width, columns_budget, layout_columns, measure_fields
from lazydired.listing_model import Column, DirEntry, FieldWidths
from lazydired.settings import DetailMode, ListingConfig, OwnerMode, SizeMode, TimeFormat


def _widths() -> FieldWidths:
    return FieldWidths(blocks=3, mode=10, links=2, owner=6, group=5, size=5, date=12, name=20)


class LayoutColumnsTests(unittest.TestCase):
    def test_hide_mode_shows_no_columns(self) -> None:
        layout = layout_columns(_widths(), 200, DetailMode.HIDE)
        self.assertEqual(layout.visible, Column.NONE)
        self.assertEqual(layout.widths, {})
        self.assertEqual(columns_budget(layout), 0)

    def test_show_mode_ignores_width(self) -> None:
        layout = layout_columns(_widths(), 10, DetailMode.SHOW)
        self.assertEqual(layout.visible, Column.ALL & ~Column.BLOCKS)

        with_blocks = layout_columns(_widths(), 10, DetailMode.SHOW, show_blocks=True)
        self.assertEqual(with_blocks.visible, Column.ALL)
        self.assertEqual(with_blocks.widths[Column.BLOCKS], 3)

        hidden_owner = layout_columns(_widths(), 10, DetailMode.SHOW, OwnerMode.HIDDEN)
        self.assertFalse(hidden_owner.shows(Column.OWNER))
        self.assertFalse(hidden_owner.shows(Column.GROUP))
        self.assertTrue(hidden_owner.shows(Column.SIZE))

    def test_auto_mode_fits_everything_in_wide_display(self) -> None:
        layout = layout_columns(_widths(), 80, DetailMode.AUTO, show_blocks=True)
        self.assertEqual(layout.visible, Column.ALL & ~Column.BLOCKS)
        self.assertEqual(layout.name_width, 20)

    def test_auto_mode_drops_lowest_priority_columns_first(self) -> None:
        layout = layout_columns(_widths(), 45, DetailMode.AUTO)
        self.assertEqual(layout.visible, Column.SIZE | Column.DATE)

    def test_auto_mode_drops_everything_after_first_overdraw(self) -> None:
        layout = layout_columns(_widths(), 20, DetailMode.AUTO)
        self.assertEqual(layout.visible, Column.NONE)

    def test_hidden_owner_mode_frees_budget(self) -> None:
        with_owner = layout_columns(_widths(), 60, DetailMode.AUTO)
        self.assertEqual(with_owner.visible, Column.SIZE | Column.DATE | Column.MODE | Column.OWNER)

        without_owner = layout_columns(_widths(), 60, DetailMode.AUTO, OwnerMode.HIDDEN)
        self.assertEqual(without_owner.visible, Column.SIZE | Column.DATE | Column.MODE | Column.LINKS)

    def test_auto_mode_stays_within_budget_and_grows_monotonically(self) -> None:
        widths = _widths()
        previous = Column.NONE
        for display_width in range(0, 120):
            layout = layout_columns(widths, display_width, DetailMode.AUTO)
            self.assertLessEqual(columns_budget(layout), max(0, display_width - layout.name_width))
            self.assertEqual(layout.visible & previous, previous)
            previous = layout.visible

    def test_name_width_is_clamped(self) -> None:
        self.assertEqual(clamp_name_width(3), 16)
        self.assertEqual(clamp_name_width(25), 25)
        self.assertEqual(clamp_name_width(90), 40)


class MeasureFieldsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.config = ListingConfig(
            time_format=TimeFormat.SECONDS,
            size_mode=SizeMode.EXACT,
            owner_mode=OwnerMode.NUMERIC,
        )
        self.entries = [
            DirEntry(
                name="short",
                full_path=Path("/data/short"),
                mode=stat.S_IFREG | 0o644,
                link_count=1,
                owner_id=1000,
                group_id=10,
                size_bytes=123456,
                modified_time=1_700_000_000,
            ),
            DirEntry(
                name="a-much-longer-name.txt",
                full_path=Path("/data/a-much-longer-name.txt"),
                mode=stat.S_IFREG | 0o644,
                link_count=12,
                owner_id=7,
                group_id=12345,
                size_bytes=9,
                modified_time=1_700_000_000,
            ),
        ]

    def test_widths_are_maxima_over_entries(self) -> None:
        widths = measure_fields(self.entries, self.config, DetailMode.AUTO, now=1_700_000_000)
        self.assertEqual(widths.name, 22)
        self.assertEqual(widths.mode, 10)
        self.assertEqual(widths.links, 2)
        self.assertEqual(widths.owner, 4)
        self.assertEqual(widths.group, 5)
        self.assertEqual(widths.size, 6)
        self.assertEqual(widths.date, 10)
        self.assertEqual(widths.blocks, 3)

    def test_hidden_details_measure_names_only(self) -> None:
        widths = measure_fields(self.entries, self.config, DetailMode.HIDE, now=1_700_000_000)
        self.assertEqual(widths, FieldWidths(name=22))


if __name__ == "__main__":
    unittest.main()
