"""Tests for config persistence and input sanitization.

Validates listing-policy round-tripping through the JSON config file.
Ensures malformed config data falls back to defaults key by key.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydired import config
from lazydired.settings import FilterSpec, ListingConfig, OwnerMode, SizeMode, SortKey, SortSpec, TimeFormat


class ConfigBehaviorTests(unittest.TestCase):
    def test_listing_config_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "lazydired.json"
            expected = ListingConfig(
                sort=SortSpec(key=SortKey.DATE, group_dirs=False, descending=True),
                filter=FilterSpec(show_dot_files=False, show_system_files=True),
                time_format=TimeFormat.TOUCH_LONG,
                size_mode=SizeMode.DECIMAL,
                owner_mode=OwnerMode.NUMERIC,
                show_blocks=True,
            )
            with mock.patch("lazydired.config.CONFIG_PATH", config_path):
                config.save_listing_config(expected)
                saved = config.load_config()
                self.assertEqual(saved.get("sort_order"), "ud-")
                self.assertEqual(saved.get("time_format"), "touch-long")
                self.assertEqual(config.load_listing_config(), expected)

    def test_missing_file_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazydired.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_listing_config(), ListingConfig())

    def test_malformed_values_fall_back_per_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "lazydired.json"
            with mock.patch("lazydired.config.CONFIG_PATH", config_path):
                config.save_config(
                    {
                        "sort_order": "s?",
                        "time_format": "iso-8601",
                        "show_dot_files": "yes",
                        "show_system_files": True,
                        "size_mode": "gigantic",
                        "owner_mode": "Numeric",
                        "unrelated": [1, 2],
                    }
                )
                loaded = config.load_listing_config()

        self.assertIs(loaded.sort.key, SortKey.SIZE)
        self.assertIs(loaded.time_format, TimeFormat.COMPACT)
        self.assertTrue(loaded.filter.show_dot_files)
        self.assertTrue(loaded.filter.show_system_files)
        self.assertIs(loaded.size_mode, SizeMode.EXACT)
        self.assertIs(loaded.owner_mode, OwnerMode.NUMERIC)

    def test_non_object_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "lazydired.json"
            config_path.write_text("[1, 2, 3]", encoding="utf-8")
            with mock.patch("lazydired.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_save_keeps_unrelated_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "lazydired.json"
            with mock.patch("lazydired.config.CONFIG_PATH", config_path):
                config.save_config({"theme": "ocean"})
                config.save_listing_config(ListingConfig())
                self.assertEqual(config.load_config().get("theme"), "ocean")


if __name__ == "__main__":
    unittest.main()
