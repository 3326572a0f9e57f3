"""Persistent JSON config helpers.

Stores the process-wide listing policy: sort order, time format, hidden-file
preferences and size/owner display modes. All access is defensive: malformed
or missing config falls back to defaults key by key.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .settings import (
    FilterSpec,
    ListingConfig,
    OwnerMode,
    SizeMode,
    SortSpec,
    apply_sort_codes,
    parse_time_format,
)

APP_NAME = "lazydired"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    """Only explicit booleans are accepted; anything else yields ``default``."""
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _load_enum(data: dict[str, object], key: str, enum_type, default):
    value = data.get(key)
    if not isinstance(value, str):
        return default
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        return default


def load_listing_config() -> ListingConfig:
    """Build a ``ListingConfig`` from persisted values over the defaults."""
    data = load_config()
    defaults = ListingConfig()

    sort = defaults.sort
    sort_order = data.get("sort_order")
    if isinstance(sort_order, str):
        sort = apply_sort_codes(SortSpec(), sort_order)

    time_format = defaults.time_format
    raw_time_format = data.get("time_format")
    if isinstance(raw_time_format, str):
        time_format = parse_time_format(raw_time_format) or defaults.time_format

    return ListingConfig(
        sort=sort,
        filter=FilterSpec(
            show_dot_files=_load_bool(data, "show_dot_files", defaults.filter.show_dot_files),
            show_system_files=_load_bool(data, "show_system_files", defaults.filter.show_system_files),
        ),
        time_format=time_format,
        size_mode=_load_enum(data, "size_mode", SizeMode, defaults.size_mode),
        owner_mode=_load_enum(data, "owner_mode", OwnerMode, defaults.owner_mode),
        show_blocks=_load_bool(data, "show_blocks", defaults.show_blocks),
    )


def save_listing_config(listing_config: ListingConfig) -> None:
    """Persist ``listing_config`` while keeping unrelated keys intact."""
    config = load_config()
    config["sort_order"] = listing_config.sort.to_codes()
    config["time_format"] = listing_config.time_format.value
    config["show_dot_files"] = listing_config.filter.show_dot_files
    config["show_system_files"] = listing_config.filter.show_system_files
    config["size_mode"] = listing_config.size_mode.value
    config["owner_mode"] = listing_config.owner_mode.value
    config["show_blocks"] = listing_config.show_blocks
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_listing_config",
    "save_listing_config",
]
