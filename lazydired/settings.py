"""Listing policy values: sort/filter specs and formatting modes.

Policies are immutable values. Commands derive a new ``ListingConfig`` and
store it on a ``ListingSettings`` holder; each pipeline stage receives the
value it needs explicitly, and listings keep the snapshot they were built
with so the update orchestrator can detect what changed.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace

SYSTEM_ARTIFACT_NAME = ".DS_Store"


class SortKey(enum.Enum):
    NAME = "n"
    EXTENSION = "e"
    SIZE = "s"
    DATE = "d"


class TimeFormat(enum.Enum):
    COMPACT = "compact"
    DOS = "dos"
    DOS_LONG = "dos-long"
    TOUCH = "touch"
    TOUCH_LONG = "touch-long"
    FULL = "full"
    SECONDS = "seconds"


class SizeMode(enum.Enum):
    """How byte counts are printed."""

    EXACT = "exact"
    BINARY = "binary"
    DECIMAL = "decimal"


class OwnerMode(enum.Enum):
    """How owner/group columns are printed."""

    NAME = "name"
    NUMERIC = "numeric"
    HIDDEN = "hidden"


class DetailMode(enum.Enum):
    """Optional-column visibility for one listing."""

    AUTO = "auto"
    HIDE = "hide"
    SHOW = "show"


_TIME_FORMAT_TOKENS: dict[str, TimeFormat] = {
    "default": TimeFormat.COMPACT,
    **{fmt.value: fmt for fmt in TimeFormat},
}

_SIZE_MODE_CYCLE = (SizeMode.EXACT, SizeMode.BINARY, SizeMode.DECIMAL)
_OWNER_MODE_CYCLE = (OwnerMode.NAME, OwnerMode.NUMERIC, OwnerMode.HIDDEN)
_DETAIL_MODE_CYCLE = (DetailMode.AUTO, DetailMode.HIDE, DetailMode.SHOW)


def parse_time_format(token: str | None) -> TimeFormat | None:
    """Return the time format named by ``token`` or ``None`` when unknown."""
    if token is None:
        return None
    return _TIME_FORMAT_TOKENS.get(token.strip().lower())


def time_format_tokens() -> tuple[str, ...]:
    return tuple(_TIME_FORMAT_TOKENS)


def _next_in_cycle(cycle: tuple, current):
    return cycle[(cycle.index(current) + 1) % len(cycle)]


def next_size_mode(mode: SizeMode) -> SizeMode:
    return _next_in_cycle(_SIZE_MODE_CYCLE, mode)


def next_owner_mode(mode: OwnerMode) -> OwnerMode:
    return _next_in_cycle(_OWNER_MODE_CYCLE, mode)


def next_detail_mode(mode: DetailMode) -> DetailMode:
    return _next_in_cycle(_DETAIL_MODE_CYCLE, mode)


@dataclass(frozen=True)
class SortSpec:
    """Primary key plus group-first and direction flags."""

    key: SortKey = SortKey.NAME
    group_dirs: bool = True
    descending: bool = False

    def to_codes(self) -> str:
        """Return canonical letter codes that reproduce this spec from any start."""
        return ("g" if self.group_dirs else "u") + self.key.value + ("-" if self.descending else "+")


def apply_sort_codes(spec: SortSpec, codes: str | None) -> SortSpec:
    """Apply single-letter sort codes to ``spec``.

    ``n``/``e``/``s``/``d`` select the primary key, ``g``/``u`` group or
    ungroup directories, ``r`` reverses, ``+``/``-`` force the direction.
    Letters are case-insensitive and unknown ones are ignored.
    """
    key = spec.key
    group_dirs = spec.group_dirs
    descending = spec.descending
    for char in (codes or "").lower():
        if char in "nesd":
            key = SortKey(char)
        elif char == "g":
            group_dirs = True
        elif char == "u":
            group_dirs = False
        elif char == "r":
            descending = not descending
        elif char == "+":
            descending = False
        elif char == "-":
            descending = True
    return SortSpec(key=key, group_dirs=group_dirs, descending=descending)


@dataclass(frozen=True)
class FilterSpec:
    show_dot_files: bool = True
    show_system_files: bool = False


@dataclass(frozen=True)
class ListingConfig:
    """Process-wide listing policy snapshot."""

    sort: SortSpec = field(default_factory=SortSpec)
    filter: FilterSpec = field(default_factory=FilterSpec)
    time_format: TimeFormat = TimeFormat.COMPACT
    size_mode: SizeMode = SizeMode.EXACT
    owner_mode: OwnerMode = OwnerMode.NAME
    show_blocks: bool = False


class ListingSettings:
    """Mutable holder for the current process-wide ``ListingConfig``.

    Views share one holder; every setter swaps in a new immutable value and
    reports whether anything changed.
    """

    def __init__(self, config: ListingConfig | None = None) -> None:
        self.config = config or ListingConfig()

    def _swap(self, config: ListingConfig) -> bool:
        if config == self.config:
            return False
        self.config = config
        return True

    def apply_sort_codes(self, codes: str | None) -> bool:
        return self._swap(replace(self.config, sort=apply_sort_codes(self.config.sort, codes)))

    def set_time_format(self, token: str) -> bool | None:
        """Select a time format by token.

        Returns ``None`` when the token is unknown (format unchanged),
        otherwise whether the format changed.
        """
        time_format = parse_time_format(token)
        if time_format is None:
            return None
        return self._swap(replace(self.config, time_format=time_format))

    def set_show_dot_files(self, value: bool) -> bool:
        return self._swap(replace(self.config, filter=replace(self.config.filter, show_dot_files=bool(value))))

    def set_show_system_files(self, value: bool) -> bool:
        return self._swap(replace(self.config, filter=replace(self.config.filter, show_system_files=bool(value))))

    def cycle_size_mode(self) -> SizeMode:
        self._swap(replace(self.config, size_mode=next_size_mode(self.config.size_mode)))
        return self.config.size_mode

    def cycle_owner_mode(self) -> OwnerMode:
        self._swap(replace(self.config, owner_mode=next_owner_mode(self.config.owner_mode)))
        return self.config.owner_mode


__all__ = [
    "SYSTEM_ARTIFACT_NAME",
    "SortKey",
    "TimeFormat",
    "SizeMode",
    "OwnerMode",
    "DetailMode",
    "SortSpec",
    "FilterSpec",
    "ListingConfig",
    "ListingSettings",
    "apply_sort_codes",
    "parse_time_format",
    "time_format_tokens",
    "next_size_mode",
    "next_owner_mode",
    "next_detail_mode",
]
