"""Domain datatypes for one scanned directory listing."""

from __future__ import annotations

import enum
import stat
from dataclasses import dataclass, field
from pathlib import Path

from ..settings import DetailMode, ListingConfig


class DirtyFlags(enum.IntFlag):
    """Pipeline stages whose output is stale."""

    CLEAN = 0
    SORT = 1
    FILTER = 2
    COLUMNS = 4
    REBUILD = 8
    ALL = 15


class Column(enum.IntFlag):
    """Optional detail columns, in rendering order."""

    NONE = 0
    BLOCKS = 0x01
    MODE = 0x02
    LINKS = 0x04
    OWNER = 0x08
    GROUP = 0x10
    SIZE = 0x20
    DATE = 0x40
    ALL = 0x7F


@dataclass(eq=False)
class DirEntry:
    """One filesystem entry observed with ``lstat``.

    Entries compare by identity. ``is_hidden`` is owned by the filter stage,
    ``mark`` by view commands and ``render_offset`` by the render step.
    """

    name: str
    full_path: Path
    mode: int
    link_count: int = 1
    owner_id: int = 0
    group_id: int = 0
    device_id: int = 0
    modified_time: int = 0
    size_bytes: int = 0
    is_hidden: bool = False
    mark: str = " "
    render_offset: int = 0

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)

    @property
    def extension(self) -> str:
        """Text after the last ``.`` of the name, empty when there is none."""
        _head, dot, tail = self.name.rpartition(".")
        return tail if dot else ""


@dataclass
class ListingCounts:
    """Aggregates recomputed by the filter stage."""

    dirs: int = 0
    files: int = 0
    hidden_dirs: int = 0
    hidden_files: int = 0
    total_bytes: int = 0

    @property
    def is_empty(self) -> bool:
        return self.dirs + self.files + self.hidden_dirs + self.hidden_files == 0


@dataclass
class FieldWidths:
    """Maximum formatted width per field across all entries."""

    blocks: int = 0
    mode: int = 0
    links: int = 0
    owner: int = 0
    group: int = 0
    size: int = 0
    date: int = 0
    name: int = 0


@dataclass(frozen=True)
class ColumnLayout:
    """Visible optional columns and the width reserved for each."""

    visible: Column = Column.NONE
    widths: dict[Column, int] = field(default_factory=dict)
    name_width: int = 16

    def shows(self, column: Column) -> bool:
        return bool(self.visible & column)


@dataclass
class DirectoryListing:
    """Entries of one scanned directory plus cached derived state.

    ``entries`` is kept in last-applied sort order. ``config`` is the policy
    snapshot the derived state was computed with; ``None`` means nothing has
    been computed yet.
    """

    root_path: Path
    entries: list[DirEntry] = field(default_factory=list)
    scan_error: Exception | None = None
    counts: ListingCounts = field(default_factory=ListingCounts)
    widths: FieldWidths = field(default_factory=FieldWidths)
    layout: ColumnLayout = field(default_factory=ColumnLayout)
    dirty: DirtyFlags = DirtyFlags.ALL
    config: ListingConfig | None = None
    detail_mode: DetailMode = DetailMode.AUTO
    last_detail_mode: DetailMode | None = None
    last_width: int = 0
    current_path: Path | None = None
    name_column: int = 2

    def visible_entries(self) -> list[DirEntry]:
        return [entry for entry in self.entries if not entry.is_hidden]

    def find_entry(self, path: Path | str | None) -> DirEntry | None:
        """Return the entry whose full path equals ``path``."""
        if path is None:
            return None
        wanted = Path(path)
        for entry in self.entries:
            if entry.full_path == wanted:
                return entry
        return None


__all__ = [
    "DirtyFlags",
    "Column",
    "DirEntry",
    "ListingCounts",
    "FieldWidths",
    "ColumnLayout",
    "DirectoryListing",
]
