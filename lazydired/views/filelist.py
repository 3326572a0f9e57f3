"""File-list view: an explicit list of path names with fixed-width details."""

from __future__ import annotations

import logging
import os
import stat
import time
from collections.abc import Iterable
from pathlib import Path

from ..formatting import format_date, format_group, format_owner, format_size, permission_string
from ..render.surface import LineStyle, ListingBuffer, StyledLine, TextSurface
from ..settings import ListingConfig, ListingSettings

LOGGER = logging.getLogger(__name__)

SIZE_WIDTH = 10
LINKS_WIDTH = 2
OWNER_WIDTH = 8
GROUP_WIDTH = 8
NAME_WIDTH_MIN = 16


def name_column_width(names: Iterable[str]) -> int:
    return max([NAME_WIDTH_MIN, *(2 + len(name) for name in names)])


def format_file_entry(
    name: str,
    base_dir: Path,
    config: ListingConfig,
    now: int,
    name_width: int = NAME_WIDTH_MIN,
) -> list[tuple[LineStyle, str]]:
    """Format one path as styled runs; unreadable paths show the bare name."""
    try:
        st = os.stat(base_dir / name)
    except (OSError, ValueError):
        return [(LineStyle.NORMAL, name)]

    name_style = LineStyle.DIRECTORY if stat.S_ISDIR(st.st_mode) else LineStyle.FILENAME
    size = format_size(st.st_mode, getattr(st, "st_rdev", 0), st.st_size, config.size_mode)
    details = (
        f"{' ' * (name_width - len(name))}{size:>{SIZE_WIDTH}}"
        f"  {format_date(int(st.st_mtime), config.time_format, now)}"
        f"  {permission_string(st.st_mode)}"
        f"  {format_owner(st.st_uid, config.owner_mode):<{OWNER_WIDTH}}"
        f"  {format_group(st.st_gid, config.owner_mode):<{GROUP_WIDTH}}"
        f"  {st.st_nlink:>{LINKS_WIDTH}}"
    )
    return [(name_style, name), (LineStyle.NORMAL, details)]


class FileListView:
    """Listing engine over a caller-supplied sequence of names."""

    def __init__(
        self,
        names: Iterable[str],
        settings: ListingSettings,
        surface: TextSurface | None = None,
        *,
        base_dir: Path | str | None = None,
    ) -> None:
        self.names = [name for name in names if name]
        self.settings = settings
        self.surface: TextSurface = surface if surface is not None else ListingBuffer()
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.cursor_line = 0
        self._config: ListingConfig | None = None

    def lines(self) -> list[StyledLine]:
        return self.surface.lines()

    def _render(self) -> None:
        config = self.settings.config
        now = int(time.time())
        name_width = name_column_width(self.names)
        self.surface.clear()
        for name in self.names:
            for style, text in format_file_entry(name, self.base_dir, config, now, name_width):
                self.surface.write(text, style)
            self.surface.write("\n", LineStyle.NORMAL)
        self._config = config
        self.cursor_line = max(0, min(self.cursor_line, len(self.names) - 1))

    def scan(self, path: Path | str, target: Path | str | None = None) -> None:
        """Resolve the names against ``path`` and place the cursor on ``target``."""
        self.base_dir = Path(path)
        self.cursor_line = 0
        if target is not None and str(target) in self.names:
            self.cursor_line = self.names.index(str(target))
        self._render()

    def update(self, width: int | None = None) -> bool:
        if self._config == self.settings.config:
            return False
        self._render()
        return True

    def refresh(self) -> None:
        self._render()

    def move(self, delta: int) -> None:
        self.cursor_line = max(0, min(self.cursor_line + delta, len(self.names) - 1))

    def select(self) -> Path | None:
        """Path named on the cursor line when it can be read."""
        if not 0 <= self.cursor_line < len(self.names):
            return None
        path = self.base_dir / self.names[self.cursor_line]
        if not os.access(path, os.R_OK):
            LOGGER.debug("no access to %s", path)
            return None
        return path


__all__ = ["name_column_width", "format_file_entry", "FileListView"]
