"""Directory editor view: cursor, marks and navigation over one listing.

``DiredView`` owns a ``DirectoryListing`` and the surface it renders into.
Policy commands change the shared ``ListingSettings`` and let the update
orchestrator decide what to rebuild; navigation commands rescan.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable
from pathlib import Path

from ..listing_model.scan import canonical_path, is_file_pattern, scan
from ..listing_model.types import DirectoryListing, DirEntry, DirtyFlags
from ..render.listing import HEADER_LINES
from ..render.surface import ListingBuffer, StyledLine, TextSurface
from ..settings import DetailMode, ListingSettings, OwnerMode, SizeMode, next_detail_mode
from ..update import update_listing

LOGGER = logging.getLogger(__name__)

DEFAULT_WIDTH = 80
NOT_IMPLEMENTED_MESSAGE = "Not yet implemented"


class DiredView:
    """One directory listing shown in a text surface with a cursor."""

    def __init__(
        self,
        settings: ListingSettings,
        surface: TextSurface | None = None,
        *,
        width: int = DEFAULT_WIDTH,
        detail_mode: DetailMode = DetailMode.AUTO,
        status: Callable[[str], None] | None = None,
    ) -> None:
        self.settings = settings
        self.surface: TextSurface = surface if surface is not None else ListingBuffer()
        self.width = width
        self.detail_mode = detail_mode
        self.listing: DirectoryListing | None = None
        self.cursor_line = HEADER_LINES
        self.top_line = 0
        self.last_status: str | None = None
        self._status_sink = status

    # ------------------------------------------------------------------
    # Status and geometry
    # ------------------------------------------------------------------

    def _status(self, message: str) -> None:
        self.last_status = message
        LOGGER.debug("status: %s", message)
        if self._status_sink is not None:
            self._status_sink(message)

    def lines(self) -> list[StyledLine]:
        return self.surface.lines()

    def _last_entry_line(self) -> int:
        return max(HEADER_LINES, self.surface.line_count() - 1)

    def _clamp_cursor(self, line: int) -> int:
        return max(HEADER_LINES, min(line, self._last_entry_line()))

    def _clamp_top(self, line: int) -> int:
        return max(0, min(line, self.surface.line_count() - 1))

    def _line_for_offset(self, offset: int) -> int:
        return self._clamp_cursor(self.surface.line_of_offset(offset))

    @property
    def cursor_offset(self) -> int:
        """Surface offset of the file name on the cursor line."""
        name_column = self.listing.name_column if self.listing is not None else 0
        return self.surface.offset_of_line(self.cursor_line) + name_column

    def current_entry(self) -> DirEntry | None:
        """Visible entry on the cursor line, if any."""
        if self.listing is None:
            return None
        index = self.cursor_line - HEADER_LINES
        if index < 0:
            return None
        visible = self.listing.visible_entries()
        return visible[index] if index < len(visible) else None

    # ------------------------------------------------------------------
    # Listing lifecycle
    # ------------------------------------------------------------------

    def scan(self, path: Path | str, target: Path | str | None = None) -> None:
        """Replace the listing with a fresh scan of ``path``.

        The cursor lands on ``target`` (a full path) when it is listed.
        """
        self.listing = scan(path)
        self.listing.detail_mode = self.detail_mode
        if target is not None:
            self.listing.current_path = canonical_path(target)
        self.cursor_line = HEADER_LINES
        self.top_line = 0
        self.update(flags=DirtyFlags.ALL)

        entry = self.listing.find_entry(self.listing.current_path)
        self.cursor_line = self._line_for_offset(entry.render_offset) if entry is not None else HEADER_LINES
        LOGGER.debug("listing %s, cursor line %d", self.listing.root_path, self.cursor_line)

    def update(self, width: int | None = None, flags: DirtyFlags = DirtyFlags.CLEAN) -> bool:
        """Refresh hook: rebuild only when policy, width or ``flags`` demand it."""
        if self.listing is None:
            return False
        if width is not None:
            self.width = width
        self.listing.detail_mode = self.detail_mode
        # A listing that was never rendered has no cursor entry yet.
        current = self.current_entry() if self.listing.config is not None else None
        result = update_listing(
            self.listing,
            self.surface,
            self.settings.config,
            self.width,
            current=current,
            flags=flags,
        )
        if result.rebuilt:
            if result.current_offset is not None:
                self.cursor_line = self._line_for_offset(result.current_offset)
            self.top_line = self._clamp_top(self.top_line)
        self.cursor_line = self._clamp_cursor(self.cursor_line)
        return result.rebuilt

    def refresh(self) -> None:
        """Rescan the same path keeping the cursor and scroll position."""
        if self.listing is None:
            return
        entry = self.current_entry()
        top_line = self.top_line
        self.scan(self.listing.root_path, target=entry.full_path if entry is not None else None)
        self.top_line = self._clamp_top(top_line)

    def parent(self) -> None:
        """List the parent directory with the cursor on the one just left."""
        if self.listing is None:
            return
        target = self.listing.root_path
        self.scan(target / "..", target=target)

    def select(self) -> Path | None:
        """Descend into a directory entry or return a regular file's path.

        Symlinks are followed here; entries that no longer resolve are
        ignored.
        """
        entry = self.current_entry()
        if entry is None:
            return None
        try:
            st = os.stat(entry.full_path)
        except OSError:
            return None
        if stat.S_ISDIR(st.st_mode):
            self.scan(entry.full_path)
            return None
        if stat.S_ISREG(st.st_mode):
            return entry.full_path
        return None

    # ------------------------------------------------------------------
    # Cursor and marks
    # ------------------------------------------------------------------

    def move(self, delta: int) -> None:
        self.cursor_line = self._clamp_cursor(self.cursor_line + delta)

    def scroll(self, delta: int) -> int:
        """Shift the first displayed line by ``delta``; rebuilds keep it."""
        self.top_line = self._clamp_top(self.top_line + delta)
        return self.top_line

    def mark(self, mark: str) -> None:
        """Set a one-character mark on the current entry and move down."""
        if len(mark) != 1:
            raise ValueError(f"mark must be a single character: {mark!r}")
        entry = self.current_entry()
        if entry is not None:
            entry.mark = mark
            self.update(flags=DirtyFlags.REBUILD)
        self.move(1)

    def unmark_backward(self) -> None:
        self.move(-1)
        entry = self.current_entry()
        if entry is not None:
            entry.mark = " "
            self.update(flags=DirtyFlags.REBUILD)

    def marked_entries(self) -> list[DirEntry]:
        if self.listing is None:
            return []
        return [entry for entry in self.listing.entries if entry.mark != " "]

    def execute(self) -> bool:
        """Apply pending marked operations (not available yet)."""
        self._status(NOT_IMPLEMENTED_MESSAGE)
        return False

    # ------------------------------------------------------------------
    # Policy commands
    # ------------------------------------------------------------------

    def sort(self, codes: str) -> bool:
        changed = self.settings.apply_sort_codes(codes)
        if changed:
            self.update()
        return changed

    def set_time_format(self, token: str) -> bool:
        changed = self.settings.set_time_format(token)
        if changed is None:
            self._status(f"Invalid time format: {token}")
            return False
        self.update()
        return True

    def toggle_human(self) -> SizeMode:
        mode = self.settings.cycle_size_mode()
        self.update()
        return mode

    def toggle_owner_mode(self) -> OwnerMode:
        mode = self.settings.cycle_owner_mode()
        self.update()
        return mode

    def cycle_details(self) -> DetailMode:
        self.detail_mode = next_detail_mode(self.detail_mode)
        self.update()
        return self.detail_mode

    def toggle_dot_files(self, value: bool | None = None) -> None:
        if value is None:
            value = not self.settings.config.filter.show_dot_files
        if self.settings.set_show_dot_files(value):
            self.update()
            self._status(f"dot files are {'visible' if value else 'hidden'}")


def open_dired(
    current_file: Path | str,
    settings: ListingSettings,
    surface: TextSurface | None = None,
    **kwargs,
) -> DiredView:
    """Open a listing of the directory holding ``current_file``.

    Directories and glob patterns are listed as given. The cursor starts on
    ``current_file`` when it is part of the listing.
    """
    target = canonical_path(current_file)
    path = target if target.is_dir() or is_file_pattern(target) else target.parent
    view = DiredView(settings, surface, **kwargs)
    view.scan(path, target=target)
    return view


__all__ = ["DEFAULT_WIDTH", "NOT_IMPLEMENTED_MESSAGE", "DiredView", "open_dired"]
