"""Regenerate a listing's display text into a ``TextSurface``.

The surface is cleared and rewritten from scratch: a two-line header
followed by one line per visible entry. Every entry, hidden or not, has its
``render_offset`` set to where its line starts (or would start).
"""

from __future__ import annotations

from ..formatting import (
    block_count,
    format_date,
    format_group,
    format_number,
    format_owner,
    format_size,
    permission_string,
    read_link_target,
    trail_char,
)
from ..listing_model.types import Column, ColumnLayout, DirectoryListing, DirEntry, ListingCounts
from ..settings import ListingConfig, SizeMode
from .surface import LineStyle, TextSurface

HEADER_LINES = 2


def inflect(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def summary_text(counts: ListingCounts, size_mode: SizeMode) -> str:
    """One-line description of directory/file counts and visible bytes."""
    parts: list[str] = []
    if counts.dirs:
        parts.append(f"{counts.dirs} {inflect(counts.dirs, 'directory', 'directories')}")
    if counts.hidden_dirs:
        parts.append(
            f"{counts.hidden_dirs} {inflect(counts.hidden_dirs, 'hidden directory', 'hidden directories')}"
        )
    if counts.files:
        parts.append(f"{counts.files} {inflect(counts.files, 'file', 'files')}")
    if counts.hidden_files:
        parts.append(f"{counts.hidden_files} {inflect(counts.hidden_files, 'hidden file', 'hidden files')}")
    if counts.total_bytes:
        amount = format_number(counts.total_bytes, size_mode)
        parts.append(f"{amount} {inflect(counts.total_bytes, 'byte', 'bytes')}")
    if counts.is_empty:
        parts.append("empty")
    return ", ".join(parts)


def format_entry_prefix(entry: DirEntry, layout: ColumnLayout, config: ListingConfig, now: int) -> str:
    """Mark plus visible detail columns, ending where the name starts."""
    widths = layout.widths
    out = [f"{entry.mark} "]
    if layout.shows(Column.BLOCKS):
        out.append(f"{block_count(entry.size_bytes):>{widths[Column.BLOCKS]}} ")
    if layout.shows(Column.MODE):
        out.append(f"{permission_string(entry.mode)} ")
    if layout.shows(Column.LINKS):
        out.append(f"{entry.link_count:>{widths[Column.LINKS]}} ")
    if layout.shows(Column.OWNER):
        out.append(f"{format_owner(entry.owner_id, config.owner_mode):<{widths[Column.OWNER]}} ")
    if layout.shows(Column.GROUP):
        out.append(f"{format_group(entry.group_id, config.owner_mode):<{widths[Column.GROUP]}} ")
    if layout.shows(Column.SIZE):
        size = format_size(entry.mode, entry.device_id, entry.size_bytes, config.size_mode)
        out.append(f" {size:>{widths[Column.SIZE]}}  ")
    if layout.shows(Column.DATE):
        out.append(f"{format_date(entry.modified_time, config.time_format, now)}  ")
    return "".join(out)


def format_entry_name(entry: DirEntry) -> str:
    """Name with its type suffix and, for symlinks, the readable target."""
    text = entry.name + trail_char(entry.mode)
    if entry.is_symlink:
        target = read_link_target(entry.full_path)
        if target is not None:
            text += f" -> {target}"
    return text


def write_header(listing: DirectoryListing, surface: TextSurface, size_mode: SizeMode) -> None:
    surface.write("  Directory of ", LineStyle.HEADER)
    surface.write(str(listing.root_path), LineStyle.DIRECTORY)
    surface.write(f"\n    {summary_text(listing.counts, size_mode)}\n", LineStyle.HEADER)


def render_listing(listing: DirectoryListing, surface: TextSurface, config: ListingConfig, now: int) -> None:
    """Clear ``surface`` and write the whole listing."""
    surface.clear()
    write_header(listing, surface, config.size_mode)
    for entry in listing.entries:
        entry.render_offset = surface.offset
        if entry.is_hidden:
            continue
        prefix = format_entry_prefix(entry, listing.layout, config, now)
        listing.name_column = len(prefix)
        surface.write(prefix, LineStyle.NORMAL)
        surface.write(format_entry_name(entry), LineStyle.DIRECTORY if entry.is_dir else LineStyle.FILENAME)
        surface.write("\n", LineStyle.NORMAL)


__all__ = [
    "HEADER_LINES",
    "inflect",
    "summary_text",
    "format_entry_prefix",
    "format_entry_name",
    "write_header",
    "render_listing",
]
