"""Dirty-flag driven rebuild of a listing's derived state and display.

Each refresh compares the policy snapshot cached on the listing with the
current ``ListingConfig`` (plus display width and detail mode) and reruns
only the stale stages. Any stage rerun forces a full re-render; when no
flag is set the update is a no-op.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from .columns import layout_columns, measure_fields
from .filtering import apply_filter
from .listing_model.types import DirectoryListing, DirEntry, DirtyFlags
from .render.listing import render_listing
from .render.surface import TextSurface
from .settings import ListingConfig
from .sorting import sort_entries

LOGGER = logging.getLogger(__name__)

UPSTREAM_FLAGS = DirtyFlags.SORT | DirtyFlags.FILTER | DirtyFlags.COLUMNS


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of one ``update_listing`` call.

    ``current_offset`` is the render offset of the entry that was current
    before the rebuild, or ``None`` when there was none or no rebuild ran.
    """

    rebuilt: bool
    flags: DirtyFlags = DirtyFlags.CLEAN
    current_offset: int | None = None


def pending_flags(
    listing: DirectoryListing,
    config: ListingConfig,
    display_width: int,
    flags: DirtyFlags = DirtyFlags.CLEAN,
) -> DirtyFlags:
    """Return the stages that must rerun for ``config`` at ``display_width``."""
    flags |= listing.dirty
    previous = listing.config
    if previous is None:
        flags |= DirtyFlags.ALL
    else:
        if previous.sort != config.sort:
            flags |= DirtyFlags.SORT
        if previous.filter != config.filter:
            flags |= DirtyFlags.FILTER
        if (
            previous.time_format != config.time_format
            or previous.size_mode != config.size_mode
            or previous.owner_mode != config.owner_mode
            or previous.show_blocks != config.show_blocks
        ):
            flags |= DirtyFlags.COLUMNS
    if listing.detail_mode != listing.last_detail_mode or display_width != listing.last_width:
        flags |= DirtyFlags.COLUMNS
    if flags & UPSTREAM_FLAGS:
        flags |= DirtyFlags.REBUILD
    return flags


def update_listing(
    listing: DirectoryListing,
    surface: TextSurface,
    config: ListingConfig,
    display_width: int,
    *,
    current: DirEntry | None = None,
    flags: DirtyFlags = DirtyFlags.CLEAN,
    now: int | None = None,
) -> UpdateResult:
    """Bring ``listing`` and ``surface`` up to date with ``config``.

    ``current`` is the entry under the cursor before the update; it is
    remembered by path and located again after the rebuild.
    """
    flags = pending_flags(listing, config, display_width, flags)
    if not flags & DirtyFlags.REBUILD:
        return UpdateResult(rebuilt=False)

    LOGGER.debug("rebuilding %s: %r", listing.root_path, flags)
    if current is not None:
        listing.current_path = current.full_path
    if now is None:
        now = int(time.time())

    if flags & DirtyFlags.SORT:
        listing.entries = sort_entries(listing.entries, config.sort)
    if flags & DirtyFlags.FILTER:
        listing.counts = apply_filter(listing.entries, config.filter)
    if flags & DirtyFlags.COLUMNS:
        listing.widths = measure_fields(listing.entries, config, listing.detail_mode, now)

    listing.layout = layout_columns(
        listing.widths,
        display_width,
        listing.detail_mode,
        owner_mode=config.owner_mode,
        show_blocks=config.show_blocks,
    )
    listing.config = config
    listing.last_detail_mode = listing.detail_mode
    listing.last_width = display_width

    render_listing(listing, surface, config, now)
    listing.dirty = DirtyFlags.CLEAN

    remembered = listing.find_entry(listing.current_path)
    current_offset = remembered.render_offset if remembered is not None else None
    return UpdateResult(rebuilt=True, flags=flags, current_offset=current_offset)


__all__ = ["UpdateResult", "pending_flags", "update_listing"]
