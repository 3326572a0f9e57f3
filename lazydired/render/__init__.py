"""Listing rendering: styled text surface, row formatting and ANSI output."""

from __future__ import annotations

from .ansi import DEFAULT_STYLE, normalize_style, plain_text, render_ansi
from .listing import HEADER_LINES, format_entry_name, format_entry_prefix, render_listing, summary_text
from .surface import LineStyle, ListingBuffer, StyledLine, TextSurface

__all__ = [
    "DEFAULT_STYLE",
    "normalize_style",
    "plain_text",
    "render_ansi",
    "HEADER_LINES",
    "format_entry_name",
    "format_entry_prefix",
    "render_listing",
    "summary_text",
    "LineStyle",
    "ListingBuffer",
    "StyledLine",
    "TextSurface",
]
