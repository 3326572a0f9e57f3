"""Listing engines exposed to a host through the ``ListingView`` interface."""

from __future__ import annotations

from .base import ListingView
from .dired import DiredView, open_dired
from .filelist import FileListView, format_file_entry

__all__ = ["ListingView", "DiredView", "open_dired", "FileListView", "format_file_entry"]
