"""Filesystem scanning into ``DirectoryListing`` snapshots.

A scan is one synchronous pass: enumerate the directory (or the parent of a
missing path, matching its last segment as a glob pattern), ``lstat`` every
candidate and build one ``DirEntry`` per survivor. Candidates whose metadata
cannot be read are skipped.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path

from .types import DirectoryListing, DirEntry

LOGGER = logging.getLogger(__name__)

GLOB_CHARS = frozenset("*?[")


def canonical_path(path: Path | str) -> Path:
    """Absolute, ``..``-collapsed form of ``path`` without resolving symlinks."""
    return Path(os.path.abspath(os.path.expanduser(os.fspath(path))))


def is_file_pattern(path: Path | str) -> bool:
    return any(char in GLOB_CHARS for char in Path(path).name)


def split_scan_target(root_path: Path) -> tuple[Path, str | None]:
    """Return ``(directory, pattern)`` to enumerate for ``root_path``.

    ``pattern`` is ``None`` when ``root_path`` is itself a directory.
    """
    if root_path.is_dir():
        return root_path, None
    return root_path.parent, root_path.name


def entry_from_stat(name: str, full_path: Path, st: os.stat_result) -> DirEntry:
    return DirEntry(
        name=name,
        full_path=full_path,
        mode=st.st_mode,
        link_count=st.st_nlink,
        owner_id=st.st_uid,
        group_id=st.st_gid,
        device_id=getattr(st, "st_rdev", 0),
        modified_time=int(st.st_mtime),
        size_bytes=st.st_size,
    )


def scan_entries(directory: Path, pattern: str | None = None) -> tuple[list[DirEntry], Exception | None]:
    """List entries of ``directory`` matching ``pattern``.

    Returns ``(entries, scan_error)``; ``scan_error`` is set when the
    directory itself cannot be enumerated.
    """
    entries: list[DirEntry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                name = child.name
                if pattern is not None and not fnmatch.fnmatchcase(name, pattern):
                    continue
                try:
                    st = child.stat(follow_symlinks=False)
                except OSError as exc:
                    LOGGER.debug("skipping %s: %s", child.path, exc)
                    continue
                entries.append(entry_from_stat(name, Path(child.path), st))
    except OSError as exc:
        LOGGER.debug("cannot scan %s: %s", directory, exc)
        return [], exc
    return entries, None


def scan(root_path: Path | str) -> DirectoryListing:
    """Take a fresh listing snapshot of ``root_path``."""
    root = canonical_path(root_path)
    directory, pattern = split_scan_target(root)
    entries, scan_error = scan_entries(directory, pattern)
    LOGGER.debug("scanned %s: %d entries", root, len(entries))
    return DirectoryListing(root_path=root, entries=entries, scan_error=scan_error)


def probe_path(path: Path | str) -> int:
    """Score how well a directory listing suits ``path`` (0 = not at all)."""
    candidate = Path(path)
    if candidate.is_dir():
        return 95
    if not candidate.exists() and not candidate.is_symlink() and is_file_pattern(candidate):
        return 90
    return 0


def default_directory(path: Path | str) -> str | None:
    """Directory, with a trailing slash, to offer as a default for prompts."""
    text = os.fspath(path)
    if not text:
        return None
    if os.path.isdir(text):
        return os.path.join(text, "")
    return os.path.join(os.path.dirname(text), "")


__all__ = [
    "canonical_path",
    "is_file_pattern",
    "split_scan_target",
    "entry_from_stat",
    "scan_entries",
    "scan",
    "probe_path",
    "default_directory",
]
