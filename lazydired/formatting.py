"""Fixed-text renderings of raw stat fields.

Sizes, timestamps, permission strings, owner/group names and the small
decorations (trailing type character, link target) shown on listing rows.
All helpers are pure except the name and link lookups, which degrade to a
numeric id or ``None`` on failure.
"""

from __future__ import annotations

import functools
import os
import stat
import time
from pathlib import Path

from .settings import OwnerMode, SizeMode, TimeFormat

try:
    import grp
    import pwd
except ImportError:
    grp = None
    pwd = None

BLOCK_SIZE = 1024
COMPACT_WINDOW_SECONDS = 182 * 86400
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
DATE_WIDTHS: dict[TimeFormat, int] = {
    TimeFormat.COMPACT: 12,
    TimeFormat.DOS: 18,
    TimeFormat.DOS_LONG: 21,
    TimeFormat.TOUCH: 10,
    TimeFormat.TOUCH_LONG: 13,
    TimeFormat.FULL: 20,
    TimeFormat.SECONDS: 10,
}
# Native dev_t width used when the host cannot split device numbers itself.
DEV_T_BYTES = 4

_DECIMAL_SUFFIXES = "BkMGTPEZY"
_BINARY_SUFFIXES = "BKMGTPEZY"


def format_number(number: int, size_mode: SizeMode) -> str:
    """Format a byte count exactly or with a one-letter magnitude suffix.

    Human modes keep three significant characters: ``1.0k`` below the
    one-decimal cutoff (10000 decimal, 10200 binary), otherwise an integer
    with its suffix.
    """
    if size_mode is SizeMode.EXACT:
        return str(number)

    if size_mode is SizeMode.DECIMAL:
        suffixes = _DECIMAL_SUFFIXES
        idx = 0
        while idx + 1 < len(suffixes) and number >= 1000:
            if number < 10000:
                return f"{number // 1000}.{(number // 100) % 10}{suffixes[idx + 1]}"
            number //= 1000
            idx += 1
        return f"{number}{suffixes[idx]}"

    suffixes = _BINARY_SUFFIXES
    idx = 0
    while idx + 1 < len(suffixes) and number >= 1000:
        if number < 10200:
            return f"{number // 1020}.{(number // 102) % 10}{suffixes[idx + 1]}"
        number >>= 10
        idx += 1
    return f"{number}{suffixes[idx]}"


def split_device_id(rdev: int, dev_t_bytes: int = DEV_T_BYTES) -> tuple[int, int]:
    """Split a raw device id into ``(major, minor)`` by field width.

    Two-byte fields split 8/8; wider fields split 8/24.
    """
    if dev_t_bytes == 2:
        return (rdev >> 8) & 0xFF, rdev & 0xFF
    return (rdev >> 24) & 0xFF, rdev & 0xFFFFFF


def device_numbers(rdev: int) -> tuple[int, int]:
    """Return ``(major, minor)`` using the host's own encoding when known."""
    if hasattr(os, "major") and hasattr(os, "minor"):
        try:
            return os.major(rdev), os.minor(rdev)
        except (OverflowError, ValueError):
            pass
    return split_device_id(rdev)


def format_size(mode: int, rdev: int, size: int, size_mode: SizeMode) -> str:
    """Format the size column; device nodes show ``major, minor`` instead."""
    if stat.S_ISCHR(mode) or stat.S_ISBLK(mode):
        major, minor = device_numbers(rdev)
        return f"{major:3d}, {minor:3d}"
    return format_number(size, size_mode)


def block_count(size: int, block_size: int = BLOCK_SIZE) -> int:
    return (size + block_size - 1) // block_size


def in_compact_window(timestamp: int, now: int) -> bool:
    """Whether ``timestamp`` is recent enough to show a time of day."""
    return now - COMPACT_WINDOW_SECONDS < timestamp < now + COMPACT_WINDOW_SECONDS


def format_date(timestamp: int, time_format: TimeFormat, now: int) -> str:
    """Format a modification time in one of the listing time formats.

    Timestamps that cannot be converted to a calendar date render as blanks
    of the format's width.
    """
    if time_format is TimeFormat.SECONDS:
        return f"{timestamp:10d}"
    try:
        tm = time.localtime(timestamp)
    except (OverflowError, OSError, ValueError):
        return " " * DATE_WIDTHS[time_format]
    if not 1 <= tm.tm_mon <= 12:
        return " " * DATE_WIDTHS[time_format]

    month = MONTH_NAMES[tm.tm_mon - 1]
    if time_format in (TimeFormat.TOUCH, TimeFormat.TOUCH_LONG):
        text = f"{tm.tm_year % 100:02d}{tm.tm_mon:02d}{tm.tm_mday:02d}{tm.tm_hour:02d}{tm.tm_min:02d}"
        if time_format is TimeFormat.TOUCH_LONG:
            text += f".{tm.tm_sec:02d}"
        return text
    if time_format in (TimeFormat.DOS, TimeFormat.DOS_LONG):
        text = f"{month} {tm.tm_mday:2d} {tm.tm_year:4d}  {tm.tm_hour:2d}:{tm.tm_min:02d}"
        if time_format is TimeFormat.DOS_LONG:
            text += f":{tm.tm_sec:02d}"
        return text
    if time_format is TimeFormat.FULL:
        return f"{month} {tm.tm_mday:2d} {tm.tm_hour:02d}:{tm.tm_min:02d}:{tm.tm_sec:02d} {tm.tm_year:4d}"
    if in_compact_window(timestamp, now):
        return f"{month} {tm.tm_mday:2d} {tm.tm_hour:02d}:{tm.tm_min:02d}"
    return f"{month} {tm.tm_mday:2d}  {tm.tm_year:4d}"


def permission_string(mode: int) -> str:
    """Return the 10-character ``ls -l`` style mode string."""
    return stat.filemode(mode)


def type_glyph(mode: int) -> str:
    return stat.filemode(mode)[0]


def trail_char(mode: int) -> str:
    """Return the ``ls -F`` style type suffix, or an empty string."""
    if stat.S_ISLNK(mode):
        return "@"
    if stat.S_ISDIR(mode):
        return "/"
    if stat.S_ISSOCK(mode):
        return "="
    if stat.S_ISFIFO(mode):
        return "|"
    if mode & stat.S_IXUSR:
        return "*"
    return ""


@functools.lru_cache(maxsize=256)
def user_name(uid: int) -> str | None:
    if pwd is None:
        return None
    try:
        return pwd.getpwuid(uid).pw_name or None
    except (KeyError, OverflowError):
        return None


@functools.lru_cache(maxsize=256)
def group_name(gid: int) -> str | None:
    if grp is None:
        return None
    try:
        return grp.getgrgid(gid).gr_name or None
    except (KeyError, OverflowError):
        return None


def format_owner(uid: int, owner_mode: OwnerMode) -> str:
    """Owner name, or the numeric id when asked for or when lookup fails."""
    if owner_mode is OwnerMode.NAME:
        name = user_name(uid)
        if name:
            return name
    return str(uid)


def format_group(gid: int, owner_mode: OwnerMode) -> str:
    if owner_mode is OwnerMode.NAME:
        name = group_name(gid)
        if name:
            return name
    return str(gid)


def read_link_target(path: Path) -> str | None:
    """Best-effort symlink target text; ``None`` when unreadable."""
    try:
        target = os.readlink(path)
    except (OSError, ValueError):
        return None
    return target or None


__all__ = [
    "BLOCK_SIZE",
    "COMPACT_WINDOW_SECONDS",
    "DATE_WIDTHS",
    "format_number",
    "split_device_id",
    "device_numbers",
    "format_size",
    "block_count",
    "in_compact_window",
    "format_date",
    "type_glyph",
    "permission_string",
    "trail_char",
    "user_name",
    "group_name",
    "format_owner",
    "format_group",
    "read_link_target",
]
