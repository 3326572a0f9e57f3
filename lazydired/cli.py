"""Command-line front door for lazydired.

Parses CLI options, merges them over the persisted listing policy, and
prints one rendered listing of the target directory or glob pattern.
"""

from __future__ import annotations

import argparse
import locale
import logging
import os
import shutil
import sys
from dataclasses import replace
from pathlib import Path

from . import config as config_store
from .render.ansi import DEFAULT_STYLE, render_ansi
from .settings import (
    DetailMode,
    ListingConfig,
    ListingSettings,
    OwnerMode,
    SizeMode,
    TimeFormat,
    apply_sort_codes,
    parse_time_format,
    time_format_tokens,
)
from .views.dired import open_dired

DEBUG_ENV_VAR = "LAZYDIRED_DEBUG"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _time_format(value: str) -> TimeFormat:
    """argparse type for time-format tokens."""
    parsed = parse_time_format(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(
            f"unknown time format {value!r} (choose from {', '.join(time_format_tokens())})"
        )
    return parsed


def _default_render_width() -> int:
    """Resolve default listing width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def configure_logging(debug: bool) -> None:
    if debug or os.environ.get(DEBUG_ENV_VAR):
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(levelname)s] %(name)s: %(message)s",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List a directory with adaptive detail columns.")
    parser.add_argument("path", nargs="?", default=None, help="Directory or glob pattern. Defaults to current directory.")
    parser.add_argument("--sort", metavar="CODES", default=None, help="Sort order codes, any combination of `nesdgur+-`.")
    parser.add_argument(
        "--time-format",
        type=_time_format,
        default=None,
        help=f"File time format ({', '.join(time_format_tokens())}).",
    )
    parser.add_argument("--human", choices=[mode.value for mode in SizeMode], default=None, help="Size format.")
    owner = parser.add_mutually_exclusive_group()
    owner.add_argument("--numeric-ids", action="store_true", help="Show numeric owner and group ids.")
    owner.add_argument("--hide-owner", action="store_true", help="Never show owner and group columns.")
    parser.add_argument(
        "--details",
        choices=[mode.value for mode in DetailMode],
        default=DetailMode.AUTO.value,
        help="Detail column visibility.",
    )
    dots = parser.add_mutually_exclusive_group()
    dots.add_argument("--show-hidden", action="store_true", help="Show entries starting with `.`.")
    dots.add_argument("--hide-dot-files", action="store_true", help="Hide entries starting with `.`.")
    parser.add_argument("--show-system-files", action="store_true", help="Show .DS_Store system files.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Display width (default: terminal width).")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name used for colours.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--save", action="store_true", help="Persist the effective listing options.")
    parser.add_argument("--debug", action="store_true", help="Log debug information to stderr.")
    return parser


def build_config(args: argparse.Namespace, base: ListingConfig) -> ListingConfig:
    """Overlay explicit CLI options on ``base``."""
    listing_config = base
    if args.sort is not None:
        listing_config = replace(listing_config, sort=apply_sort_codes(listing_config.sort, args.sort))
    if args.time_format is not None:
        listing_config = replace(listing_config, time_format=args.time_format)
    if args.human is not None:
        listing_config = replace(listing_config, size_mode=SizeMode(args.human))
    if args.numeric_ids:
        listing_config = replace(listing_config, owner_mode=OwnerMode.NUMERIC)
    elif args.hide_owner:
        listing_config = replace(listing_config, owner_mode=OwnerMode.HIDDEN)

    listing_filter = listing_config.filter
    if args.show_hidden:
        listing_filter = replace(listing_filter, show_dot_files=True)
    elif args.hide_dot_files:
        listing_filter = replace(listing_filter, show_dot_files=False)
    if args.show_system_files:
        listing_filter = replace(listing_filter, show_system_files=True)
    return replace(listing_config, filter=listing_filter)


def render_directory(
    path: Path,
    listing_config: ListingConfig,
    width: int,
    detail_mode: DetailMode = DetailMode.AUTO,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> str:
    """Render the listing for ``path`` as terminal text."""
    view = open_dired(path, ListingSettings(listing_config), width=width, detail_mode=detail_mode)
    return render_ansi(view.lines(), style=style, no_color=no_color)


def write_output(text: str) -> None:
    """Write listing text to stdout.

    File names that are not valid in the filesystem encoding arrive as lone
    surrogates; their original bytes are written back unchanged.
    """
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(text)
        return
    encoding = sys.stdout.encoding or "utf-8"
    try:
        data = text.encode(encoding, "surrogateescape")
    except UnicodeEncodeError:
        data = text.encode(encoding, "replace")
    sys.stdout.flush()
    buffer.write(data)
    buffer.flush()


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the listing of a directory or pattern.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    configure_logging(args.debug)
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        pass

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists() and not path.is_symlink() and not path.parent.is_dir():
        raise SystemExit(f"Path not found: {path}")

    listing_config = build_config(args, config_store.load_listing_config())
    if args.save:
        config_store.save_listing_config(listing_config)

    width = args.width if args.width is not None else _default_render_width()
    no_color = args.no_color or not sys.stdout.isatty()
    write_output(
        render_directory(
            path,
            listing_config,
            width,
            detail_mode=DetailMode(args.details),
            style=args.style,
            no_color=no_color,
        )
    )


if __name__ == "__main__":
    main()
