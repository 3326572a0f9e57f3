"""ANSI colouring of styled listing lines through Pygments styles.

Listing style categories are mapped onto Pygments token types so any
installed Pygments style can colour a listing the way an editor colours
strings, comments and function names.
"""

from __future__ import annotations

import functools
import io
from collections.abc import Iterable

from pygments.formatters import Terminal256Formatter
from pygments.styles import get_style_by_name
from pygments.token import Token
from pygments.util import ClassNotFound

from .surface import LineStyle, StyledLine

DEFAULT_STYLE = "monokai"

STYLE_TOKENS = {
    LineStyle.NORMAL: Token.Text,
    LineStyle.HEADER: Token.Literal.String,
    LineStyle.DIRECTORY: Token.Comment,
    LineStyle.FILENAME: Token.Name.Function,
}


@functools.lru_cache(maxsize=32)
def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@functools.lru_cache(maxsize=32)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    return Terminal256Formatter(style=style)


def plain_text(lines: Iterable[StyledLine]) -> str:
    return "".join(line.text + "\n" for line in lines)


def render_ansi(lines: Iterable[StyledLine], style: str | None = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Render styled lines as terminal text, coloured unless ``no_color``."""
    if no_color:
        return plain_text(lines)

    tokens: list[tuple[object, str]] = []
    for line in lines:
        for line_style, text in line.spans:
            tokens.append((STYLE_TOKENS[line_style], text))
        tokens.append((Token.Text, "\n"))

    out = io.StringIO()
    _formatter_for_style(normalize_style(style)).format(tokens, out)
    return out.getvalue()


__all__ = ["DEFAULT_STYLE", "STYLE_TOKENS", "normalize_style", "plain_text", "render_ansi"]
