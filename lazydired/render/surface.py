"""Styled text surface the listing is rendered into.

``TextSurface`` is the narrow interface a host editor/terminal provides;
``ListingBuffer`` is the in-memory implementation used by the CLI and tests.
"""

from __future__ import annotations

import bisect
import enum
from dataclasses import dataclass
from typing import Protocol


class LineStyle(enum.Enum):
    """Style category attached to each run of rendered text."""

    NORMAL = "normal"
    HEADER = "header"
    DIRECTORY = "directory"
    FILENAME = "filename"


@dataclass(frozen=True)
class StyledLine:
    """One display line as a sequence of ``(style, text)`` runs."""

    spans: tuple[tuple[LineStyle, str], ...]

    @property
    def text(self) -> str:
        return "".join(text for _style, text in self.spans)


class TextSurface(Protocol):
    @property
    def offset(self) -> int:
        """Character offset where the next write lands."""

    def clear(self) -> None: ...

    def write(self, text: str, style: LineStyle = LineStyle.NORMAL) -> None: ...

    def line_of_offset(self, offset: int) -> int: ...

    def offset_of_line(self, line: int) -> int: ...

    def line_count(self) -> int: ...

    def lines(self) -> list[StyledLine]: ...


class ListingBuffer:
    """Append-only styled text buffer with offset/line mapping."""

    def __init__(self) -> None:
        self._spans: list[tuple[LineStyle, str]] = []
        self._length = 0
        self._line_starts: list[int] = [0]

    @property
    def offset(self) -> int:
        return self._length

    @property
    def text(self) -> str:
        return "".join(text for _style, text in self._spans)

    def clear(self) -> None:
        self._spans.clear()
        self._length = 0
        self._line_starts = [0]

    def write(self, text: str, style: LineStyle = LineStyle.NORMAL) -> None:
        if not text:
            return
        if self._spans and self._spans[-1][0] is style:
            self._spans[-1] = (style, self._spans[-1][1] + text)
        else:
            self._spans.append((style, text))
        start = self._length
        idx = text.find("\n")
        while idx >= 0:
            self._line_starts.append(start + idx + 1)
            idx = text.find("\n", idx + 1)
        self._length += len(text)

    def line_count(self) -> int:
        """Number of lines, not counting an empty tail after a final newline."""
        if self._line_starts[-1] == self._length:
            return len(self._line_starts) - 1
        return len(self._line_starts)

    def line_of_offset(self, offset: int) -> int:
        offset = max(0, min(offset, self._length))
        return bisect.bisect_right(self._line_starts, offset) - 1

    def offset_of_line(self, line: int) -> int:
        if line < 0:
            return 0
        if line >= len(self._line_starts):
            return self._length
        return self._line_starts[line]

    def lines(self) -> list[StyledLine]:
        """Split the buffer into styled display lines (newlines dropped)."""
        out: list[StyledLine] = []
        current: list[tuple[LineStyle, str]] = []
        for style, text in self._spans:
            pieces = text.split("\n")
            for idx, piece in enumerate(pieces):
                if idx > 0:
                    out.append(StyledLine(tuple(current)))
                    current = []
                if piece:
                    current.append((style, piece))
        if current:
            out.append(StyledLine(tuple(current)))
        return out


__all__ = ["LineStyle", "StyledLine", "TextSurface", "ListingBuffer"]
