"""Capability interface shared by listing engines."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..render.surface import StyledLine, TextSurface


class ListingView(Protocol):
    """What a host needs from any listing engine it composes.

    ``update`` is called on every display refresh and must be cheap when
    nothing changed.
    """

    surface: TextSurface
    cursor_line: int

    def scan(self, path: Path | str, target: Path | str | None = None) -> None: ...

    def select(self) -> Path | None: ...

    def refresh(self) -> None: ...

    def update(self, width: int | None = None) -> bool: ...

    def lines(self) -> list[StyledLine]: ...


__all__ = ["ListingView"]
