"""Field measurement and adaptive optional-column layout.

``measure_fields`` computes the widest formatted value of every field;
``layout_columns`` turns those widths and the display width into the set
of optional columns to show.
"""

from __future__ import annotations

from collections.abc import Iterable

from .formatting import block_count, format_date, format_group, format_owner, format_size
from .listing_model.types import Column, ColumnLayout, DirEntry, FieldWidths
from .settings import DetailMode, ListingConfig, OwnerMode

NAME_WIDTH_MIN = 16
NAME_WIDTH_MAX = 40
MODE_WIDTH = 10

# Greedy drop order for auto mode, with the separator each column costs.
AUTO_PRIORITY: tuple[tuple[Column, int], ...] = (
    (Column.SIZE, 2),
    (Column.DATE, 2),
    (Column.MODE, 1),
    (Column.OWNER, 1),
    (Column.GROUP, 1),
    (Column.LINKS, 1),
)
COLUMN_SEPARATORS: dict[Column, int] = {Column.BLOCKS: 1, **dict(AUTO_PRIORITY)}


def measure_fields(
    entries: Iterable[DirEntry],
    config: ListingConfig,
    detail_mode: DetailMode,
    now: int,
) -> FieldWidths:
    """Return per-field maximum widths; only names are measured when details are hidden."""
    widths = FieldWidths()
    for entry in entries:
        widths.name = max(widths.name, len(entry.name))
        if detail_mode is DetailMode.HIDE:
            continue
        widths.blocks = max(widths.blocks, len(str(block_count(entry.size_bytes))))
        widths.mode = MODE_WIDTH
        widths.links = max(widths.links, len(str(entry.link_count)))
        widths.owner = max(widths.owner, len(format_owner(entry.owner_id, config.owner_mode)))
        widths.group = max(widths.group, len(format_group(entry.group_id, config.owner_mode)))
        widths.size = max(
            widths.size,
            len(format_size(entry.mode, entry.device_id, entry.size_bytes, config.size_mode)),
        )
        widths.date = max(widths.date, len(format_date(entry.modified_time, config.time_format, now)))
    return widths


def field_width(widths: FieldWidths, column: Column) -> int:
    return {
        Column.BLOCKS: widths.blocks,
        Column.MODE: widths.mode,
        Column.LINKS: widths.links,
        Column.OWNER: widths.owner,
        Column.GROUP: widths.group,
        Column.SIZE: widths.size,
        Column.DATE: widths.date,
    }[column]


def clamp_name_width(name_width: int) -> int:
    return max(NAME_WIDTH_MIN, min(NAME_WIDTH_MAX, name_width))


def layout_columns(
    widths: FieldWidths,
    display_width: int,
    detail_mode: DetailMode,
    owner_mode: OwnerMode = OwnerMode.NAME,
    show_blocks: bool = False,
) -> ColumnLayout:
    """Choose visible optional columns for ``display_width`` character cells.

    In auto mode columns are charged against the budget left after the
    clamped name column, in ``AUTO_PRIORITY`` order; the first column that
    overdraws the budget is dropped and, since the budget stays negative,
    so is every column after it. Block counts never appear in auto mode.
    """
    name_width = clamp_name_width(widths.name)
    if detail_mode is DetailMode.HIDE:
        return ColumnLayout(visible=Column.NONE, widths={}, name_width=name_width)

    visible = Column.ALL
    if not show_blocks or detail_mode is DetailMode.AUTO:
        visible &= ~Column.BLOCKS
    if owner_mode is OwnerMode.HIDDEN:
        visible &= ~(Column.OWNER | Column.GROUP)

    if detail_mode is DetailMode.AUTO:
        budget = display_width - name_width
        for column, separator in AUTO_PRIORITY:
            if not visible & column:
                continue
            budget -= field_width(widths, column) + separator
            if budget < 0:
                visible &= ~column

    column_widths = {
        column: field_width(widths, column)
        for column in (Column.BLOCKS, Column.MODE, Column.LINKS, Column.OWNER, Column.GROUP, Column.SIZE, Column.DATE)
        if visible & column
    }
    return ColumnLayout(visible=visible, widths=column_widths, name_width=name_width)


def columns_budget(layout: ColumnLayout) -> int:
    """Cells consumed by the visible optional columns including separators."""
    return sum(width + COLUMN_SEPARATORS[column] for column, width in layout.widths.items())


__all__ = [
    "NAME_WIDTH_MIN",
    "NAME_WIDTH_MAX",
    "AUTO_PRIORITY",
    "COLUMN_SEPARATORS",
    "measure_fields",
    "field_width",
    "clamp_name_width",
    "layout_columns",
    "columns_budget",
]
