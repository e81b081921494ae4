"""Pure geometry over selection descriptors.

Every descriptor is viewed as a rectangle in (row, column) index space.
``Rows`` are unbounded on the column axis and ``Columns`` on the row axis;
those open ends are represented with ``math.inf`` so intersection and
containment need no grid extent.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Tuple

from .models import (
    CellRange,
    GridContext,
    InvalidRangeError,
    SelectionDescriptor,
    SelectionType,
    coerce_context,
)
from .normalize import normalize_selection

Span = Tuple[float, float]

_UNBOUNDED: Span = (-math.inf, math.inf)


def row_extent(descriptor: SelectionDescriptor) -> Span:
    item = normalize_selection(descriptor)
    if item.type is SelectionType.COLUMNS:
        return _UNBOUNDED
    return (item.start_row, item.end_row)


def column_extent(descriptor: SelectionDescriptor) -> Span:
    item = normalize_selection(descriptor)
    if item.type is SelectionType.ROWS:
        return _UNBOUNDED
    return (item.start_column, item.end_column)


def ranges_touch(start0: float, end0: float, start1: float, end1: float) -> bool:
    """True when two inclusive ranges overlap or are directly adjacent."""

    return start1 <= end0 + 1 and start0 <= end1 + 1


def ranges_overlap(start0: float, end0: float, start1: float, end1: float) -> bool:
    return start1 <= end0 and start0 <= end1


def _span_contains(outer: Span, inner: Span) -> bool:
    return outer[0] <= inner[0] and inner[1] <= outer[1]


def _clip(left: Span, right: Span) -> Optional[Span]:
    start = max(left[0], right[0])
    end = min(left[1], right[1])
    if start > end:
        return None
    return (start, end)


def is_same_cells_block(
    block0: SelectionDescriptor, block1: SelectionDescriptor
) -> bool:
    return normalize_selection(block0) == normalize_selection(block1)


def get_intersection(
    sel0: SelectionDescriptor, sel1: SelectionDescriptor
) -> Optional[SelectionDescriptor]:
    """Overlap of two descriptors, or ``None`` when they share no cell."""

    first = normalize_selection(sel0)
    second = normalize_selection(sel1)
    rows = _clip(row_extent(first), row_extent(second))
    columns = _clip(column_extent(first), column_extent(second))
    if rows is None or columns is None:
        return None

    if first.type is SelectionType.ROWS and second.type is SelectionType.ROWS:
        return SelectionDescriptor.rows(int(rows[0]), int(rows[1]))
    if first.type is SelectionType.COLUMNS and second.type is SelectionType.COLUMNS:
        return SelectionDescriptor.columns(int(columns[0]), int(columns[1]))
    return SelectionDescriptor.cells(
        int(rows[0]), int(columns[0]), int(rows[1]), int(columns[1])
    )


def contains(outer: SelectionDescriptor, inner: SelectionDescriptor) -> bool:
    """True when every cell of ``inner`` lies inside ``outer``."""

    return _span_contains(row_extent(outer), row_extent(inner)) and _span_contains(
        column_extent(outer), column_extent(inner)
    )


def covers_cell(descriptor: SelectionDescriptor, row: int, column: int) -> bool:
    top, bottom = row_extent(descriptor)
    left, right = column_extent(descriptor)
    return top <= row <= bottom and left <= column <= right


def to_cell_range(
    descriptor: SelectionDescriptor,
    context: GridContext | Mapping[str, Any] | None = None,
) -> CellRange:
    """Project ``descriptor`` onto a finite rectangle.

    ``Rows`` and ``Columns`` take their open axis from ``context``.
    """

    item = normalize_selection(descriptor)
    if item.is_cells_like:
        return CellRange(item.start_row, item.start_column, item.end_row, item.end_column)

    grid = coerce_context(context)
    if grid is None:
        raise InvalidRangeError(
            f"Grid extent is required to project a {item.type.label} selection",
            descriptor=item,
        )
    if item.type is SelectionType.ROWS:
        if grid.columns == 0:
            raise InvalidRangeError("Grid has no columns", descriptor=item)
        return CellRange(item.start_row, 0, item.end_row, grid.last_column)
    if grid.rows == 0:
        raise InvalidRangeError("Grid has no rows", descriptor=item)
    return CellRange(0, item.start_column, grid.last_row, item.end_column)


def range_to_selection(cell_range: CellRange) -> SelectionDescriptor:
    return SelectionDescriptor.cells(
        cell_range.start_row,
        cell_range.start_column,
        cell_range.end_row,
        cell_range.end_column,
    )


__all__ = [
    "Span",
    "column_extent",
    "contains",
    "covers_cell",
    "get_intersection",
    "is_same_cells_block",
    "range_to_selection",
    "ranges_overlap",
    "ranges_touch",
    "row_extent",
    "to_cell_range",
]
