"""Fusing two descriptors into one when their union stays a single region."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional

from grid_selection.regions import (
    GridContext,
    InvalidRangeError,
    SelectionDescriptor,
    SelectionType,
    coerce_context,
    contains,
    normalize_selection,
    ranges_touch,
)


def _spans_all_columns(cells: SelectionDescriptor, grid: GridContext) -> bool:
    return grid.columns > 0 and cells.start_column <= 0 and cells.end_column >= grid.last_column


def _spans_all_rows(cells: SelectionDescriptor, grid: GridContext) -> bool:
    return grid.rows > 0 and cells.start_row <= 0 and cells.end_row >= grid.last_row


def merge_cells_into_rows_or_columns(
    cells: SelectionDescriptor,
    rows_or_columns: SelectionDescriptor,
    context: GridContext | Mapping[str, Any] | None = None,
) -> Optional[SelectionDescriptor]:
    """Absorb a cells block into a Rows/Columns descriptor.

    The block is absorbed when it lies inside the row (or column) span. With a
    grid ``context`` a block covering the whole complementary axis also widens
    a touching span. Returns ``None`` when the two must stay separate.
    """

    block = normalize_selection(cells)
    target = normalize_selection(rows_or_columns)
    if block.type is not SelectionType.CELLS:
        raise InvalidRangeError(
            f"Expected a Cells selection, got {block.type.label}", descriptor=cells
        )
    grid = coerce_context(context)

    if target.type is SelectionType.ROWS:
        if target.start_row <= block.start_row and block.end_row <= target.end_row:
            return target
        if (
            grid is not None
            and _spans_all_columns(block, grid)
            and ranges_touch(target.start_row, target.end_row, block.start_row, block.end_row)
        ):
            return SelectionDescriptor.rows(
                min(target.start_row, block.start_row),
                max(target.end_row, block.end_row),
            )
        return None

    if target.type is SelectionType.COLUMNS:
        if target.start_column <= block.start_column and block.end_column <= target.end_column:
            return target
        if (
            grid is not None
            and _spans_all_rows(block, grid)
            and ranges_touch(
                target.start_column, target.end_column, block.start_column, block.end_column
            )
        ):
            return SelectionDescriptor.columns(
                min(target.start_column, block.start_column),
                max(target.end_column, block.end_column),
            )
        return None

    raise InvalidRangeError(
        f"Expected a Rows or Columns selection, got {target.type.label}",
        descriptor=rows_or_columns,
    )


def _merge_blocks(
    first: SelectionDescriptor, second: SelectionDescriptor
) -> Optional[SelectionDescriptor]:
    if contains(first, second):
        return first
    if contains(second, first):
        return second
    same_rows = (first.start_row, first.end_row) == (second.start_row, second.end_row)
    if same_rows and ranges_touch(
        first.start_column, first.end_column, second.start_column, second.end_column
    ):
        return replace(
            first,
            start_column=min(first.start_column, second.start_column),
            end_column=max(first.end_column, second.end_column),
        )
    same_columns = (first.start_column, first.end_column) == (
        second.start_column,
        second.end_column,
    )
    if same_columns and ranges_touch(
        first.start_row, first.end_row, second.start_row, second.end_row
    ):
        return replace(
            first,
            start_row=min(first.start_row, second.start_row),
            end_row=max(first.end_row, second.end_row),
        )
    return None


def merge_selections(
    sel0: SelectionDescriptor,
    sel1: SelectionDescriptor,
    context: GridContext | Mapping[str, Any] | None = None,
) -> Optional[SelectionDescriptor]:
    """Union of two descriptors as one descriptor, or ``None`` if impossible."""

    first = normalize_selection(sel0)
    second = normalize_selection(sel1)

    if first.type is second.type:
        if first.type is SelectionType.ROWS:
            if not ranges_touch(first.start_row, first.end_row, second.start_row, second.end_row):
                return None
            return SelectionDescriptor.rows(
                min(first.start_row, second.start_row),
                max(first.end_row, second.end_row),
            )
        if first.type is SelectionType.COLUMNS:
            if not ranges_touch(
                first.start_column, first.end_column, second.start_column, second.end_column
            ):
                return None
            return SelectionDescriptor.columns(
                min(first.start_column, second.start_column),
                max(first.end_column, second.end_column),
            )
        return _merge_blocks(first, second)

    spans = (SelectionType.ROWS, SelectionType.COLUMNS)
    if first.type is SelectionType.CELLS and second.type in spans:
        return merge_cells_into_rows_or_columns(first, second, context)
    if second.type is SelectionType.CELLS and first.type in spans:
        return merge_cells_into_rows_or_columns(second, first, context)
    return None


__all__ = ["merge_cells_into_rows_or_columns", "merge_selections"]
