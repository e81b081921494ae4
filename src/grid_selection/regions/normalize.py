"""Canonical forms for selection descriptors."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from .models import (
    GridContext,
    SelectionDescriptor,
    SelectionType,
    coerce_context,
    coerce_descriptor,
)


def _ordered(start: Optional[int], end: Optional[int]) -> Tuple[int, int]:
    first = 0 if start is None else start
    last = first if end is None else end
    if first > last:
        return last, first
    return first, last


def normalize_selection(
    descriptor: SelectionDescriptor | Mapping[str, Any],
) -> SelectionDescriptor:
    """Return ``descriptor`` with all four bounds present and ``start <= end``.

    The axis a ``Rows``/``Columns`` descriptor does not constrain collapses to
    ``0..0`` so equal regions compare equal.
    """

    item = coerce_descriptor(descriptor)
    start_row, end_row = _ordered(item.start_row, item.end_row)
    start_column, end_column = _ordered(item.start_column, item.end_column)
    if item.type is SelectionType.ROWS:
        start_column = end_column = 0
    elif item.type is SelectionType.COLUMNS:
        start_row = end_row = 0
    return SelectionDescriptor(item.type, start_row, start_column, end_row, end_column)


def promote_selection(
    descriptor: SelectionDescriptor,
    context: GridContext | Mapping[str, Any] | None,
) -> SelectionDescriptor:
    """Turn a cells block spanning a whole grid axis into Rows or Columns."""

    grid = coerce_context(context)
    item = normalize_selection(descriptor)
    if grid is None or item.type is not SelectionType.CELLS:
        return item
    if grid.columns and item.start_column <= 0 and item.end_column >= grid.last_column:
        return SelectionDescriptor.rows(item.start_row, item.end_row)
    if grid.rows and item.start_row <= 0 and item.end_row >= grid.last_row:
        return SelectionDescriptor.columns(item.start_column, item.end_column)
    return item


__all__ = ["normalize_selection", "promote_selection"]
