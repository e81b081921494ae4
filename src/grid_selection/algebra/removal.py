"""Subtracting one region from another.

Every function returns ``None`` when the two regions do not intersect (nothing
to do) and ``[]`` when the selection is removed entirely; otherwise the
residual descriptors, in a stable order.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from grid_selection.regions import (
    GridContext,
    InvalidRangeError,
    SelectionDescriptor,
    SelectionType,
    coerce_context,
    get_intersection,
    normalize_selection,
    promote_selection,
    range_to_selection,
    to_cell_range,
)


def _expect(descriptor: SelectionDescriptor, kind: SelectionType, role: str) -> None:
    if descriptor.type is not kind:
        raise InvalidRangeError(
            f"{role} must be a {kind.label} selection, got {descriptor.type.label}",
            descriptor=descriptor,
        )


def _subtract_span(
    start: int, end: int, cut_start: int, cut_end: int
) -> Optional[List[Tuple[int, int]]]:
    if cut_end < start or cut_start > end:
        return None
    pieces: List[Tuple[int, int]] = []
    if cut_start > start:
        pieces.append((start, cut_start - 1))
    if cut_end < end:
        pieces.append((cut_end + 1, end))
    return pieces


def remove_part_of_rows_selection(
    selection: SelectionDescriptor, remove: SelectionDescriptor
) -> Optional[List[SelectionDescriptor]]:
    current = normalize_selection(selection)
    cut = normalize_selection(remove)
    _expect(current, SelectionType.ROWS, "selection")
    _expect(cut, SelectionType.ROWS, "remove")
    pieces = _subtract_span(current.start_row, current.end_row, cut.start_row, cut.end_row)
    if pieces is None:
        return None
    return [SelectionDescriptor.rows(start, end) for start, end in pieces]


def remove_part_of_columns_selection(
    selection: SelectionDescriptor, remove: SelectionDescriptor
) -> Optional[List[SelectionDescriptor]]:
    current = normalize_selection(selection)
    cut = normalize_selection(remove)
    _expect(current, SelectionType.COLUMNS, "selection")
    _expect(cut, SelectionType.COLUMNS, "remove")
    pieces = _subtract_span(
        current.start_column, current.end_column, cut.start_column, cut.end_column
    )
    if pieces is None:
        return None
    return [SelectionDescriptor.columns(start, end) for start, end in pieces]


def remove_part_of_cells_selection(
    selection: SelectionDescriptor, remove: SelectionDescriptor
) -> Optional[List[SelectionDescriptor]]:
    """Rectangle minus any region, as up to four bands.

    Bands come out as top, bottom, left, right; the left and right bands only
    span the rows of the overlap so the bands never intersect each other.
    """

    current = normalize_selection(selection)
    if not current.is_cells_like:
        raise InvalidRangeError(
            f"selection must be a Cells or UnselectedCells selection, got {current.type.label}",
            descriptor=selection,
        )
    overlap = get_intersection(current, remove)
    if overlap is None:
        return None

    kind = current.type
    bands: List[SelectionDescriptor] = []
    if overlap.start_row > current.start_row:
        bands.append(
            SelectionDescriptor(
                kind,
                current.start_row,
                current.start_column,
                overlap.start_row - 1,
                current.end_column,
            )
        )
    if overlap.end_row < current.end_row:
        bands.append(
            SelectionDescriptor(
                kind,
                overlap.end_row + 1,
                current.start_column,
                current.end_row,
                current.end_column,
            )
        )
    if overlap.start_column > current.start_column:
        bands.append(
            SelectionDescriptor(
                kind,
                overlap.start_row,
                current.start_column,
                overlap.end_row,
                overlap.start_column - 1,
            )
        )
    if overlap.end_column < current.end_column:
        bands.append(
            SelectionDescriptor(
                kind,
                overlap.start_row,
                overlap.end_column + 1,
                overlap.end_row,
                current.end_column,
            )
        )
    return bands


def subtract_selection(
    selection: SelectionDescriptor,
    remove: SelectionDescriptor,
    context: GridContext | Mapping[str, Any] | None = None,
) -> Optional[List[SelectionDescriptor]]:
    """Dispatch ``selection - remove`` to the matching removal routine.

    Taking cells or columns out of a Rows selection (or cells or rows out of a
    Columns selection) turns part of it into cells blocks, so the grid extent
    must be known.
    """

    current = normalize_selection(selection)
    cut = normalize_selection(remove)

    if current.is_cells_like:
        return remove_part_of_cells_selection(current, cut)
    if current.type is cut.type:
        if current.type is SelectionType.ROWS:
            return remove_part_of_rows_selection(current, cut)
        return remove_part_of_columns_selection(current, cut)

    if get_intersection(current, cut) is None:
        return None
    grid = coerce_context(context)
    if grid is None:
        raise InvalidRangeError(
            f"Grid extent is required to remove a {cut.type.label} selection "
            f"from a {current.type.label} selection",
            descriptor=remove,
        )
    block = range_to_selection(to_cell_range(current, grid))
    bands = remove_part_of_cells_selection(block, cut)
    if bands is None:
        return None
    return [promote_selection(band, grid) for band in bands]


__all__ = [
    "remove_part_of_cells_selection",
    "remove_part_of_columns_selection",
    "remove_part_of_rows_selection",
    "subtract_selection",
]
