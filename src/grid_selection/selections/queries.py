"""Read-only derivations over a selection-set.

Coverage is resolved with rectangle arithmetic against each descriptor, so
the cost grows with the number of descriptors rather than the number of
cells. ``UnselectedCells`` entries subtract from the union.
"""

from __future__ import annotations

import math
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple

from grid_selection.algebra import remove_part_of_cells_selection
from grid_selection.regions import (
    Cell,
    CellRange,
    GridContext,
    SelectionBounds,
    SelectionDescriptor,
    SelectionType,
    coerce_context,
    coerce_range,
    covers_cell,
    get_intersection,
    normalize_selection,
    range_to_selection,
)

Selections = Sequence[SelectionDescriptor]
RangeLike = CellRange | Mapping[str, Any]
ContextLike = GridContext | Mapping[str, Any] | None


def _split(
    selections: Selections,
) -> Tuple[List[SelectionDescriptor], List[SelectionDescriptor]]:
    positives: List[SelectionDescriptor] = []
    holes: List[SelectionDescriptor] = []
    for item in selections:
        normalized = normalize_selection(item)
        (holes if normalized.is_hole else positives).append(normalized)
    return positives, holes


def is_cell_selected(selections: Selections, row: int, column: int) -> bool:
    positives, holes = _split(selections)
    if any(covers_cell(hole, row, column) for hole in holes):
        return False
    return any(covers_cell(item, row, column) for item in positives)


def is_row_selected(
    selections: Selections, row: int, context: ContextLike = None
) -> bool:
    """True when every cell of ``row`` is selected.

    Without a grid extent only ``Rows`` descriptors can prove that.
    """

    positives, holes = _split(selections)
    if any(hole.start_row <= row <= hole.end_row for hole in holes):
        return False
    if any(
        item.type is SelectionType.ROWS and item.start_row <= row <= item.end_row
        for item in positives
    ):
        return True
    grid = coerce_context(context)
    if grid is None or grid.columns == 0:
        return False
    return are_all_cells_selected(selections, CellRange(row, 0, row, grid.last_column))


def is_column_selected(
    selections: Selections, column: int, context: ContextLike = None
) -> bool:
    positives, holes = _split(selections)
    if any(hole.start_column <= column <= hole.end_column for hole in holes):
        return False
    if any(
        item.type is SelectionType.COLUMNS
        and item.start_column <= column <= item.end_column
        for item in positives
    ):
        return True
    grid = coerce_context(context)
    if grid is None or grid.rows == 0:
        return False
    return are_all_cells_selected(
        selections, CellRange(0, column, grid.last_row, column)
    )


def are_all_cells_selected(selections: Selections, cell_range: RangeLike) -> bool:
    target = range_to_selection(coerce_range(cell_range))
    positives, holes = _split(selections)
    if any(get_intersection(hole, target) is not None for hole in holes):
        return False

    remaining = [target]
    for item in positives:
        pieces: List[SelectionDescriptor] = []
        for piece in remaining:
            residual = remove_part_of_cells_selection(piece, item)
            pieces.extend([piece] if residual is None else residual)
        remaining = pieces
        if not remaining:
            return True
    return False


def get_verbose_selection_state_from_cells(
    selections: Selections, cell_range: RangeLike
) -> List[List[int]]:
    """Per-cell ``index + 1`` of the first covering descriptor, ``0`` if none.

    Indexed as ``state[row - range.start_row][column - range.start_column]``.
    """

    window = coerce_range(cell_range)
    target = range_to_selection(window)
    state = [[0] * window.width for _ in range(window.height)]

    holes: List[SelectionDescriptor] = []
    for index, item in enumerate(selections):
        normalized = normalize_selection(item)
        if normalized.is_hole:
            holes.append(normalized)
            continue
        overlap = get_intersection(normalized, target)
        if overlap is None:
            continue
        for row in range(overlap.start_row, overlap.end_row + 1):
            line = state[row - window.start_row]
            for column in range(overlap.start_column, overlap.end_column + 1):
                offset = column - window.start_column
                if not line[offset]:
                    line[offset] = index + 1

    for hole in holes:
        overlap = get_intersection(hole, target)
        if overlap is None:
            continue
        for row in range(overlap.start_row, overlap.end_row + 1):
            line = state[row - window.start_row]
            for column in range(overlap.start_column, overlap.end_column + 1):
                line[column - window.start_column] = 0
    return state


def get_selection_state_from_cells(
    selections: Selections, cell_range: RangeLike
) -> bool | List[List[bool]]:
    """``True`` if every cell is selected, ``False`` if none, else a matrix."""

    window = coerce_range(cell_range)
    if are_all_cells_selected(selections, window):
        return True
    target = range_to_selection(window)
    positives, _ = _split(selections)
    if all(get_intersection(item, target) is None for item in positives):
        return False
    verbose = get_verbose_selection_state_from_cells(selections, window)
    matrix = [[bool(value) for value in line] for line in verbose]
    if not any(any(line) for line in matrix):
        return False
    return matrix


def _contiguous(
    selections: Selections, kind: SelectionType, allow_impurity: bool
) -> Optional[Tuple[int, int]]:
    spans: List[Tuple[int, int]] = []
    for item in selections:
        normalized = normalize_selection(item)
        if normalized.type is not kind:
            if allow_impurity:
                continue
            return None
        if kind is SelectionType.ROWS:
            spans.append((normalized.start_row, normalized.end_row))
        else:
            spans.append((normalized.start_column, normalized.end_column))
    if not spans:
        return None

    spans.sort()
    start, end = spans[0]
    for span_start, span_end in spans[1:]:
        if span_start > end + 1:
            return None
        end = max(end, span_end)
    return (start, end)


def get_selected_contiguous_columns(
    selections: Selections, allow_impurity: bool
) -> Optional[Tuple[int, int]]:
    """``(start, end)`` of the selected columns when they form one run."""

    return _contiguous(selections, SelectionType.COLUMNS, allow_impurity)


def get_selected_contiguous_rows(
    selections: Selections, allow_impurity: bool
) -> Optional[Tuple[int, int]]:
    return _contiguous(selections, SelectionType.ROWS, allow_impurity)


def _any_overlap(items: Sequence[SelectionDescriptor]) -> bool:
    for index, first in enumerate(items):
        for second in items[index + 1 :]:
            if get_intersection(first, second) is not None:
                return True
    return False


def are_selections_complex(selections: Selections) -> bool:
    """True for mixed types, holes, or overlapping cells blocks."""

    normalized = [normalize_selection(item) for item in selections]
    kinds = {item.type for item in normalized}
    if len(kinds) > 1 or SelectionType.UNSELECTED_CELLS in kinds:
        return True
    cells = [item for item in normalized if item.type is SelectionType.CELLS]
    return _any_overlap(cells)


def are_selections_neat(selections: Selections) -> bool:
    """True when a single rectangle or a plain row/column list describes the set.

    ``cells:0,0-10,10`` or ``rows:5-10`` alone are neat; two cells blocks are
    not.
    """

    normalized = [normalize_selection(item) for item in selections]
    if any(item.is_hole for item in normalized):
        return False
    if len(normalized) <= 1:
        return True
    kinds = {item.type for item in normalized}
    if kinds not in ({SelectionType.ROWS}, {SelectionType.COLUMNS}):
        return False
    return not _any_overlap(normalized)


def _axis_bounds(
    start: int, end: int, unbounded: bool, limit: Optional[int]
) -> Tuple[float, float]:
    if not unbounded:
        return (start, end)
    if limit is None:
        return (0, math.inf)
    return (0, limit - 1)


def get_selection_bounds(
    selections: Selections,
    context: ContextLike = None,
    *,
    sanitized: bool = False,
) -> Optional[SelectionBounds]:
    """Bounding rectangle of every selected descriptor.

    An empty set yields ``top=left=inf`` and ``bottom=right=-inf``, or
    ``None`` when ``sanitized`` is set. Without ``context`` the open axis of
    a Rows/Columns descriptor runs from ``0`` to ``inf``.
    """

    grid = coerce_context(context)
    positives, _ = _split(selections)
    top = left = math.inf
    bottom = right = -math.inf
    for item in positives:
        row_start, row_end = _axis_bounds(
            item.start_row,
            item.end_row,
            item.type is SelectionType.COLUMNS,
            grid.rows if grid else None,
        )
        column_start, column_end = _axis_bounds(
            item.start_column,
            item.end_column,
            item.type is SelectionType.ROWS,
            grid.columns if grid else None,
        )
        top = min(top, row_start)
        left = min(left, column_start)
        bottom = max(bottom, row_end)
        right = max(right, column_end)

    bounds = SelectionBounds(top=top, left=left, bottom=bottom, right=right)
    if sanitized and bounds.is_empty:
        return None
    return bounds


def _clamped_window(
    selections: Selections, grid: GridContext
) -> Optional[CellRange]:
    bounds = get_selection_bounds(selections, grid, sanitized=True)
    if bounds is None or grid.rows == 0 or grid.columns == 0:
        return None
    top = max(0, int(bounds.top))
    left = max(0, int(bounds.left))
    bottom = min(grid.last_row, int(bounds.bottom))
    right = min(grid.last_column, int(bounds.right))
    if top > bottom or left > right:
        return None
    return CellRange(top, left, bottom, right)


def get_selected_rows(selections: Selections, context: ContextLike) -> List[int]:
    """Indices of rows whose every cell is selected, in ascending order."""

    grid = coerce_context(context)
    if grid is None:
        return []
    window = _clamped_window(selections, grid)
    if window is None:
        return []
    return [
        row
        for row in range(window.start_row, window.end_row + 1)
        if is_row_selected(selections, row, grid)
    ]


def iter_selected_cells(
    selections: Selections, context: ContextLike
) -> Iterator[Cell]:
    """Yield selected ``(row, column)`` pairs inside the grid, row-major."""

    grid = coerce_context(context)
    if grid is None:
        return
    window = _clamped_window(selections, grid)
    if window is None:
        return
    state = get_selection_state_from_cells(selections, window)
    for row_offset in range(window.height):
        for column_offset in range(window.width):
            if state is True or (
                isinstance(state, list) and state[row_offset][column_offset]
            ):
                yield (window.start_row + row_offset, window.start_column + column_offset)


__all__ = [
    "are_all_cells_selected",
    "are_selections_complex",
    "are_selections_neat",
    "get_selected_contiguous_columns",
    "get_selected_contiguous_rows",
    "get_selected_rows",
    "get_selection_bounds",
    "get_selection_state_from_cells",
    "get_verbose_selection_state_from_cells",
    "is_cell_selected",
    "is_column_selected",
    "is_row_selected",
    "iter_selected_cells",
]
