from __future__ import annotations

import pytest

from grid_selection.regions import (
    CellRange,
    GridContext,
    InvalidRangeError,
    SelectionDescriptor,
    contains,
    covers_cell,
    get_intersection,
    is_same_cells_block,
    to_cell_range,
)


def make_cells(top: int, left: int, bottom: int, right: int) -> SelectionDescriptor:
    return SelectionDescriptor.cells(top, left, bottom, right)


def test_same_block_ignores_bound_order() -> None:
    assert is_same_cells_block(make_cells(3, 3, 1, 1), make_cells(1, 1, 3, 3))
    assert not is_same_cells_block(
        make_cells(1, 1, 3, 3), SelectionDescriptor.unselected_cells(1, 1, 3, 3)
    )


def test_disjoint_blocks_have_no_intersection() -> None:
    assert get_intersection(make_cells(0, 0, 5, 5), make_cells(0, 6, 5, 10)) is None
    assert get_intersection(
        SelectionDescriptor.columns(0, 5), SelectionDescriptor.columns(6, 10)
    ) is None


def test_touching_edge_intersects_on_one_line() -> None:
    overlap = get_intersection(make_cells(0, 0, 5, 5), make_cells(5, 5, 9, 9))

    assert overlap == make_cells(5, 5, 5, 5)


def test_intersection_keeps_span_types() -> None:
    assert get_intersection(
        SelectionDescriptor.rows(1, 5), SelectionDescriptor.rows(4, 9)
    ) == SelectionDescriptor.rows(4, 5)
    assert get_intersection(
        SelectionDescriptor.columns(1, 5), SelectionDescriptor.columns(0, 2)
    ) == SelectionDescriptor.columns(1, 2)


def test_rows_and_columns_meet_in_cells() -> None:
    overlap = get_intersection(
        SelectionDescriptor.rows(2, 3), SelectionDescriptor.columns(7, 8)
    )

    assert overlap == make_cells(2, 7, 3, 8)


def test_columns_clip_a_cells_block() -> None:
    overlap = get_intersection(SelectionDescriptor.columns(3, 20), make_cells(1, 0, 4, 6))

    assert overlap == make_cells(1, 3, 4, 6)


def test_containment_across_types() -> None:
    assert contains(SelectionDescriptor.rows(0, 5), make_cells(2, 40, 3, 90))
    assert contains(SelectionDescriptor.columns(2, 4), make_cells(100, 2, 200, 3))
    assert not contains(make_cells(0, 0, 9, 9), SelectionDescriptor.rows(1, 1))
    assert not contains(SelectionDescriptor.rows(0, 5), SelectionDescriptor.columns(0, 0))


def test_covers_cell_on_open_axis() -> None:
    assert covers_cell(SelectionDescriptor.rows(4, 4), 4, 10_000)
    assert not covers_cell(SelectionDescriptor.rows(4, 4), 5, 0)
    assert covers_cell(make_cells(3, 3, 1, 1), 2, 2)


def test_projecting_spans_needs_grid_extent() -> None:
    grid = GridContext(rows=10, columns=4)

    assert to_cell_range(SelectionDescriptor.rows(2, 3), grid) == CellRange(2, 0, 3, 3)
    assert to_cell_range(SelectionDescriptor.columns(1), grid) == CellRange(0, 1, 9, 1)
    assert to_cell_range(make_cells(1, 1, 0, 0)) == CellRange(0, 0, 1, 1)
    with pytest.raises(InvalidRangeError):
        to_cell_range(SelectionDescriptor.rows(2, 3))
    with pytest.raises(InvalidRangeError):
        to_cell_range(SelectionDescriptor.rows(2, 3), GridContext(rows=10, columns=0))
