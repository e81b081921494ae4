from __future__ import annotations

import pytest

from grid_selection.algebra import (
    remove_part_of_cells_selection,
    remove_part_of_columns_selection,
    remove_part_of_rows_selection,
    subtract_selection,
)
from grid_selection.regions import GridContext, InvalidRangeError, SelectionDescriptor


def make_cells(top: int, left: int, bottom: int, right: int) -> SelectionDescriptor:
    return SelectionDescriptor.cells(top, left, bottom, right)


def test_removing_middle_rows_leaves_two_pieces() -> None:
    residual = remove_part_of_rows_selection(
        SelectionDescriptor.rows(1, 10), SelectionDescriptor.rows(3, 5)
    )

    assert residual == [SelectionDescriptor.rows(1, 2), SelectionDescriptor.rows(6, 10)]


def test_removing_rows_edge_leaves_one_piece() -> None:
    residual = remove_part_of_rows_selection(
        SelectionDescriptor.rows(1, 10), SelectionDescriptor.rows(8, 12)
    )

    assert residual == [SelectionDescriptor.rows(1, 7)]


def test_fully_removed_differs_from_untouched() -> None:
    rows = SelectionDescriptor.rows(1, 10)

    assert remove_part_of_rows_selection(rows, SelectionDescriptor.rows(0, 20)) == []
    assert remove_part_of_rows_selection(rows, SelectionDescriptor.rows(11, 12)) is None


def test_removing_columns() -> None:
    columns = SelectionDescriptor.columns(0, 4)

    assert remove_part_of_columns_selection(columns, SelectionDescriptor.columns(0, 0)) == [
        SelectionDescriptor.columns(1, 4)
    ]
    assert remove_part_of_columns_selection(columns, SelectionDescriptor.columns(9, 9)) is None


def test_span_removal_checks_kinds() -> None:
    with pytest.raises(InvalidRangeError):
        remove_part_of_rows_selection(
            SelectionDescriptor.columns(0, 1), SelectionDescriptor.rows(0, 1)
        )
    with pytest.raises(InvalidRangeError):
        remove_part_of_columns_selection(
            SelectionDescriptor.columns(0, 1), make_cells(0, 0, 1, 1)
        )
    with pytest.raises(InvalidRangeError):
        remove_part_of_cells_selection(
            SelectionDescriptor.rows(0, 1), make_cells(0, 0, 1, 1)
        )


def test_hole_in_block_leaves_four_bands() -> None:
    residual = remove_part_of_cells_selection(make_cells(0, 0, 5, 5), make_cells(2, 2, 3, 3))

    assert residual == [
        make_cells(0, 0, 1, 5),
        make_cells(4, 0, 5, 5),
        make_cells(2, 0, 3, 1),
        make_cells(2, 4, 3, 5),
    ]


def test_cells_minus_rows_leaves_top_and_bottom() -> None:
    residual = remove_part_of_cells_selection(
        make_cells(0, 0, 5, 5), SelectionDescriptor.rows(2, 3)
    )

    assert residual == [make_cells(0, 0, 1, 5), make_cells(4, 0, 5, 5)]


def test_cells_removal_edges() -> None:
    block = make_cells(2, 2, 4, 4)

    assert remove_part_of_cells_selection(block, make_cells(0, 0, 9, 9)) == []
    assert remove_part_of_cells_selection(block, make_cells(5, 5, 6, 6)) is None


def test_hole_removal_keeps_hole_type() -> None:
    residual = remove_part_of_cells_selection(
        SelectionDescriptor.unselected_cells(0, 0, 0, 3), make_cells(0, 0, 0, 1)
    )

    assert residual == [SelectionDescriptor.unselected_cells(0, 2, 0, 3)]


def test_columns_out_of_rows_need_grid() -> None:
    with pytest.raises(InvalidRangeError):
        subtract_selection(SelectionDescriptor.rows(0, 4), SelectionDescriptor.columns(2, 3))


def test_columns_out_of_rows_with_grid() -> None:
    residual = subtract_selection(
        SelectionDescriptor.rows(0, 4),
        SelectionDescriptor.columns(2, 3),
        GridContext(rows=10, columns=6),
    )

    assert residual == [make_cells(0, 0, 4, 1), make_cells(0, 4, 4, 5)]


def test_cells_out_of_rows_promote_full_width_bands() -> None:
    residual = subtract_selection(
        SelectionDescriptor.rows(0, 4),
        make_cells(1, 1, 2, 2),
        {"rows": 10, "columns": 6},
    )

    assert residual == [
        SelectionDescriptor.rows(0, 0),
        SelectionDescriptor.rows(3, 4),
        make_cells(1, 0, 2, 0),
        make_cells(1, 3, 2, 5),
    ]


def test_disjoint_cross_kind_subtraction_needs_no_grid() -> None:
    residual = subtract_selection(SelectionDescriptor.rows(0, 4), make_cells(7, 0, 8, 1))

    assert residual is None
