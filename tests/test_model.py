from __future__ import annotations

from typing import List

import pytest

from grid_selection.regions import (
    CellRange,
    GridContext,
    InvalidRangeError,
    SelectionDescriptor,
    SelectionParseError,
)
from grid_selection.selections import KeyEvent, SelectionBus, SelectionModel


def make_model() -> SelectionModel:
    return SelectionModel(GridContext(rows=3, columns=4), name="sheet1")


def test_changes_bump_revision() -> None:
    model = make_model()

    assert model.add_expression("cells:0,0-1,1")
    assert not model.add_expression("cells:1,1")

    assert model.revision() == 1
    assert model.selections == (SelectionDescriptor.cells(0, 0, 1, 1),)


def test_bus_announces_each_change() -> None:
    bus = SelectionBus()
    received: List[dict] = []
    bus.subscribe("selection.changed", received.append)
    model = SelectionModel(GridContext(rows=3, columns=4), name="sheet1", bus=bus)

    model.select_all()
    model.remove(SelectionDescriptor.rows(0, 0))
    model.clear()
    model.clear()

    assert [event["action"] for event in received] == ["select_all", "remove", "clear"]
    assert received[-1] == {"model": "sheet1", "action": "clear", "revision": 3, "count": 0}


def test_select_all_and_queries() -> None:
    model = make_model()

    model.select_all()

    assert model.selections == (SelectionDescriptor.rows(0, 2),)
    assert model.is_row_selected(1)
    assert model.is_column_selected(3)
    assert model.selected_rows() == [0, 1, 2]
    assert len(model.selected_cells()) == 12
    assert model.state_for(CellRange(0, 0, 2, 3)) is True
    assert model.is_neat()
    assert not model.is_complex()
    assert model.contiguous_rows() == (0, 2)


def test_snapshot_is_a_copy() -> None:
    model = make_model()
    model.add(SelectionDescriptor.cells(1, 1, 2, 2))
    model.set_active_cell(1, 1)

    snapshot = model.snapshot(attributes={"sheet": "Sheet 1"})
    snapshot.selections.append(SelectionDescriptor.rows(0))

    assert snapshot.revision == 1
    assert snapshot.active_cell == (1, 1)
    assert snapshot.bounds is not None
    assert snapshot.bounds.as_tuple() == (1, 1, 2, 2)
    assert snapshot.attributes == {"sheet": "Sheet 1"}
    assert len(model.selections) == 1


def test_resize_uses_active_cell() -> None:
    model = make_model()
    model.replace(SelectionDescriptor.cells(1, 1))
    model.set_active_cell(1, 1)

    assert model.resize_from_key(KeyEvent("ArrowLeft", shift_key=True))

    assert model.selections == (SelectionDescriptor.cells(1, 0, 1, 1),)


def test_new_context_promotes_existing_blocks() -> None:
    model = SelectionModel(selections=[SelectionDescriptor.cells(0, 0, 0, 3)])

    assert model.selections == (SelectionDescriptor.cells(0, 0, 0, 3),)
    assert model.set_context({"rows": 5, "columns": 4})
    assert model.selections == (SelectionDescriptor.rows(0, 0),)


def test_model_without_grid_rejects_resize_and_select_all() -> None:
    model = SelectionModel()

    with pytest.raises(InvalidRangeError):
        model.resize_from_key(KeyEvent("ArrowDown", shift_key=True))
    with pytest.raises(InvalidRangeError):
        model.select_all()
    with pytest.raises(SelectionParseError):
        model.add_expression("sheet:1")
    assert model.revision() == 0


def test_move_translates_set() -> None:
    model = make_model()
    model.add(SelectionDescriptor.cells(0, 0, 1, 1))

    assert model.move(1, 1)

    assert model.selections == (SelectionDescriptor.cells(1, 1, 2, 2),)
    assert model.bounds().as_tuple() == (1, 1, 2, 2)


def test_resize_after_merge_extends_merged_block() -> None:
    model = SelectionModel(GridContext(rows=10, columns=10))
    model.add(SelectionDescriptor.cells(0, 0, 1, 1))
    model.add(SelectionDescriptor.cells(5, 5, 5, 5))
    model.set_active_cell(0, 0)
    model.add(SelectionDescriptor.cells(0, 2, 1, 2))

    assert model.resize_from_key(KeyEvent("ArrowDown", shift_key=True))

    assert model.selections == (
        SelectionDescriptor.cells(0, 0, 2, 2),
        SelectionDescriptor.cells(5, 5, 5, 5),
    )
