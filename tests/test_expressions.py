from __future__ import annotations

import pytest

from grid_selection.regions import (
    InvalidRangeError,
    SelectionDescriptor,
    SelectionParseError,
    get_selection_from_string,
    selection_to_string,
)


def test_single_row_expression() -> None:
    assert get_selection_from_string("row:5") == SelectionDescriptor.rows(5, 5)


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("rows:2-7", SelectionDescriptor.rows(2, 7)),
        ("rows:7-2", SelectionDescriptor.rows(2, 7)),
        ("cols:9-5", SelectionDescriptor.columns(5, 9)),
        ("col:3", SelectionDescriptor.columns(3, 3)),
        ("columns:1-4", SelectionDescriptor.columns(1, 4)),
        ("cells:20,30-40,50", SelectionDescriptor.cells(20, 30, 40, 50)),
        ("cells:3,4", SelectionDescriptor.cells(3, 4, 3, 4)),
        (" Rows: 1 - 2 ", SelectionDescriptor.rows(1, 2)),
        ("cells: 20 , 30 - 40 , 50", SelectionDescriptor.cells(20, 30, 40, 50)),
    ],
)
def test_supported_grammars(expression: str, expected: SelectionDescriptor) -> None:
    assert get_selection_from_string(expression) == expected


@pytest.mark.parametrize(
    "expression",
    [
        "",
        "cells:1",
        "cells:1,2-3",
        "rows:a",
        "foo:1",
        "rows:-1",
        "rows:1.5",
        "row:",
        "rows:1 2",
        "cells:1 0,2",
        "row s:4",
    ],
)
def test_malformed_expressions_raise(expression: str) -> None:
    with pytest.raises(SelectionParseError) as excinfo:
        get_selection_from_string(expression)

    assert excinfo.value.expression == expression


def test_non_string_expression_raises() -> None:
    with pytest.raises(SelectionParseError):
        get_selection_from_string(42)  # type: ignore[arg-type]


def test_formatter_reproduces_descriptor() -> None:
    samples = [
        SelectionDescriptor.rows(5),
        SelectionDescriptor.rows(9, 2),
        SelectionDescriptor.columns(1, 3),
        SelectionDescriptor.cells(8, 8, 2, 2),
    ]

    for sample in samples:
        text = selection_to_string(sample)
        assert get_selection_from_string(text) == get_selection_from_string(
            selection_to_string(get_selection_from_string(text))
        )
        assert selection_to_string(get_selection_from_string(text)) == text

    assert selection_to_string(SelectionDescriptor.rows(5)) == "row:5"
    assert selection_to_string(SelectionDescriptor.cells(8, 8, 2, 2)) == "cells:2,2-8,8"


def test_unselected_cells_have_no_textual_form() -> None:
    with pytest.raises(InvalidRangeError):
        selection_to_string(SelectionDescriptor.unselected_cells(0, 0))
