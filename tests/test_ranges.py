from __future__ import annotations

import pytest

from grid_selection.algebra import merge_hidden_row_ranges
from grid_selection.regions import InvalidRangeError


def make_ranges() -> list[tuple[int, int]]:
    return [(1, 2), (6, 8)]


def test_adjacent_range_fuses_with_neighbour() -> None:
    ranges = make_ranges()

    changed = merge_hidden_row_ranges(ranges, (3, 4))

    assert changed is True
    assert ranges == [(1, 4), (6, 8)]


def test_bridging_range_fuses_both_sides() -> None:
    ranges = [(1, 4), (6, 8)]

    assert merge_hidden_row_ranges(ranges, (5, 5)) is True
    assert ranges == [(1, 8)]


def test_covered_range_is_a_no_op() -> None:
    ranges = make_ranges()

    assert merge_hidden_row_ranges(ranges, (2, 1)) is False
    assert ranges == make_ranges()


def test_separate_range_is_inserted_in_order() -> None:
    ranges = make_ranges()

    assert merge_hidden_row_ranges(ranges, (20, 22)) is True
    assert merge_hidden_row_ranges(ranges, (4, 4)) is True
    assert ranges == [(1, 2), (4, 4), (6, 8), (20, 22)]


def test_malformed_range_raises() -> None:
    with pytest.raises(InvalidRangeError):
        merge_hidden_row_ranges(make_ranges(), (1,))
    with pytest.raises(InvalidRangeError):
        merge_hidden_row_ranges(make_ranges(), (1, 2.5))
