"""Inclusive index-range bookkeeping for hidden rows."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from grid_selection.regions import InvalidRangeError, ranges_touch

IndexRange = Tuple[int, int]


def merge_hidden_row_ranges(
    hidden_row_ranges: List[IndexRange], new_range: Sequence[int]
) -> bool:
    """Fold ``new_range`` into a sorted list of disjoint hidden-row ranges.

    Adjacent or overlapping ranges fuse. The list is updated in place; returns
    whether it changed.
    """

    if len(new_range) != 2:
        raise InvalidRangeError(
            f"Expected a (begin, end) pair, got {new_range!r}", descriptor=new_range
        )
    begin, end = new_range
    for value in (begin, end):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidRangeError(
                f"Row range bounds must be integers, got {value!r}", descriptor=new_range
            )
    if begin > end:
        begin, end = end, begin

    for start, stop in hidden_row_ranges:
        if start <= begin and end <= stop:
            return False

    kept: List[IndexRange] = []
    for start, stop in hidden_row_ranges:
        if ranges_touch(start, stop, begin, end):
            begin, end = min(start, begin), max(stop, end)
        else:
            kept.append((start, stop))
    kept.append((begin, end))
    kept.sort()
    hidden_row_ranges[:] = kept
    return True


__all__ = ["IndexRange", "merge_hidden_row_ranges"]
