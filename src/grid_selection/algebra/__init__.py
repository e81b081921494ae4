"""Merge and removal engines over selection descriptors."""

from .merge import merge_cells_into_rows_or_columns, merge_selections
from .ranges import IndexRange, merge_hidden_row_ranges
from .removal import (
    remove_part_of_cells_selection,
    remove_part_of_columns_selection,
    remove_part_of_rows_selection,
    subtract_selection,
)

__all__ = [
    "IndexRange",
    "merge_cells_into_rows_or_columns",
    "merge_hidden_row_ranges",
    "merge_selections",
    "remove_part_of_cells_selection",
    "remove_part_of_columns_selection",
    "remove_part_of_rows_selection",
    "subtract_selection",
]
