"""Selection descriptors, normalization, expressions and geometry."""

from .expressions import (
    SelectionParseError,
    get_selection_from_string,
    selection_to_string,
)
from .geometry import (
    column_extent,
    contains,
    covers_cell,
    get_intersection,
    is_same_cells_block,
    range_to_selection,
    ranges_overlap,
    ranges_touch,
    row_extent,
    to_cell_range,
)
from .models import (
    Cell,
    CellRange,
    GridContext,
    InvalidRangeError,
    SelectionBounds,
    SelectionDescriptor,
    SelectionType,
    coerce_context,
    coerce_descriptor,
    coerce_range,
)
from .normalize import normalize_selection, promote_selection

__all__ = [
    "Cell",
    "CellRange",
    "GridContext",
    "InvalidRangeError",
    "SelectionBounds",
    "SelectionDescriptor",
    "SelectionParseError",
    "SelectionType",
    "coerce_context",
    "coerce_descriptor",
    "coerce_range",
    "column_extent",
    "contains",
    "covers_cell",
    "get_intersection",
    "get_selection_from_string",
    "is_same_cells_block",
    "normalize_selection",
    "promote_selection",
    "range_to_selection",
    "ranges_overlap",
    "ranges_touch",
    "row_extent",
    "selection_to_string",
    "to_cell_range",
]
