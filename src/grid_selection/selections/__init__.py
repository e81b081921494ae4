"""Selection-set mutators, queries, keyboard resizing and the model façade."""

from .keyboard import KeyEvent, shrink_or_expand_selections
from .model import SelectionBus, SelectionModel, SelectionSnapshot
from .operations import (
    add_into_selections,
    cleanup_selections,
    clone_selections,
    move_selections,
    remove_from_selections,
    select_everything,
)
from .queries import (
    are_all_cells_selected,
    are_selections_complex,
    are_selections_neat,
    get_selected_contiguous_columns,
    get_selected_contiguous_rows,
    get_selected_rows,
    get_selection_bounds,
    get_selection_state_from_cells,
    get_verbose_selection_state_from_cells,
    is_cell_selected,
    is_column_selected,
    is_row_selected,
    iter_selected_cells,
)

__all__ = [
    "KeyEvent",
    "SelectionBus",
    "SelectionModel",
    "SelectionSnapshot",
    "add_into_selections",
    "are_all_cells_selected",
    "are_selections_complex",
    "are_selections_neat",
    "cleanup_selections",
    "clone_selections",
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
    "move_selections",
    "remove_from_selections",
    "select_everything",
    "shrink_or_expand_selections",
]
