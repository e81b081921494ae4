"""Host-facing façade owning one grid's selection-set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from grid_selection.regions import (
    Cell,
    CellRange,
    GridContext,
    InvalidRangeError,
    SelectionBounds,
    SelectionDescriptor,
    coerce_context,
    get_selection_from_string,
    normalize_selection,
)
from grid_selection.runtime import telemetry

from . import queries
from .keyboard import KeyEvent, shrink_or_expand_selections
from .operations import (
    add_into_selections,
    cleanup_selections,
    clone_selections,
    move_selections,
    remove_from_selections,
    select_everything,
)


class SelectionBus:
    """Minimal event bus the model uses to announce changes."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class SelectionSnapshot:
    """Copy of the model state a host can render from."""

    revision: int
    selections: List[SelectionDescriptor]
    active_cell: Cell
    bounds: Optional[SelectionBounds]
    context: Optional[GridContext] = None
    attributes: Dict[str, str] = field(default_factory=dict)


class SelectionModel:
    def __init__(
        self,
        context: GridContext | Mapping[str, Any] | None = None,
        *,
        name: str = "default",
        selections: Optional[Iterable[SelectionDescriptor]] = None,
        bus: Optional[SelectionBus] = None,
        logger_name: str | None = None,
    ) -> None:
        self.name = name
        self.bus = bus or SelectionBus()
        self._context = coerce_context(context)
        self._selections: List[SelectionDescriptor] = [
            normalize_selection(item) for item in selections or ()
        ]
        self._active_cell: Cell = (0, 0)
        self._revision = 0
        self._logger_name = logger_name
        if self._selections:
            cleanup_selections(self._selections, self._context)

    @property
    def selections(self) -> Tuple[SelectionDescriptor, ...]:
        return tuple(self._selections)

    @property
    def context(self) -> Optional[GridContext]:
        return self._context

    @property
    def active_cell(self) -> Cell:
        return self._active_cell

    def revision(self) -> int:
        return self._revision

    def set_context(self, context: GridContext | Mapping[str, Any] | None) -> bool:
        """Adopt a new grid extent and re-normalize the set against it."""

        self._context = coerce_context(context)
        changed = cleanup_selections(self._selections, self._context)
        return self._after("context", changed)

    def set_active_cell(self, row: int, column: int) -> None:
        self._active_cell = (row, column)

    def add(self, descriptor: SelectionDescriptor | Mapping[str, Any]) -> bool:
        changed = add_into_selections(self._selections, descriptor, self._context)
        return self._after("add", changed)

    def add_expression(self, expression: str) -> bool:
        return self.add(get_selection_from_string(expression))

    def remove(self, descriptor: SelectionDescriptor | Mapping[str, Any]) -> bool:
        changed = remove_from_selections(self._selections, descriptor, self._context)
        return self._after("remove", changed)

    def replace(self, descriptor: SelectionDescriptor | Mapping[str, Any]) -> bool:
        """Drop the current set and select ``descriptor`` alone."""

        working: List[SelectionDescriptor] = []
        add_into_selections(working, descriptor, self._context)
        changed = working != self._selections
        self._selections[:] = working
        return self._after("replace", changed)

    def select_all(self) -> bool:
        working = select_everything(self._context)
        changed = working != self._selections
        self._selections[:] = working
        return self._after("select_all", changed)

    def clear(self) -> bool:
        changed = bool(self._selections)
        self._selections.clear()
        return self._after("clear", changed)

    def move(self, offset_x: int, offset_y: int) -> bool:
        changed = move_selections(self._selections, offset_x, offset_y)
        return self._after("move", changed)

    def resize_from_key(self, key_event: KeyEvent | Mapping[str, Any]) -> bool:
        if self._context is None:
            raise InvalidRangeError("Grid extent is required to resize a selection")
        changed = shrink_or_expand_selections(
            self._selections, self._active_cell, key_event, self._context
        )
        return self._after("resize", changed)

    def is_cell_selected(self, row: int, column: int) -> bool:
        return queries.is_cell_selected(self._selections, row, column)

    def is_row_selected(self, row: int) -> bool:
        return queries.is_row_selected(self._selections, row, self._context)

    def is_column_selected(self, column: int) -> bool:
        return queries.is_column_selected(self._selections, column, self._context)

    def state_for(self, cell_range: CellRange) -> bool | List[List[bool]]:
        return queries.get_selection_state_from_cells(self._selections, cell_range)

    def verbose_state_for(self, cell_range: CellRange) -> List[List[int]]:
        return queries.get_verbose_selection_state_from_cells(
            self._selections, cell_range
        )

    def bounds(self, *, sanitized: bool = False) -> Optional[SelectionBounds]:
        return queries.get_selection_bounds(
            self._selections, self._context, sanitized=sanitized
        )

    def selected_rows(self) -> List[int]:
        return queries.get_selected_rows(self._selections, self._context)

    def selected_cells(self) -> List[Cell]:
        return list(queries.iter_selected_cells(self._selections, self._context))

    def contiguous_rows(
        self, *, allow_impurity: bool = False
    ) -> Optional[Tuple[int, int]]:
        return queries.get_selected_contiguous_rows(self._selections, allow_impurity)

    def contiguous_columns(
        self, *, allow_impurity: bool = False
    ) -> Optional[Tuple[int, int]]:
        return queries.get_selected_contiguous_columns(self._selections, allow_impurity)

    def is_complex(self) -> bool:
        return queries.are_selections_complex(self._selections)

    def is_neat(self) -> bool:
        return queries.are_selections_neat(self._selections)

    def snapshot(
        self, *, attributes: Optional[dict[str, str]] = None
    ) -> SelectionSnapshot:
        return SelectionSnapshot(
            revision=self._revision,
            selections=clone_selections(self._selections),
            active_cell=self._active_cell,
            bounds=self.bounds(sanitized=True),
            context=self._context,
            attributes=dict(attributes or {}),
        )

    def _after(self, action: str, changed: bool) -> bool:
        if not changed:
            return False
        self._revision += 1
        payload = {
            "model": self.name,
            "action": action,
            "revision": self._revision,
            "count": len(self._selections),
        }
        telemetry.record_event(
            "selection.changed",
            level="debug",
            data=payload,
            logger_name=self._logger_name,
        )
        self.bus.emit("selection.changed", payload)
        return True


__all__ = ["SelectionBus", "SelectionModel", "SelectionSnapshot"]
