"""Shift+arrow resizing of the most recent selection entry."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, MutableSequence, Optional, Tuple

from grid_selection.regions import (
    Cell,
    GridContext,
    InvalidRangeError,
    SelectionDescriptor,
    SelectionType,
    coerce_context,
    covers_cell,
    normalize_selection,
)
from grid_selection.runtime.telemetry import span

from .operations import cleanup_selections

_DIRECTIONS = {
    "arrowup": (-1, 0),
    "arrowdown": (1, 0),
    "arrowleft": (0, -1),
    "arrowright": (0, 1),
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Directional key press; mirrors the host's ``{key, shiftKey}`` shape."""

    key: str
    shift_key: bool = False

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "KeyEvent":
        shift = mapping.get("shift_key", mapping.get("shiftKey", False))
        return cls(key=str(mapping["key"]), shift_key=bool(shift))

    @property
    def direction(self) -> Optional[Tuple[int, int]]:
        return _DIRECTIONS.get(self.key.lower())


def _coerce_event(key_event: KeyEvent | Mapping[str, Any]) -> KeyEvent:
    if isinstance(key_event, KeyEvent):
        return key_event
    return KeyEvent.from_mapping(key_event)


def _coerce_cell(cell: Cell | Mapping[str, Any]) -> Cell:
    if isinstance(cell, Mapping):
        row = cell.get("row_index", cell.get("rowIndex"))
        column = cell.get("column_index", cell.get("columnIndex"))
    else:
        row, column = cell
    for value in (row, column):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidRangeError(f"Anchor cell needs integer indices, got {cell!r}")
    return (row, column)


def _move_edge(
    start: int, end: int, anchor: int, delta: int, limit: int
) -> Optional[Tuple[int, int]]:
    # The edge opposite the anchor moves; an anchor off both edges is not resizable.
    if limit <= 0 or anchor not in (start, end):
        return None
    focus = end if anchor == start else start
    focus = max(0, min(limit - 1, focus + delta))
    return (min(anchor, focus), max(anchor, focus))


def _active_index(working: list[SelectionDescriptor], anchor: Cell) -> int:
    for index in range(len(working) - 1, -1, -1):
        item = working[index]
        if not item.is_hole and covers_cell(item, *anchor):
            return index
    return len(working) - 1


def _resize(
    item: SelectionDescriptor, anchor: Cell, delta: Tuple[int, int], grid: GridContext
) -> Optional[SelectionDescriptor]:
    d_row, d_column = delta
    if d_row:
        if item.type is SelectionType.COLUMNS:
            return None
        edges = _move_edge(item.start_row, item.end_row, anchor[0], d_row, grid.rows)
        if edges is None:
            return None
        return replace(item, start_row=edges[0], end_row=edges[1])
    if item.type is SelectionType.ROWS:
        return None
    edges = _move_edge(
        item.start_column, item.end_column, anchor[1], d_column, grid.columns
    )
    if edges is None:
        return None
    return replace(item, start_column=edges[0], end_column=edges[1])


def shrink_or_expand_selections(
    selections: MutableSequence[SelectionDescriptor],
    cell: Cell | Mapping[str, Any],
    key_event: KeyEvent | Mapping[str, Any],
    context: GridContext | Mapping[str, Any],
) -> bool:
    """Grow or shrink the active entry by one unit away from/towards ``cell``.

    The active entry is the most recent positive entry covering ``cell``, or
    the last entry when none does. Only shift+arrow keys resize. The result is
    clamped to the grid and the set is cleaned up afterwards.
    """

    event = _coerce_event(key_event)
    delta = event.direction
    if not event.shift_key or delta is None or not selections:
        return False
    grid = coerce_context(context)
    if grid is None:
        raise InvalidRangeError("Grid extent is required to resize a selection")
    anchor = _coerce_cell(cell)

    with span(
        "selections::resize",
        component="selections",
        metadata={"key": event.key, "anchor": anchor},
    ) as handle:
        working = [normalize_selection(item) for item in selections]
        position = _active_index(working, anchor)
        active = working[position]
        if active.is_hole:
            handle.add_metadata("status", "hole")
            return False
        resized = _resize(active, anchor, delta, grid)
        if resized is None or resized == active:
            handle.add_metadata("status", "unchanged")
            return False
        working[position] = resized
        cleanup_selections(working, grid)

        changed = working != list(selections)
        handle.add_metadata("status", "resized")
        selections[:] = working
        return changed


__all__ = ["KeyEvent", "shrink_or_expand_selections"]
