"""In-place mutators for a selection-set.

Each mutator computes the new set on a scratch list and installs it with a
slice assignment at the very end, so an exception leaves the caller's list
untouched. All of them return whether the set changed.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, List, Mapping, MutableSequence, Optional, Sequence

from grid_selection.algebra import merge_selections, subtract_selection
from grid_selection.regions import (
    GridContext,
    InvalidRangeError,
    SelectionDescriptor,
    SelectionType,
    coerce_context,
    contains,
    get_intersection,
    normalize_selection,
    promote_selection,
    to_cell_range,
)
from grid_selection.runtime.telemetry import span

from .queries import are_all_cells_selected

ContextLike = GridContext | Mapping[str, Any] | None


def _incoming(
    descriptor: SelectionDescriptor | Mapping[str, Any], action: str
) -> SelectionDescriptor:
    item = normalize_selection(descriptor)
    if item.is_hole:
        raise InvalidRangeError(
            f"UnselectedCells cannot be used to {action} a selection", descriptor=item
        )
    return item


def _already_covered(
    selections: Sequence[SelectionDescriptor], candidate: SelectionDescriptor
) -> bool:
    if any(
        item.is_hole and get_intersection(item, candidate) is not None
        for item in selections
    ):
        return False
    if any(contains(item, candidate) for item in selections):
        return True
    if candidate.type is SelectionType.CELLS:
        return are_all_cells_selected(selections, to_cell_range(candidate))
    return False


def _clear_holes(
    working: List[SelectionDescriptor],
    candidate: SelectionDescriptor,
    context: Optional[GridContext],
) -> int:
    # Holes under a newly selected region are trimmed in place.
    kept: List[SelectionDescriptor] = []
    cleared = 0
    for item in working:
        residual = subtract_selection(item, candidate, context) if item.is_hole else None
        if residual is None:
            kept.append(item)
            continue
        cleared += 1
        kept.extend(residual)
    working[:] = kept
    return cleared


def _merge_to_fixed_point(
    working: List[SelectionDescriptor], context: Optional[GridContext]
) -> None:
    # Lowest-indexed mergeable pair first; the fused region keeps slot ``i``.
    merged = True
    while merged:
        merged = False
        for i in range(len(working)):
            for j in range(i + 1, len(working)):
                fused = merge_selections(working[i], working[j], context)
                if fused is None:
                    continue
                working[i] = fused
                del working[j]
                merged = True
                break
            if merged:
                break


def _cleanup(
    working: List[SelectionDescriptor], context: Optional[GridContext]
) -> None:
    unique: List[SelectionDescriptor] = []
    for item in working:
        normalized = promote_selection(normalize_selection(item), context)
        if normalized not in unique:
            unique.append(normalized)
    _merge_to_fixed_point(unique, context)
    working[:] = unique


def cleanup_selections(
    selections: MutableSequence[SelectionDescriptor], context: ContextLike = None
) -> bool:
    """Normalize, de-duplicate and merge entries until no pair can fuse.

    The result is a local fixed point: merging always takes the lowest
    ``(i, j)`` pair first, which does not guarantee the globally smallest set.
    """

    grid = coerce_context(context)
    with span(
        "selections::cleanup",
        component="selections",
        metadata={"count": len(selections)},
    ) as handle:
        working = list(selections)
        _cleanup(working, grid)
        changed = working != list(selections)
        handle.add_metadata("changed", changed)
        selections[:] = working
        return changed


def add_into_selections(
    selections: MutableSequence[SelectionDescriptor],
    add: SelectionDescriptor | Mapping[str, Any],
    context: ContextLike = None,
) -> bool:
    """Add ``add`` to the set, merging it with every entry it can fuse with.

    The merged region takes the slot of the first entry it absorbed; when it
    absorbs nothing it is appended. UnselectedCells entries overlapping ``add``
    are trimmed so the region reads as selected afterwards.
    """

    grid = coerce_context(context)
    candidate = promote_selection(_incoming(add, "add"), grid)
    with span(
        "selections::add",
        component="selections",
        metadata={"type": candidate.type.label, "count": len(selections)},
    ) as handle:
        working = [normalize_selection(item) for item in selections]
        if _already_covered(working, candidate):
            handle.add_metadata("status", "covered")
            return False
        handle.add_metadata("holes_cleared", _clear_holes(working, candidate, grid))

        merged = candidate
        slot: Optional[int] = None
        index = 0
        while index < len(working):
            fused = merge_selections(working[index], merged, grid)
            if fused is None:
                index += 1
                continue
            merged = fused
            del working[index]
            if slot is None:
                slot = index
            elif index < slot:
                slot -= 1
            index = 0
        working.insert(len(working) if slot is None else slot, merged)
        _cleanup(working, grid)

        changed = working != list(selections)
        handle.add_metadata("status", "merged" if slot is not None else "appended")
        selections[:] = working
        return changed


def remove_from_selections(
    selections: MutableSequence[SelectionDescriptor],
    remove: SelectionDescriptor | Mapping[str, Any],
    context: ContextLike = None,
) -> bool:
    """Subtract ``remove`` from every entry; residuals take the entry's slot."""

    grid = coerce_context(context)
    target = _incoming(remove, "remove from")
    with span(
        "selections::remove",
        component="selections",
        metadata={"type": target.type.label, "count": len(selections)},
    ) as handle:
        working: List[SelectionDescriptor] = []
        touched = 0
        for item in selections:
            residual = subtract_selection(item, target, grid)
            if residual is None:
                working.append(normalize_selection(item))
                continue
            touched += 1
            working.extend(residual)
        _cleanup(working, grid)

        changed = working != list(selections)
        handle.add_metadata("touched", touched)
        selections[:] = working
        return changed


def _shift(
    item: SelectionDescriptor, offset_x: int, offset_y: int
) -> SelectionDescriptor:
    if item.type is SelectionType.ROWS:
        return replace(
            item, start_row=item.start_row + offset_y, end_row=item.end_row + offset_y
        )
    if item.type is SelectionType.COLUMNS:
        return replace(
            item,
            start_column=item.start_column + offset_x,
            end_column=item.end_column + offset_x,
        )
    return replace(
        item,
        start_row=item.start_row + offset_y,
        end_row=item.end_row + offset_y,
        start_column=item.start_column + offset_x,
        end_column=item.end_column + offset_x,
    )


def move_selections(
    selections: MutableSequence[SelectionDescriptor], offset_x: int, offset_y: int
) -> bool:
    """Translate every entry by ``offset_x`` columns and ``offset_y`` rows.

    No clamping to the grid is applied.
    """

    for value in (offset_x, offset_y):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidRangeError(f"Offsets must be integers, got {value!r}")
    with span(
        "selections::move",
        component="selections",
        metadata={"offset_x": offset_x, "offset_y": offset_y},
    ):
        working = [
            _shift(normalize_selection(item), offset_x, offset_y)
            for item in selections
        ]
        changed = working != list(selections)
        selections[:] = working
        return changed


def clone_selections(
    selections: Sequence[SelectionDescriptor],
) -> List[SelectionDescriptor]:
    return [replace(item) for item in selections]


def select_everything(context: ContextLike) -> List[SelectionDescriptor]:
    """Set covering the whole grid (empty for a grid without cells)."""

    grid = coerce_context(context)
    if grid is None:
        raise InvalidRangeError("Grid extent is required to select every cell")
    if grid.rows == 0 or grid.columns == 0:
        return []
    return [SelectionDescriptor.rows(0, grid.last_row)]


__all__ = [
    "add_into_selections",
    "cleanup_selections",
    "clone_selections",
    "move_selections",
    "remove_from_selections",
    "select_everything",
]
