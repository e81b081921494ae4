"""Compact textual selection expressions (``cells:1,2-3,4``, ``rows:5-9``)."""

from __future__ import annotations

import re

from .models import InvalidRangeError, SelectionDescriptor, SelectionType
from .normalize import normalize_selection

_CELLS_PATTERN = re.compile(
    r"^cells?\s*:\s*(\d+)\s*,\s*(\d+)(?:\s*-\s*(\d+)\s*,\s*(\d+))?$", re.IGNORECASE
)
_ROWS_PATTERN = re.compile(r"^rows?\s*:\s*(\d+)(?:\s*-\s*(\d+))?$", re.IGNORECASE)
_COLUMNS_PATTERN = re.compile(
    r"^(?:cols?|columns?)\s*:\s*(\d+)(?:\s*-\s*(\d+))?$", re.IGNORECASE
)


class SelectionParseError(ValueError):
    """Raised when a selection expression matches none of the grammars."""

    def __init__(self, message: str, *, expression: object | None = None) -> None:
        super().__init__(message)
        self.expression = expression


def _optional_int(value: str | None) -> int | None:
    return None if value is None else int(value)


def get_selection_from_string(expression: str) -> SelectionDescriptor:
    """Parse ``expression`` into a normalized descriptor.

    Supported forms: ``cells:R1,C1-R2,C2`` (or ``cells:R,C``), ``row:N``,
    ``rows:N1-N2``, ``col:N`` and ``cols:N1-N2``.
    """

    if not isinstance(expression, str):
        raise SelectionParseError(
            f"Selection expression must be a string, got {type(expression).__name__}",
            expression=expression,
        )
    compact = expression.strip()

    match = _CELLS_PATTERN.match(compact)
    if match:
        start_row, start_column, end_row, end_column = match.groups()
        descriptor = SelectionDescriptor.cells(
            int(start_row),
            int(start_column),
            _optional_int(end_row),
            _optional_int(end_column),
        )
        return normalize_selection(descriptor)

    match = _ROWS_PATTERN.match(compact)
    if match:
        start, end = match.groups()
        return normalize_selection(
            SelectionDescriptor.rows(int(start), _optional_int(end))
        )

    match = _COLUMNS_PATTERN.match(compact)
    if match:
        start, end = match.groups()
        return normalize_selection(
            SelectionDescriptor.columns(int(start), _optional_int(end))
        )

    raise SelectionParseError(
        f"Unrecognized selection expression {expression!r}", expression=expression
    )


def selection_to_string(descriptor: SelectionDescriptor) -> str:
    """Format a descriptor in the grammar accepted by ``get_selection_from_string``."""

    item = normalize_selection(descriptor)
    if item.type is SelectionType.ROWS:
        if item.start_row == item.end_row:
            return f"row:{item.start_row}"
        return f"rows:{item.start_row}-{item.end_row}"
    if item.type is SelectionType.COLUMNS:
        return f"cols:{item.start_column}-{item.end_column}"
    if item.type is SelectionType.CELLS:
        return (
            f"cells:{item.start_row},{item.start_column}"
            f"-{item.end_row},{item.end_column}"
        )
    raise InvalidRangeError(
        "UnselectedCells has no textual form", descriptor=descriptor
    )


__all__ = [
    "SelectionParseError",
    "get_selection_from_string",
    "selection_to_string",
]
