"""Dataclasses describing selection regions, query windows and grid extent."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from numbers import Integral
from typing import Any, Mapping, Optional, Tuple

Cell = Tuple[int, int]  # (row, column)


class InvalidRangeError(ValueError):
    """Raised for descriptors, ranges or extents that cannot be normalized."""

    def __init__(self, message: str, *, descriptor: object | None = None) -> None:
        super().__init__(message)
        self.descriptor = descriptor


class SelectionType(IntEnum):
    CELLS = 0
    ROWS = 1
    COLUMNS = 2
    UNSELECTED_CELLS = 3

    @property
    def label(self) -> str:
        return _TYPE_LABELS[self]

    @classmethod
    def parse(cls, value: object) -> "SelectionType":
        """Accept an enum member, its integer code or a host type name."""

        if isinstance(value, SelectionType):
            return value
        if isinstance(value, Integral) and not isinstance(value, bool):
            try:
                return cls(int(value))
            except ValueError as exc:
                raise InvalidRangeError(f"Unknown selection type {value!r}") from exc
        if isinstance(value, str):
            key = value.replace("_", "").replace("-", "").strip().lower()
            if key in _TYPE_ALIASES:
                return _TYPE_ALIASES[key]
        raise InvalidRangeError(f"Unknown selection type {value!r}")


_TYPE_LABELS = {
    SelectionType.CELLS: "Cells",
    SelectionType.ROWS: "Rows",
    SelectionType.COLUMNS: "Columns",
    SelectionType.UNSELECTED_CELLS: "UnselectedCells",
}
_TYPE_ALIASES = {label.lower(): kind for kind, label in _TYPE_LABELS.items()}

_BOUND_FIELDS = ("start_row", "start_column", "end_row", "end_column")
_REQUIRED_FIELDS = {
    SelectionType.CELLS: ("start_row", "start_column"),
    SelectionType.ROWS: ("start_row",),
    SelectionType.COLUMNS: ("start_column",),
    SelectionType.UNSELECTED_CELLS: ("start_row", "start_column"),
}
_CAMEL_KEYS = {
    "startRow": "start_row",
    "startColumn": "start_column",
    "endRow": "end_row",
    "endColumn": "end_column",
}


def _is_index(value: object) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _read_bounds(mapping: Mapping[str, Any], owner: str) -> dict[str, Any]:
    bounds: dict[str, Any] = {}
    for camel, snake in _CAMEL_KEYS.items():
        if snake in mapping:
            bounds[snake] = mapping[snake]
        elif camel in mapping:
            bounds[snake] = mapping[camel]
    unknown = set(mapping) - set(_CAMEL_KEYS) - set(_CAMEL_KEYS.values()) - {"type"}
    if unknown:
        raise InvalidRangeError(
            f"Unexpected keys for {owner}: {sorted(unknown)}", descriptor=mapping
        )
    return bounds


@dataclass(frozen=True, slots=True)
class SelectionDescriptor:
    """One tagged selection region.

    ``Rows`` span every column and ``Columns`` span every row, so only one axis
    of their bounds is meaningful. Instances may be built with reversed or
    missing end bounds; :func:`grid_selection.regions.normalize_selection`
    produces the canonical form every engine operation works on.
    """

    type: SelectionType
    start_row: Optional[int] = None
    start_column: Optional[int] = None
    end_row: Optional[int] = None
    end_column: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", SelectionType.parse(self.type))
        for name in _BOUND_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if not _is_index(value):
                raise InvalidRangeError(
                    f"{name} must be an integer, got {value!r}", descriptor=self
                )
            object.__setattr__(self, name, int(value))
        missing = [
            name for name in _REQUIRED_FIELDS[self.type] if getattr(self, name) is None
        ]
        if missing:
            raise InvalidRangeError(
                f"{self.type.label} selection requires {', '.join(missing)}",
                descriptor=self,
            )

    @classmethod
    def cells(
        cls,
        start_row: int,
        start_column: int,
        end_row: Optional[int] = None,
        end_column: Optional[int] = None,
    ) -> "SelectionDescriptor":
        return cls(SelectionType.CELLS, start_row, start_column, end_row, end_column)

    @classmethod
    def unselected_cells(
        cls,
        start_row: int,
        start_column: int,
        end_row: Optional[int] = None,
        end_column: Optional[int] = None,
    ) -> "SelectionDescriptor":
        return cls(
            SelectionType.UNSELECTED_CELLS,
            start_row,
            start_column,
            end_row,
            end_column,
        )

    @classmethod
    def rows(cls, start_row: int, end_row: Optional[int] = None) -> "SelectionDescriptor":
        return cls(SelectionType.ROWS, start_row, 0, end_row, 0)

    @classmethod
    def columns(
        cls, start_column: int, end_column: Optional[int] = None
    ) -> "SelectionDescriptor":
        return cls(SelectionType.COLUMNS, 0, start_column, 0, end_column)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "SelectionDescriptor":
        """Build a descriptor from a host dict (camelCase or snake_case keys)."""

        if "type" not in mapping:
            raise InvalidRangeError("Selection mapping requires 'type'", descriptor=mapping)
        return cls(mapping["type"], **_read_bounds(mapping, "selection"))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type.label}
        for camel, snake in _CAMEL_KEYS.items():
            payload[camel] = getattr(self, snake)
        return payload

    @property
    def is_cells_like(self) -> bool:
        return self.type in (SelectionType.CELLS, SelectionType.UNSELECTED_CELLS)

    @property
    def is_hole(self) -> bool:
        return self.type is SelectionType.UNSELECTED_CELLS


@dataclass(frozen=True, slots=True)
class CellRange:
    """Rectangular query window; bounds are reordered on construction."""

    start_row: int
    start_column: int
    end_row: int
    end_column: int

    def __post_init__(self) -> None:
        for name in _BOUND_FIELDS:
            value = getattr(self, name)
            if not _is_index(value):
                raise InvalidRangeError(
                    f"{name} must be an integer, got {value!r}", descriptor=self
                )
        if self.start_row > self.end_row:
            start, end = self.end_row, self.start_row
            object.__setattr__(self, "start_row", start)
            object.__setattr__(self, "end_row", end)
        if self.start_column > self.end_column:
            start, end = self.end_column, self.start_column
            object.__setattr__(self, "start_column", start)
            object.__setattr__(self, "end_column", end)

    @classmethod
    def single(cls, row: int, column: int) -> "CellRange":
        return cls(row, column, row, column)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "CellRange":
        bounds = _read_bounds(mapping, "range")
        missing = [name for name in _BOUND_FIELDS if name not in bounds]
        if missing:
            raise InvalidRangeError(
                f"Range requires {', '.join(missing)}", descriptor=mapping
            )
        return cls(**bounds)

    @property
    def height(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def width(self) -> int:
        return self.end_column - self.start_column + 1

    @property
    def area(self) -> int:
        return self.height * self.width

    def contains(self, row: int, column: int) -> bool:
        return (
            self.start_row <= row <= self.end_row
            and self.start_column <= column <= self.end_column
        )


@dataclass(frozen=True, slots=True)
class GridContext:
    """Total grid extent used to resolve the implicit span of rows/columns."""

    rows: int
    columns: int

    def __post_init__(self) -> None:
        for name in ("rows", "columns"):
            value = getattr(self, name)
            if not _is_index(value) or value < 0:
                raise InvalidRangeError(
                    f"Grid {name} must be a non-negative integer, got {value!r}",
                    descriptor=self,
                )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "GridContext":
        try:
            return cls(rows=mapping["rows"], columns=mapping["columns"])
        except KeyError as exc:
            raise InvalidRangeError(
                f"Grid context requires {exc.args[0]!r}", descriptor=mapping
            ) from exc

    @property
    def last_row(self) -> int:
        return self.rows - 1

    @property
    def last_column(self) -> int:
        return self.columns - 1


@dataclass(frozen=True, slots=True)
class SelectionBounds:
    """Bounding rectangle of a selection-set; infinite members when empty."""

    top: float = math.inf
    left: float = math.inf
    bottom: float = -math.inf
    right: float = -math.inf

    @property
    def is_empty(self) -> bool:
        return self.top > self.bottom or self.left > self.right

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.top, self.left, self.bottom, self.right)


def coerce_context(
    context: GridContext | Mapping[str, Any] | None,
) -> Optional[GridContext]:
    if context is None or isinstance(context, GridContext):
        return context
    return GridContext.from_mapping(context)


def coerce_range(cell_range: CellRange | Mapping[str, Any]) -> CellRange:
    if isinstance(cell_range, CellRange):
        return cell_range
    return CellRange.from_mapping(cell_range)


def coerce_descriptor(
    descriptor: SelectionDescriptor | Mapping[str, Any],
) -> SelectionDescriptor:
    if isinstance(descriptor, SelectionDescriptor):
        return descriptor
    return SelectionDescriptor.from_mapping(descriptor)


__all__ = [
    "Cell",
    "CellRange",
    "GridContext",
    "InvalidRangeError",
    "SelectionBounds",
    "SelectionDescriptor",
    "SelectionType",
    "coerce_context",
    "coerce_descriptor",
    "coerce_range",
]
