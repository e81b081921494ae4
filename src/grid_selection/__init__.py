"""UI-agnostic selection-region algebra for spreadsheet-like grids."""

__all__ = [
    "adapters",
    "algebra",
    "regions",
    "runtime",
    "selections",
]

__version__ = "0.1.0"
