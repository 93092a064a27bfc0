"""Domain services."""

from .nesting import (
    NestingEngine,
    NestingError,
    compute_nesting,
    parse_cutting_list,
    resolve_sheet_size,
)

__all__ = [
    "NestingEngine",
    "NestingError",
    "compute_nesting",
    "parse_cutting_list",
    "resolve_sheet_size",
]
