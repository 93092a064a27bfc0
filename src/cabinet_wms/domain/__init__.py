"""Domain layer - cutting lists, sheet sizes, nesting and API users."""

from .entities import User
from .services import NestingEngine, NestingError, compute_nesting, resolve_sheet_size
from .value_objects import (
    CuttingListItem,
    GrainDirection,
    NestingResult,
    PlacedPart,
    SheetSize,
)

__all__ = [
    "CuttingListItem",
    "GrainDirection",
    "NestingEngine",
    "NestingError",
    "NestingResult",
    "PlacedPart",
    "SheetSize",
    "User",
    "compute_nesting",
    "resolve_sheet_size",
]
