"""Value objects for cutting lists and sheet nesting.

All dataclasses are frozen (immutable); a nesting run builds them fresh and
discards them once the response is written.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Standard 4'x8' sheet in millimetres
DEFAULT_SHEET_LENGTH = 2440.0
DEFAULT_SHEET_WIDTH = 1220.0


class GrainDirection(str, Enum):
    """Grain direction values recognized on a cutting-list item.

    Attributes:
        NONE: No grain constraint.
        LENGTH: Grain runs along the part length.
        WIDTH: Grain runs along the part width; the part is turned 90 degrees
            so the grain follows the sheet.
    """

    NONE = "none"
    LENGTH = "length"
    WIDTH = "width"


@dataclass(frozen=True)
class SheetSize:
    """Sheet stock dimensions in millimetres.

    Attributes:
        length: Sheet length (the x axis of a layout).
        width: Sheet width (the y axis of a layout).
    """

    length: float = DEFAULT_SHEET_LENGTH
    width: float = DEFAULT_SHEET_WIDTH

    def __post_init__(self) -> None:
        if self.length <= 0 or self.width <= 0:
            raise ValueError("Sheet dimensions must be positive")

    @property
    def area(self) -> float:
        """Sheet area in square millimetres."""
        return self.length * self.width

    def to_dict(self) -> dict[str, float]:
        return {"length": self.length, "width": self.width}


@dataclass(frozen=True)
class CuttingListItem:
    """One distinct part type on a cutting list.

    Attributes:
        id: Opaque identifier echoed back as ``partId`` on placed parts.
        material_type: Material name, e.g. "Plywood".
        thickness: Material thickness in mm.
        length: Un-rotated part length in mm.
        width: Un-rotated part width in mm.
        quantity: Number of identical units to cut.
        grain: Raw grain value; only "width" changes placement.
    """

    id: Any
    material_type: str
    thickness: float
    length: float
    width: float
    quantity: int = 1
    grain: str | None = None

    def __post_init__(self) -> None:
        if not all(math.isfinite(v) for v in (self.length, self.width, self.thickness)):
            raise ValueError("Part dimensions must be finite")
        if self.length <= 0 or self.width <= 0:
            raise ValueError("Part dimensions must be positive")
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")
        if self.thickness < 0:
            raise ValueError("Thickness must be non-negative")

    @property
    def area(self) -> float:
        """Area of all units in square millimetres (un-rotated)."""
        return self.length * self.width * self.quantity

    @property
    def group_key(self) -> str:
        """Material group key, e.g. "Plywood-18".

        Case-sensitive on purpose: the material filter ignores case but the
        grouping key does not.
        """
        return f"{self.material_type}-{format_number(self.thickness)}"


@dataclass(frozen=True)
class PlacedPart:
    """A single unit placed on a sheet.

    Attributes:
        id: Identifier unique within one nesting response.
        part_id: ``id`` of the source cutting-list item.
        x: Left offset in mm.
        y: Top offset in mm.
        rotation: 0 or 90 degrees.
        length: As-placed length in mm (after rotation).
        width: As-placed width in mm (after rotation).
        grain: Grain value carried over from the source item.
    """

    id: str
    part_id: Any
    x: float
    y: float
    rotation: int
    length: float
    width: float
    grain: str | None = None

    @property
    def rotated(self) -> bool:
        return self.rotation == 90

    @property
    def right_edge(self) -> float:
        return self.x + self.length

    @property
    def bottom_edge(self) -> float:
        return self.y + self.width

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "partId": self.part_id,
            "x": self.x,
            "y": self.y,
            "rotation": self.rotation,
            "length": self.length,
            "width": self.width,
        }
        if self.grain is not None:
            data["grain"] = self.grain
        return data


@dataclass(frozen=True)
class NestingResult:
    """Layout and metrics for one material group.

    Attributes:
        id: Identifier unique within one nesting response.
        sheet_size: Resolved sheet dimensions.
        material_type: Material of every part in the group.
        thickness: Thickness of every part in the group.
        parts: Placed parts in placement order.
        efficiency: Packing efficiency percentage, never above 85.
        waste_area: Stock area not covered by parts, in mm2.
        total_area: Stock area consumed (sheet area times sheet count), in mm2.
        sheet_count: Area-based estimate of sheets needed.
        overflow_resets: Times placement wrapped back to the sheet origin
            because a row ran past the sheet width.
    """

    id: str
    sheet_size: SheetSize
    material_type: str
    thickness: float
    parts: tuple[PlacedPart, ...]
    efficiency: float
    waste_area: float
    total_area: float
    sheet_count: int
    overflow_resets: int = field(default=0, compare=False)

    @property
    def part_count(self) -> int:
        return len(self.parts)

    @property
    def required_area(self) -> float:
        """Area covered by parts, in mm2."""
        return self.total_area - self.waste_area

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase JSON shape returned by the API."""
        return {
            "id": self.id,
            "sheetSize": self.sheet_size.to_dict(),
            "materialType": self.material_type,
            "thickness": self.thickness,
            "parts": [part.to_dict() for part in self.parts],
            "efficiency": self.efficiency,
            "wasteArea": self.waste_area,
            "totalArea": self.total_area,
            "sheetCount": self.sheet_count,
        }


def format_number(value: float) -> str:
    """Render a number the way JSON prints it (18.0 -> "18", 18.5 -> "18.5")."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
