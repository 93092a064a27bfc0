"""Cutting-list nesting: material grouping and shelf placement on sheet stock.

The engine groups a flat cutting list by material and thickness, estimates the
number of sheets each group needs from its area, and lays the parts out
left-to-right in rows (shelves) separated by a fixed gutter.

Placement is deliberately simple. Parts that run past the sheet width wrap
back to the sheet origin instead of opening a new sheet, so ``sheet_count`` is
an area estimate that is never checked against the layout. Each wrap is
counted on the result (``overflow_resets``) and logged.
"""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from cabinet_wms.domain.value_objects import (
    DEFAULT_SHEET_LENGTH,
    DEFAULT_SHEET_WIDTH,
    CuttingListItem,
    GrainDirection,
    NestingResult,
    PlacedPart,
    SheetSize,
)

logger = logging.getLogger(__name__)

# Spacing reserved between parts and between rows (saw kerf plus handling)
GUTTER = 10.0

# Upper bound on reported efficiency; models kerf and trim loss
MAX_EFFICIENCY = 0.85

# Material filter value that disables filtering
ALL_MATERIALS = "all"


class NestingError(Exception):
    """Raised when a cutting list cannot be nested.

    Attributes:
        errors: Human-readable descriptions of what was wrong.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Nesting failed: {errors}")


def resolve_sheet_size(sheet_size: Any = None) -> SheetSize:
    """Resolve a requested sheet size, falling back to 2440 x 1220 mm.

    Accepts a mapping with ``length`` and ``width`` or a string such as
    ``"2800x2070"`` (split on a lowercase ``x``). Anything else, including
    partial, non-numeric or non-positive values, yields the default size.

    Examples:
        >>> resolve_sheet_size("2800x2070")
        SheetSize(length=2800.0, width=2070.0)
        >>> resolve_sheet_size({})
        SheetSize(length=2440.0, width=1220.0)
    """
    if isinstance(sheet_size, Mapping):
        length = _positive_number(sheet_size.get("length"))
        width = _positive_number(sheet_size.get("width"))
    elif isinstance(sheet_size, str):
        components = sheet_size.split("x")
        if len(components) < 2:
            return SheetSize()
        length = _positive_number(components[0])
        width = _positive_number(components[1])
    else:
        return SheetSize()

    if length is None or width is None:
        logger.debug("Unusable sheet size %r, using default", sheet_size)
        return SheetSize()
    return SheetSize(length=length, width=width)


def _positive_number(value: Any) -> float | None:
    """Coerce a number or numeric string to a positive finite float."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def parse_cutting_list(raw_items: Iterable[Mapping[str, Any]]) -> list[CuttingListItem]:
    """Build cutting-list items from camelCase mappings.

    Used for cutting lists that were stored without validation (saved
    configurations). Every problem is collected and raised as one error.

    Raises:
        NestingError: If any item is missing a field or has a bad value.
    """
    items: list[CuttingListItem] = []
    errors: list[str] = []

    for index, raw in enumerate(raw_items):
        if not isinstance(raw, Mapping):
            errors.append(f"cuttingList[{index}]: expected an object")
            continue
        try:
            items.append(
                CuttingListItem(
                    id=raw.get("id"),
                    material_type=_required_text(raw, "materialType"),
                    thickness=_required_number(raw, "thickness"),
                    length=_required_number(raw, "length"),
                    width=_required_number(raw, "width"),
                    quantity=_required_quantity(raw),
                    grain=raw.get("grain"),
                )
            )
        except ValueError as e:
            errors.append(f"cuttingList[{index}]: {e}")

    if errors:
        raise NestingError(errors)
    return items


def _required_text(raw: Mapping[str, Any], name: str) -> str:
    value = raw.get(name)
    if not isinstance(value, str):
        raise ValueError(f"'{name}' must be a string")
    return value


def _required_number(raw: Mapping[str, Any], name: str) -> float:
    value = raw.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{name}' must be a number")
    if not math.isfinite(value):
        raise ValueError(f"'{name}' must be finite")
    return float(value)


def _required_quantity(raw: Mapping[str, Any]) -> int:
    if raw.get("quantity") is None:
        return 1
    value = _required_number(raw, "quantity")
    if not value.is_integer():
        raise ValueError("'quantity' must be a whole number")
    return int(value)


def filter_by_material(
    items: Sequence[CuttingListItem], material_type: str | None
) -> list[CuttingListItem]:
    """Keep items matching ``material_type`` case-insensitively.

    ``None``, an empty string and ``"all"`` disable the filter.
    """
    if not material_type or material_type == ALL_MATERIALS:
        return list(items)
    wanted = material_type.lower()
    return [item for item in items if item.material_type.lower() == wanted]


def group_by_material(
    items: Sequence[CuttingListItem],
) -> dict[str, list[CuttingListItem]]:
    """Group items by ``"{materialType}-{thickness}"`` in first-seen order."""
    groups: dict[str, list[CuttingListItem]] = {}
    for item in items:
        groups.setdefault(item.group_key, []).append(item)
    return groups


@dataclass
class _ShelfCursor:
    """Placement cursor for one material group.

    Attributes:
        sheet: Sheet the group is laid out on.
        x: Next free position in the current row.
        y: Top of the current row.
        row_height: Tallest part placed in the current row so far.
        overflow_resets: Times the cursor wrapped back to the sheet origin.
    """

    sheet: SheetSize
    x: float = 0.0
    y: float = 0.0
    row_height: float = 0.0
    overflow_resets: int = 0
    placed: list[PlacedPart] = field(default_factory=list)

    def place(
        self, part_id: str, item: CuttingListItem, length: float, width: float, rotation: int
    ) -> PlacedPart:
        if self.x + length > self.sheet.length:
            self.x = 0.0
            self.y += self.row_height + GUTTER
            self.row_height = 0.0

        if self.y + width > self.sheet.width:
            # No second sheet is opened; the layout restarts at the origin.
            self.x = 0.0
            self.y = 0.0
            self.row_height = 0.0
            self.overflow_resets += 1
            logger.debug(
                "Part %s overflowed sheet width, restarting at sheet origin", item.id
            )

        part = PlacedPart(
            id=part_id,
            part_id=item.id,
            x=self.x,
            y=self.y,
            rotation=rotation,
            length=length,
            width=width,
            grain=item.grain,
        )
        self.placed.append(part)

        self.x += length + GUTTER
        self.row_height = max(self.row_height, width)
        return part


class NestingEngine:
    """Lays out cutting lists on sheet stock, one result per material group.

    The engine keeps no state between calls; every call builds its own groups
    and cursors, so one instance can serve concurrent requests.

    Example:
        engine = NestingEngine()
        results = engine.compute(items, sheet_size="2800x2070", material_type="all")
    """

    def compute(
        self,
        cutting_list: Sequence[CuttingListItem],
        sheet_size: Any = None,
        material_type: str | None = None,
    ) -> list[NestingResult]:
        """Nest a cutting list.

        Args:
            cutting_list: Items to place.
            sheet_size: Mapping, ``"LxW"`` string or None (see resolve_sheet_size).
            material_type: Optional case-insensitive material filter; "all"
                disables it.

        Returns:
            One NestingResult per material group, in first-seen group order.

        Raises:
            NestingError: If a group's numbers cannot produce a layout.
        """
        filtered = filter_by_material(cutting_list, material_type)
        groups = group_by_material(filtered)
        sheet = resolve_sheet_size(sheet_size)
        run_token = uuid.uuid4().hex[:12]

        logger.debug(
            "Nesting %d of %d items in %d material groups",
            len(filtered),
            len(cutting_list),
            len(groups),
        )

        return [
            self._nest_group(key, items, sheet, run_token)
            for key, items in groups.items()
        ]

    def _nest_group(
        self,
        key: str,
        items: list[CuttingListItem],
        sheet: SheetSize,
        run_token: str,
    ) -> NestingResult:
        """Place every unit of one material group and compute its metrics."""
        first = items[0]
        logger.info(
            "Using sheet size: %g x %gmm for %s mm",
            sheet.length,
            sheet.width,
            key,
        )

        required_area = sum(item.area for item in items)
        if not math.isfinite(required_area):
            raise NestingError([f"Material group '{key}' area is too large to nest"])
        sheet_area = sheet.area
        efficiency = min(MAX_EFFICIENCY, required_area / sheet_area)
        if efficiency <= 0:
            raise NestingError([f"Material group '{key}' has no area to nest"])
        sheet_count = math.ceil(round(required_area / (sheet_area * efficiency), 9))

        cursor = _ShelfCursor(sheet=sheet)
        index = 0
        for item in items:
            length, width, rotation = self._orient(item)
            for _ in range(item.quantity):
                cursor.place(f"part-{key}-{index}-{run_token}", item, length, width, rotation)
                index += 1

        if cursor.overflow_resets:
            logger.warning(
                "Material group %s overflowed the sheet %d time(s); "
                "parts were laid over the same sheet origin",
                key,
                cursor.overflow_resets,
            )

        total_area = sheet_area * sheet_count
        return NestingResult(
            id=f"nesting-{key}-{run_token}",
            sheet_size=sheet,
            material_type=first.material_type,
            thickness=first.thickness,
            parts=tuple(cursor.placed),
            efficiency=efficiency * 100,
            waste_area=total_area - required_area,
            total_area=total_area,
            sheet_count=sheet_count,
            overflow_resets=cursor.overflow_resets,
        )

    def _orient(self, item: CuttingListItem) -> tuple[float, float, int]:
        """Return as-placed (length, width, rotation) for an item.

        Only grain "width" turns a part. A "none" grain would allow free
        rotation but has never been used to turn parts, so it places as-is.
        """
        if item.grain == GrainDirection.WIDTH.value:
            return item.width, item.length, 90
        return item.length, item.width, 0


def compute_nesting(
    cutting_list: Sequence[CuttingListItem],
    sheet_size: Any = None,
    material_type: str | None = None,
) -> list[NestingResult]:
    """Nest a cutting list with a default engine (see NestingEngine.compute)."""
    return NestingEngine().compute(cutting_list, sheet_size, material_type)


__all__ = [
    "ALL_MATERIALS",
    "DEFAULT_SHEET_LENGTH",
    "DEFAULT_SHEET_WIDTH",
    "GUTTER",
    "MAX_EFFICIENCY",
    "NestingEngine",
    "NestingError",
    "compute_nesting",
    "filter_by_material",
    "group_by_material",
    "parse_cutting_list",
    "resolve_sheet_size",
]
