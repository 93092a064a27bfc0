"""Pydantic models for nesting input.

The same models validate API request bodies and cutting-list JSON files.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cabinet_wms.domain.value_objects import CuttingListItem


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CuttingListItemInput(CamelModel):
    """One part type on a cutting list."""

    id: Any = Field(default=None, description="Part identifier, echoed as partId")
    material_type: str = Field(..., description="Material name, e.g. Plywood")
    thickness: float = Field(
        ..., ge=0, strict=True, allow_inf_nan=False, description="Thickness in mm"
    )
    length: float = Field(
        ..., gt=0, strict=True, allow_inf_nan=False, description="Length in mm"
    )
    width: float = Field(
        ..., gt=0, strict=True, allow_inf_nan=False, description="Width in mm"
    )
    quantity: int = Field(default=1, ge=1, strict=True, description="Units to cut")
    grain: str | None = Field(
        default=None, description="Grain direction: none, length or width"
    )

    def to_domain(self) -> CuttingListItem:
        return CuttingListItem(
            id=self.id,
            material_type=self.material_type,
            thickness=self.thickness,
            length=self.length,
            width=self.width,
            quantity=self.quantity,
            grain=self.grain,
        )


class NestingOptions(CamelModel):
    """Sheet size and material filter for a nesting run."""

    sheet_size: Any = Field(
        default=None,
        description='Sheet size as {"length", "width"} or "LENGTHxWIDTH"; '
        "anything unusable falls back to 2440x1220",
    )
    material_type: str | None = Field(
        default=None, description='Material filter; "all" or omitted keeps everything'
    )


class NestingInput(NestingOptions):
    """A cutting list plus nesting options."""

    cutting_list: list[CuttingListItemInput] = Field(
        ..., description="Parts to nest"
    )

    def to_domain(self) -> list[CuttingListItem]:
        return [item.to_domain() for item in self.cutting_list]
