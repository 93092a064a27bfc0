"""Common Pydantic schemas shared across requests and responses."""

from typing import Any

from pydantic import Field

from cabinet_wms.application.config.schema import CamelModel


class SheetSizeSchema(CamelModel):
    """Sheet stock dimensions in mm."""

    length: float = Field(..., gt=0, description="Sheet length in mm")
    width: float = Field(..., gt=0, description="Sheet width in mm")


class PlacedPartSchema(CamelModel):
    """One unit of a cutting-list item placed on a sheet."""

    id: str = Field(..., description="Placement identifier")
    part_id: Any = Field(default=None, description="Source cutting-list item id")
    x: float = Field(..., description="Left offset in mm")
    y: float = Field(..., description="Top offset in mm")
    rotation: int = Field(..., description="0 or 90 degrees")
    length: float = Field(..., description="As-placed length in mm")
    width: float = Field(..., description="As-placed width in mm")
    grain: str | None = Field(default=None, description="Grain direction")
