"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from cabinet_wms.application.config.schema import CamelModel
from cabinet_wms.web.schemas.common import PlacedPartSchema, SheetSizeSchema


class NestingResultSchema(CamelModel):
    """Layout and metrics for one material group."""

    id: str = Field(..., description="Result identifier")
    sheet_size: SheetSizeSchema = Field(..., description="Sheet size used")
    material_type: str = Field(..., description="Material of the group")
    thickness: float = Field(..., description="Thickness of the group in mm")
    parts: list[PlacedPartSchema] = Field(..., description="Placed parts")
    efficiency: float = Field(..., description="Packing efficiency percent, at most 85")
    waste_area: float = Field(..., description="Unused stock area in mm2")
    total_area: float = Field(..., description="Stock area consumed in mm2")
    sheet_count: int = Field(..., description="Estimated sheets needed")


class ConfigurationSchema(CamelModel):
    """A saved cabinet configuration."""

    id: int = Field(..., description="Configuration id")
    name: str = Field(..., description="Configuration name")
    template_id: str | None = Field(default=None, description="Source template id")
    dimensions: dict[str, Any] = Field(default_factory=dict, description="Dimensions")
    materials: list[Any] = Field(default_factory=list, description="Materials used")
    cutting_list: list[dict[str, Any]] = Field(
        default_factory=list, description="Cutting-list items"
    )
    created_by: int | None = Field(default=None, description="Creating user id")
    created_at: str | None = Field(default=None, description="Creation timestamp")
    updated_at: str | None = Field(default=None, description="Last update timestamp")


class TemplateSchema(CamelModel):
    """A saved custom cabinet template."""

    id: int = Field(..., description="Template id")
    name: str = Field(..., description="Template name")
    description: str | None = Field(default=None, description="Free-text description")
    category: str | None = Field(default=None, description="Category, e.g. base or wall")
    default_dimensions: dict[str, Any] = Field(
        default_factory=dict, description="Default width, height and depth in mm"
    )
    min_dimensions: dict[str, Any] = Field(default_factory=dict, description="Lower limits")
    max_dimensions: dict[str, Any] = Field(default_factory=dict, description="Upper limits")
    panels: list[Any] = Field(default_factory=list, description="Panels making up the carcass")
    hardware: list[Any] = Field(default_factory=list, description="Hardware items")
    materials: list[Any] = Field(default_factory=list, description="Materials used")
    construction: dict[str, Any] = Field(default_factory=dict, description="Construction details")
    created_by: int | None = Field(default=None, description="Creating user id")
    created_at: str | None = Field(default=None, description="Creation timestamp")
    updated_at: str | None = Field(default=None, description="Last update timestamp")


class ProjectSchema(CamelModel):
    """A customer project grouping saved configurations."""

    id: int = Field(..., description="Project id")
    name: str = Field(..., description="Project name")
    description: str | None = Field(default=None, description="Free-text description")
    configurations: list[Any] = Field(
        default_factory=list, description="Ids of the configurations in the project"
    )
    created_by: int | None = Field(default=None, description="Creating user id")
    created_at: str | None = Field(default=None, description="Creation timestamp")
    updated_at: str | None = Field(default=None, description="Last update timestamp")


class CreatedSchema(BaseModel):
    """Response for a newly saved record."""

    id: int = Field(..., description="New record id")
    message: str = Field(..., description="Confirmation message")


class MessageSchema(BaseModel):
    """Plain confirmation message."""

    message: str = Field(..., description="Confirmation message")


class HealthSchema(BaseModel):
    """Service health."""

    status: str = Field(..., description="OK when the service is up")
    database: str = Field(..., description="connected or disconnected")


class ExportFormatsSchema(BaseModel):
    """Response for listing export formats."""

    formats: list[str] = Field(..., description="Available export format names")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
