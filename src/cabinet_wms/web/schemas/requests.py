"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import Field

from cabinet_wms.application.config.schema import CamelModel, NestingInput, NestingOptions


class NestingRequest(NestingInput):
    """Request for nesting a cutting list."""


class ConfigurationNestingRequest(NestingOptions):
    """Options for nesting the cutting list of a saved configuration."""


class ConfigurationCreateRequest(CamelModel):
    """Request for saving a cabinet configuration."""

    name: str = Field(..., min_length=1, description="Configuration name")
    template_id: str | None = Field(default=None, description="Source template id")
    dimensions: dict[str, Any] = Field(
        default_factory=dict, description="Cabinet dimensions in mm"
    )
    materials: list[Any] = Field(default_factory=list, description="Materials used")
    cutting_list: list[dict[str, Any]] = Field(
        default_factory=list, description="Cutting-list items"
    )


class ConfigurationUpdateRequest(CamelModel):
    """Request for updating a configuration; omitted fields are left as is."""

    name: str | None = Field(default=None, min_length=1, description="Configuration name")
    template_id: str | None = Field(default=None, description="Source template id")
    dimensions: dict[str, Any] | None = Field(default=None, description="Cabinet dimensions")
    materials: list[Any] | None = Field(default=None, description="Materials used")
    cutting_list: list[dict[str, Any]] | None = Field(
        default=None, description="Cutting-list items"
    )


class TemplateCreateRequest(CamelModel):
    """Request for saving a custom cabinet template."""

    name: str = Field(..., min_length=1, description="Template name")
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
    construction: dict[str, Any] = Field(
        default_factory=dict, description="Construction details"
    )


class TemplateUpdateRequest(CamelModel):
    """Request for updating a template; omitted fields are left as is."""

    name: str | None = Field(default=None, min_length=1, description="Template name")
    description: str | None = None
    category: str | None = None
    default_dimensions: dict[str, Any] | None = None
    min_dimensions: dict[str, Any] | None = None
    max_dimensions: dict[str, Any] | None = None
    panels: list[Any] | None = None
    hardware: list[Any] | None = None
    materials: list[Any] | None = None
    construction: dict[str, Any] | None = None


class ProjectCreateRequest(CamelModel):
    """Request for saving a customer project."""

    name: str = Field(..., min_length=1, description="Project name")
    description: str | None = Field(default=None, description="Free-text description")
    configurations: list[int] = Field(
        default_factory=list, description="Ids of the configurations in the project"
    )


class ProjectUpdateRequest(CamelModel):
    """Request for updating a project; omitted fields are left as is."""

    name: str | None = Field(default=None, min_length=1, description="Project name")
    description: str | None = None
    configurations: list[int] | None = None
