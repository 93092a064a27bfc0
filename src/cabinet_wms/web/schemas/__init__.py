"""Pydantic schemas for the REST API."""

from cabinet_wms.web.schemas.common import PlacedPartSchema, SheetSizeSchema
from cabinet_wms.web.schemas.requests import (
    ConfigurationCreateRequest,
    ConfigurationNestingRequest,
    ConfigurationUpdateRequest,
    NestingRequest,
    ProjectCreateRequest,
    ProjectUpdateRequest,
    TemplateCreateRequest,
    TemplateUpdateRequest,
)
from cabinet_wms.web.schemas.responses import (
    ConfigurationSchema,
    CreatedSchema,
    ErrorResponseSchema,
    ExportFormatsSchema,
    HealthSchema,
    MessageSchema,
    NestingResultSchema,
    ProjectSchema,
    TemplateSchema,
)

__all__ = [
    "ConfigurationCreateRequest",
    "ConfigurationNestingRequest",
    "ConfigurationSchema",
    "ConfigurationUpdateRequest",
    "CreatedSchema",
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "HealthSchema",
    "MessageSchema",
    "NestingRequest",
    "NestingResultSchema",
    "PlacedPartSchema",
    "ProjectCreateRequest",
    "ProjectSchema",
    "ProjectUpdateRequest",
    "SheetSizeSchema",
    "TemplateCreateRequest",
    "TemplateSchema",
    "TemplateUpdateRequest",
]
