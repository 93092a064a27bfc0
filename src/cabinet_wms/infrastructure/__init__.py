"""Infrastructure layer - storage, rendering and export."""

from .cut_diagram_renderer import CutDiagramRenderer
from .database import Database, StoreUnavailableError
from .exporters import (
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonExporter,
    SvgExporter,
)
from .formatters import NestingReportFormatter
from .repositories import (
    MOCK_CONFIGURATIONS,
    MOCK_PROJECTS,
    MOCK_TEMPLATES,
    MOCK_USERS,
    ConfigurationNotFoundError,
    ConfigurationRepository,
    JsonRecordRepository,
    ProjectNotFoundError,
    ProjectRepository,
    RecordNotFoundError,
    TemplateNotFoundError,
    TemplateRepository,
    UserRepository,
    hash_token,
)

__all__ = [
    "MOCK_CONFIGURATIONS",
    "MOCK_PROJECTS",
    "MOCK_TEMPLATES",
    "MOCK_USERS",
    "ConfigurationNotFoundError",
    "ConfigurationRepository",
    "CutDiagramRenderer",
    "Database",
    "DxfExporter",
    "Exporter",
    "ExportManager",
    "ExporterRegistry",
    "JsonExporter",
    "JsonRecordRepository",
    "NestingReportFormatter",
    "ProjectNotFoundError",
    "ProjectRepository",
    "RecordNotFoundError",
    "StoreUnavailableError",
    "SvgExporter",
    "TemplateNotFoundError",
    "TemplateRepository",
    "UserRepository",
    "hash_token",
]
