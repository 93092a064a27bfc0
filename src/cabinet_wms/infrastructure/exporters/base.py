"""Base exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cabinet_wms.domain.value_objects import NestingResult


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all exporters.

    Exporters convert a list of nesting results to a specific format.

    Attributes:
        format_name: Registry name of the format (e.g., "svg", "json").
        file_extension: File extension without leading dot.
        media_type: MIME type used when the document is served over HTTP.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]
    media_type: ClassVar[str]

    @abstractmethod
    def export(self, results: Sequence[NestingResult], path: Path) -> None:
        """Export nesting results to a file."""
        ...

    @abstractmethod
    def export_string(self, results: Sequence[NestingResult]) -> str:
        """Export nesting results as a string."""
        ...


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves with the @ExporterRegistry.register
    decorator when their module is imported.

    Example:
        @ExporterRegistry.register("json")
        class JsonExporter:
            format_name = "json"
            file_extension = "json"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Decorator to register an exporter class under ``format_name``."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning("Overwriting existing exporter for format '%s'", format_name)
            cls._exporters[format_name] = exporter_class
            logger.debug("Registered exporter '%s': %s", format_name, exporter_class.__name__)
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Manages export operations to multiple formats.

    Attributes:
        output_dir: Directory where exported files will be saved.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: list[str],
        results: Sequence[NestingResult],
        project_name: str = "nesting",
    ) -> dict[str, Path]:
        """Export nesting results to several formats.

        Files are named ``{project_name}_{format}.{ext}``.

        Raises:
            KeyError: If any format is not registered.
            OSError: If file operations fail.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written: dict[str, Path] = {}
        for format_name in formats:
            exporter = ExporterRegistry.get(format_name)()
            filepath = self.output_dir / f"{project_name}_{format_name}.{exporter.file_extension}"

            logger.info("Exporting to %s: %s", format_name, filepath)
            exporter.export(results, filepath)
            written[format_name] = filepath

        return written
