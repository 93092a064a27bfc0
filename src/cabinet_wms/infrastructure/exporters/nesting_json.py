"""JSON exporter producing the same document the nesting endpoint returns."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cabinet_wms.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cabinet_wms.domain.value_objects import NestingResult


@ExporterRegistry.register("json")
class JsonExporter:
    """Serializes nesting results as a camelCase JSON array."""

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"
    media_type: ClassVar[str] = "application/json"

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def export(self, results: Sequence[NestingResult], path: Path) -> None:
        path.write_text(self.export_string(results), encoding="utf-8")

    def export_string(self, results: Sequence[NestingResult]) -> str:
        return json.dumps([result.to_dict() for result in results], indent=self.indent)
