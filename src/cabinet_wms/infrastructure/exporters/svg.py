"""SVG exporter for cut diagrams.

Wraps CutDiagramRenderer to write every material group into one SVG
document, or one file per group.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cabinet_wms.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cabinet_wms.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cabinet_wms.domain.value_objects import NestingResult


@ExporterRegistry.register("svg")
class SvgExporter:
    """SVG exporter for nesting cut diagrams.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"
    media_type: ClassVar[str] = "image/svg+xml"

    def __init__(
        self,
        scale: float = 0.25,
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_grain: bool = True,
    ) -> None:
        """Initialize the SVG exporter.

        Args:
            scale: Pixels per millimetre (default 0.25).
            show_dimensions: Whether to show part dimensions.
            show_labels: Whether to show part identifiers.
            show_grain: Whether to show grain direction arrows.
        """
        self.renderer = CutDiagramRenderer(
            scale=scale,
            show_dimensions=show_dimensions,
            show_labels=show_labels,
            show_grain=show_grain,
        )

    def export(self, results: Sequence[NestingResult], path: Path) -> None:
        path.write_text(self.export_string(results), encoding="utf-8")

    def export_string(self, results: Sequence[NestingResult]) -> str:
        return self.renderer.render_combined_svg(results)

    def export_individual_sheets(
        self, results: Sequence[NestingResult], base_path: Path
    ) -> list[Path]:
        """Write one SVG per material group.

        Files are named {stem}_1.svg, {stem}_2.svg, ... unless there is only
        one group, in which case ``base_path`` is used as-is.
        """
        svgs = self.renderer.render_all_svg(results)
        created_files: list[Path] = []

        for i, svg_content in enumerate(svgs, start=1):
            if len(svgs) == 1:
                file_path = base_path
            else:
                suffix = base_path.suffix or ".svg"
                file_path = base_path.parent / f"{base_path.stem}_{i}{suffix}"
            file_path.write_text(svg_content, encoding="utf-8")
            created_files.append(file_path)

        return created_files
