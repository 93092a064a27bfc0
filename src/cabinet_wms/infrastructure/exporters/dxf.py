"""DXF format exporter for nesting layouts.

Generates 2D DXF files (R2010 format) for CNC panel saws and routers. Each
material group is drawn as its sheet outline with the placed parts inside;
groups are stacked below one another in a single drawing. Units are mm.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, cast

import ezdxf
from ezdxf import units

from cabinet_wms.domain.value_objects import format_number
from cabinet_wms.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from cabinet_wms.domain.value_objects import NestingResult, PlacedPart


logger = logging.getLogger(__name__)


# Layer configuration for DXF output
LAYERS = {
    "SHEET": {"color": 8},  # Gray - sheet outline
    "PARTS": {"color": 7},  # White - part outlines
    "LABELS": {"color": 5},  # Blue - text labels
}


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports nesting layouts to DXF.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
        sheet_spacing: Gap between stacked sheets in mm.
        show_labels: Whether to write part labels.
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"
    media_type: ClassVar[str] = "application/dxf"

    def __init__(self, sheet_spacing: float = 200.0, show_labels: bool = True) -> None:
        if sheet_spacing < 0:
            raise ValueError("Sheet spacing must be non-negative")
        self.sheet_spacing = sheet_spacing
        self.show_labels = show_labels

    def export(self, results: Sequence[NestingResult], path: Path) -> None:
        if not results:
            logger.warning("No nesting results to export")
        doc = self.build_document(results)
        doc.saveas(path)
        logger.info("Exported nesting DXF to %s", path)

    def export_string(self, results: Sequence[NestingResult]) -> str:
        doc = self.build_document(results)
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def build_document(self, results: Sequence[NestingResult]) -> Drawing:
        """Create a DXF drawing with every material group laid out."""
        doc = ezdxf.new("R2010")
        doc.units = units.MM
        for name, props in LAYERS.items():
            doc.layers.add(name, color=cast(int, props["color"]))

        msp = doc.modelspace()
        # Sheets are stacked downwards from the origin
        top = 0.0
        for result in results:
            self._draw_sheet(msp, result, top)
            top -= result.sheet_size.width + self.sheet_spacing
        return doc

    def _draw_sheet(self, msp: Modelspace, result: NestingResult, top: float) -> None:
        sheet = result.sheet_size
        bottom = top - sheet.width
        self._draw_rectangle(msp, 0.0, bottom, sheet.length, sheet.width, "SHEET")

        if self.show_labels:
            msp.add_text(
                f"{result.material_type} {format_number(result.thickness)}mm",
                height=max(10.0, sheet.width * 0.02),
                dxfattribs={"layer": "LABELS", "insert": (0.0, top + 10.0)},
            )

        for part in result.parts:
            # Layout y grows downwards from the sheet top edge
            x = part.x
            y = top - part.y - part.width
            self._draw_rectangle(msp, x, y, part.length, part.width, "PARTS")
            if self.show_labels:
                self._draw_label(msp, part, x, y)

    def _draw_rectangle(
        self,
        msp: Modelspace,
        x: float,
        y: float,
        length: float,
        width: float,
        layer: str,
    ) -> None:
        msp.add_lwpolyline(
            [(x, y), (x + length, y), (x + length, y + width), (x, y + width)],
            close=True,
            dxfattribs={"layer": layer},
        )

    def _draw_label(self, msp: Modelspace, part: PlacedPart, x: float, y: float) -> None:
        dims = f"{format_number(part.length)} x {format_number(part.width)}"
        if part.rotated:
            dims += " R"
        label = dims if part.part_id is None else f"{part.part_id}\\P{dims}"

        text_height = max(4.0, min(25.0, min(part.length, part.width) * 0.08))
        msp.add_mtext(
            label,
            dxfattribs={
                "layer": "LABELS",
                "char_height": text_height,
                "insert": (x + part.length / 2, y + part.width / 2),
                "attachment_point": 5,  # MIDDLE_CENTER
            },
        )


__all__ = ["DxfExporter", "LAYERS"]
