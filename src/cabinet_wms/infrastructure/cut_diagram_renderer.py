"""Cut diagram rendering for nesting results.

This module provides SVG and ASCII rendering of nested material groups
showing part placements, dimensions, rotation indicators and grain arrows.
Coordinates are millimetres with the origin at the top-left of the sheet.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from xml.sax.saxutils import escape

from cabinet_wms.domain.value_objects import (
    GrainDirection,
    NestingResult,
    PlacedPart,
    format_number,
)

# Fill colours cycled per source part so repeated units share a colour
PART_COLORS: tuple[str, ...] = (
    "#87CEEB",  # Sky blue
    "#90EE90",  # Light green
    "#DDA0DD",  # Plum
    "#F0E68C",  # Khaki
    "#FFB6C1",  # Light pink
    "#FFA07A",  # Light salmon
    "#DEB887",  # Burlywood
    "#E6E6FA",  # Lavender
)


class CutDiagramRenderer:
    """Renders nesting results as SVG or ASCII cut diagrams.

    Attributes:
        scale: Pixels per millimetre for SVG rendering.
        piece_stroke: Stroke color for part outlines.
        text_color: Color for labels and dimensions.
        show_dimensions: Whether to show part dimensions.
        show_labels: Whether to show part identifiers.
        show_grain: Whether to show grain direction arrows.
    """

    def __init__(
        self,
        scale: float = 0.25,
        piece_stroke: str = "#000000",
        text_color: str = "#000000",
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_grain: bool = True,
    ) -> None:
        self.scale = scale
        self.piece_stroke = piece_stroke
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels
        self.show_grain = show_grain

    def render_svg(self, result: NestingResult) -> str:
        """Generate an SVG cut diagram for one material group.

        Args:
            result: Nesting result for a material group.

        Returns:
            SVG document as a string.
        """
        sheet = result.sheet_size
        header_height = 30
        svg_width = sheet.length * self.scale
        svg_height = sheet.width * self.scale + header_height

        colors = self._assign_colors(result.parts)

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "",
            "  <!-- Background -->",
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
            "",
            self._render_header(result, svg_width, header_height),
            "",
            "  <!-- Sheet outline -->",
            f'  <rect x="0" y="{header_height}" '
            f'width="{svg_width}" height="{sheet.width * self.scale}" '
            f'fill="#f5deb3" stroke="{self.piece_stroke}" stroke-width="2"/>',
            "",
            "  <!-- Placed parts -->",
        ]

        for part in result.parts:
            parts.append(
                self._render_part(part, colors.get(str(part.part_id), PART_COLORS[0]), header_height)
            )

        parts.append("")
        parts.append("</svg>")
        return "\n".join(parts)

    def render_all_svg(self, results: Sequence[NestingResult]) -> list[str]:
        """Generate one SVG document per material group."""
        return [self.render_svg(result) for result in results]

    def render_combined_svg(self, results: Sequence[NestingResult]) -> str:
        """Generate a single SVG with every material group stacked vertically."""
        if not results:
            return (
                '<svg width="100" height="50" xmlns="http://www.w3.org/2000/svg">'
                '<text x="10" y="30">No sheets to display</text></svg>'
            )

        header_height = 30
        sheet_spacing = 20
        svg_width = max(result.sheet_size.length for result in results) * self.scale
        svg_height = sum(
            result.sheet_size.width * self.scale + header_height + sheet_spacing
            for result in results
        )

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
        ]

        y_offset = 0.0
        for index, result in enumerate(results, start=1):
            parts.append(f'  <g transform="translate(0, {y_offset})">')
            parts.append(f"    <!-- Group {index}: {escape(result.material_type)} -->")

            sheet_svg = self.render_svg(result)
            start_idx = sheet_svg.find(">") + 1
            end_idx = sheet_svg.rfind("</svg>")
            for line in sheet_svg[start_idx:end_idx].strip().split("\n"):
                if line.strip():
                    parts.append(f"  {line}")

            parts.append("  </g>")
            y_offset += result.sheet_size.width * self.scale + header_height + sheet_spacing

        parts.append("</svg>")
        return "\n".join(parts)

    def _assign_colors(self, placed: Sequence[PlacedPart]) -> dict[str, str]:
        colors: dict[str, str] = {}
        for part in placed:
            key = str(part.part_id)
            if key not in colors:
                colors[key] = PART_COLORS[len(colors) % len(PART_COLORS)]
        return colors

    def _render_header(
        self, result: NestingResult, svg_width: float, header_height: float
    ) -> str:
        header_text = escape(
            f"{result.material_type} {format_number(result.thickness)}mm - "
            f"{format_number(result.sheet_size.length)} x "
            f"{format_number(result.sheet_size.width)}mm - "
            f"{result.sheet_count} sheet{'s' if result.sheet_count != 1 else ''}, "
            f"{result.efficiency:.1f}% efficiency"
        )
        return (
            f"  <!-- Header -->\n"
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{header_text}</text>'
        )

    def _render_part(self, part: PlacedPart, fill_color: str, header_height: float) -> str:
        """Render a single placed part as SVG rect and text."""
        x = part.x * self.scale
        y = header_height + part.y * self.scale
        w = part.length * self.scale
        h = part.width * self.scale

        dims = f"{format_number(part.length)} x {format_number(part.width)}"
        if part.rotated:
            dims += " (R)"

        text_x = x + w / 2
        text_y = y + h / 2
        font_size = min(12, min(w, h) / 6)

        svg_parts = [
            "  <g>",
            f'    <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{fill_color}" stroke="{self.piece_stroke}"/>',
        ]

        # Too small for readable text
        if font_size >= 6:
            if self.show_labels and part.part_id is not None:
                svg_parts.append(
                    f'    <text x="{text_x}" y="{text_y - font_size / 2}" '
                    f'text-anchor="middle" font-family="Arial, sans-serif" '
                    f'font-size="{font_size}" fill="{self.text_color}">'
                    f"{escape(str(part.part_id))}</text>"
                )
            if self.show_dimensions:
                dims_y = text_y + font_size / 2 + 2 if self.show_labels else text_y
                svg_parts.append(
                    f'    <text x="{text_x}" y="{dims_y}" '
                    f'text-anchor="middle" font-family="Arial, sans-serif" '
                    f'font-size="{font_size * 0.8}" fill="{self.text_color}">{dims}</text>'
                )

        if self.show_grain:
            grain_svg = self._render_grain_indicator(part, x, y, w, h, font_size)
            if grain_svg:
                svg_parts.append(grain_svg)

        svg_parts.append("  </g>")
        return "\n".join(svg_parts)

    def _render_grain_indicator(
        self,
        part: PlacedPart,
        x: float,
        y: float,
        w: float,
        h: float,
        font_size: float,
    ) -> str | None:
        """Render a grain arrow in the lower-right corner of a part.

        Grain "length" runs along the source part length, "width" along its
        width; rotation turns the arrow with the part.
        """
        if part.grain not in (GrainDirection.LENGTH.value, GrainDirection.WIDTH.value):
            return None

        arrow_margin = max(5, font_size)
        arrow_length = min(20, min(w, h) / 4)
        arrow_x = x + w - arrow_margin - arrow_length
        arrow_y = y + h - arrow_margin

        along_length = part.grain == GrainDirection.LENGTH.value
        horizontal = along_length != part.rotated
        if horizontal:
            return self._render_arrow(
                arrow_x,
                arrow_y - arrow_length / 2,
                arrow_x + arrow_length,
                arrow_y - arrow_length / 2,
            )
        return self._render_arrow(
            arrow_x + arrow_length / 2,
            arrow_y - arrow_length,
            arrow_x + arrow_length / 2,
            arrow_y,
        )

    def _render_arrow(self, x1: float, y1: float, x2: float, y2: float) -> str:
        svg = f'    <line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
        svg += f'stroke="{self.text_color}" stroke-width="1.5"/>\n'

        angle = math.atan2(y2 - y1, x2 - x1)
        head_length = 6
        head_angle = math.pi / 6

        lx = x2 - head_length * math.cos(angle - head_angle)
        ly = y2 - head_length * math.sin(angle - head_angle)
        rx = x2 - head_length * math.cos(angle + head_angle)
        ry = y2 - head_length * math.sin(angle + head_angle)

        svg += f'    <polygon points="{x2},{y2} {lx},{ly} {rx},{ry}" '
        svg += f'fill="{self.text_color}"/>'
        return svg

    def render_ascii(self, result: NestingResult, width: int = 80) -> str:
        """Generate an ASCII cut diagram for one material group.

        Args:
            result: Nesting result to draw.
            width: Terminal width in characters.

        Returns:
            Text diagram with a one-line header.
        """
        sheet = result.sheet_size
        usable_width = width - 2
        scale_x = usable_width / sheet.length

        # 0.5 compensates for the character aspect ratio
        grid_height = max(int(usable_width * (sheet.width / sheet.length) * 0.5), 10)
        scale_y = grid_height / sheet.width

        grid = [[" " for _ in range(usable_width)] for _ in range(grid_height)]
        for part in result.parts:
            self._draw_part_ascii(grid, part, scale_x, scale_y)

        lines = [
            f"{result.material_type} {format_number(result.thickness)}mm - "
            f"{result.part_count} part{'s' if result.part_count != 1 else ''}, "
            f"{result.efficiency:.1f}% efficiency",
            "+" + "-" * usable_width + "+",
        ]
        for row in grid:
            lines.append("|" + "".join(row) + "|")
        lines.append("+" + "-" * usable_width + "+")
        return "\n".join(lines)

    def _draw_part_ascii(
        self,
        grid: list[list[str]],
        part: PlacedPart,
        scale_x: float,
        scale_y: float,
    ) -> None:
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0

        x1 = max(0, min(int(part.x * scale_x), grid_width - 1))
        x2 = max(0, min(int(part.right_edge * scale_x), grid_width - 1))
        y1 = max(0, min(int(part.y * scale_y), grid_height - 1))
        y2 = max(0, min(int(part.bottom_edge * scale_y), grid_height - 1))

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for cy, cx in ((y1, x1), (y1, x2), (y2, x1), (y2, x2)):
            grid[cy][cx] = "+"

        dims = f"{part.length:.0f}x{part.width:.0f}"
        if part.rotated:
            dims += "R"
        label_row = y1 + 1
        if label_row < y2:
            text = dims[: max(0, x2 - x1 - 1)]
            for i, char in enumerate(text):
                grid[label_row][x1 + 1 + i] = char

    def render_all_ascii(self, results: Sequence[NestingResult], width: int = 80) -> str:
        """Generate ASCII diagrams for all groups followed by a summary."""
        if not results:
            return "No sheets to display."

        parts: list[str] = []
        for result in results:
            parts.append(self.render_ascii(result, width))
            parts.append("")

        total_sheets = sum(result.sheet_count for result in results)
        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {total_sheets} sheet{'s' if total_sheets != 1 else ''} "
            f"across {len(results)} material group{'s' if len(results) != 1 else ''}"
        )
        return "\n".join(parts)
