"""Console formatters for nesting results."""

from __future__ import annotations

from collections.abc import Sequence

from cabinet_wms.domain.value_objects import NestingResult, format_number


class NestingReportFormatter:
    """Formats nesting results as plain-text tables."""

    def __init__(self, show_parts: bool = True) -> None:
        """Initialize formatter.

        Args:
            show_parts: Whether to list every placed part under its group.
        """
        self._show_parts = show_parts

    def format(self, results: Sequence[NestingResult]) -> str:
        if not results:
            return "No parts to nest."

        lines = [
            "NESTING SUMMARY",
            "=" * 78,
            f"{'Material':<22} {'Thick':>6} {'Sheet (mm)':<12} {'Parts':>6} "
            f"{'Sheets':>6} {'Eff %':>6} {'Waste (m2)':>11}",
            "-" * 78,
        ]

        for result in results:
            sheet = (
                f"{format_number(result.sheet_size.length)}x"
                f"{format_number(result.sheet_size.width)}"
            )
            lines.append(
                f"{result.material_type[:22]:<22} {format_number(result.thickness):>6} "
                f"{sheet:<12} {result.part_count:>6} {result.sheet_count:>6} "
                f"{result.efficiency:>6.1f} {result.waste_area / 1_000_000:>11.3f}"
            )

        total_sheets = sum(result.sheet_count for result in results)
        total_parts = sum(result.part_count for result in results)
        lines.append("-" * 78)
        lines.append(
            f"{'TOTAL':<22} {'':>6} {'':<12} {total_parts:>6} {total_sheets:>6}"
        )

        if self._show_parts:
            for result in results:
                lines.append("")
                lines.extend(self._format_parts(result))

        overflowed = [r for r in results if r.overflow_resets]
        if overflowed:
            lines.append("")
            for result in overflowed:
                lines.append(
                    f"Warning: {result.material_type} {format_number(result.thickness)}mm "
                    f"overflowed the sheet {result.overflow_resets} time(s); "
                    "part positions overlap."
                )

        return "\n".join(lines)

    def _format_parts(self, result: NestingResult) -> list[str]:
        lines = [
            f"{result.material_type} {format_number(result.thickness)}mm",
            f"  {'Part':<16} {'X':>8} {'Y':>8} {'Length':>8} {'Width':>8} {'Rot':>4}",
        ]
        for part in result.parts:
            part_id = "" if part.part_id is None else str(part.part_id)
            lines.append(
                f"  {part_id[:16]:<16} {part.x:>8.0f} {part.y:>8.0f} "
                f"{part.length:>8.0f} {part.width:>8.0f} {part.rotation:>4}"
            )
        return lines
