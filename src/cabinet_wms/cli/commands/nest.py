"""Nest command for laying out a cutting-list file on sheet stock."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from cabinet_wms.application import ComputeNestingCommand, ConfigError
from cabinet_wms.application.config import load_nesting_input
from cabinet_wms.domain import NestingError
from cabinet_wms.infrastructure import CutDiagramRenderer, NestingReportFormatter
from cabinet_wms.infrastructure.exporters import ExporterRegistry

logger = logging.getLogger(__name__)

TABLE_FORMAT = "table"


def nest_command(
    cutting_list_file: Annotated[
        Path,
        typer.Argument(help="JSON file with a cuttingList (or a bare list of items)"),
    ],
    sheet_size: Annotated[
        str | None,
        typer.Option("--sheet-size", "-s", help="Sheet size as LENGTHxWIDTH in mm"),
    ] = None,
    material: Annotated[
        str | None,
        typer.Option("--material", "-m", help='Only nest this material ("all" for every material)'),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json, svg, dxf"),
    ] = TABLE_FORMAT,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the document to this file instead of stdout"),
    ] = None,
    diagram: Annotated[
        bool,
        typer.Option("--diagram", help="Append ASCII sheet diagrams to the table output"),
    ] = False,
) -> None:
    """Nest a cutting list and print or export the layout.

    Options given on the command line override sheetSize and materialType
    from the file.

    Examples:
        cabinet-wms nest kitchen.json
        cabinet-wms nest kitchen.json --sheet-size 2800x2070 --material plywood
        cabinet-wms nest kitchen.json --format dxf --output kitchen.dxf
    """
    output_format = output_format.lower()
    if output_format != TABLE_FORMAT and not ExporterRegistry.is_registered(output_format):
        available = ", ".join([TABLE_FORMAT, *ExporterRegistry.available_formats()])
        typer.echo(f"Unknown format: {output_format}. Available: {available}", err=True)
        raise typer.Exit(code=1)

    try:
        request = load_nesting_input(cutting_list_file)
    except ConfigError as e:
        _display_load_error(e)
        raise typer.Exit(code=1)

    overrides: dict[str, object] = {}
    if sheet_size is not None:
        overrides["sheet_size"] = sheet_size
    if material is not None:
        overrides["material_type"] = material
    if overrides:
        request = request.model_copy(update=overrides)

    try:
        results = ComputeNestingCommand().execute(request)
    except NestingError as e:
        typer.echo("Nesting failed:", err=True)
        for error in e.errors:
            typer.echo(f"  {error}", err=True)
        raise typer.Exit(code=1)

    if output_format == TABLE_FORMAT:
        report = NestingReportFormatter().format(results)
        if diagram:
            report += "\n\n" + CutDiagramRenderer().render_all_ascii(results)
        _emit(report, output)
        return

    exporter = ExporterRegistry.get(output_format)()
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        exporter.export(results, output)
        typer.echo(f"Exported {output_format.upper()} to {output}")
    else:
        typer.echo(exporter.export_string(results))


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    typer.echo(f"Wrote report to {output}")


def _display_load_error(error: ConfigError) -> None:
    """Display a cutting-list loading error."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            typer.echo(f"    Line {line}, Column {column}: {detail.get('message')}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            typer.echo(f"  {detail.get('path', 'unknown')}: {detail.get('message')}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)
