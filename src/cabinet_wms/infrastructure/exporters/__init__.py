"""Exporter framework for nesting results.

Registered exporters:
- dxf: DXF drawing of each sheet layout for CNC machining
- json: camelCase JSON, identical to the nesting API response
- svg: SVG cut diagrams

Usage:
    from cabinet_wms.infrastructure.exporters import ExporterRegistry

    exporter = ExporterRegistry.get("svg")()
    svg = exporter.export_string(results)
"""

from cabinet_wms.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)

# Import exporters to trigger registration
from cabinet_wms.infrastructure.exporters.dxf import DxfExporter
from cabinet_wms.infrastructure.exporters.nesting_json import JsonExporter
from cabinet_wms.infrastructure.exporters.svg import SvgExporter

__all__ = [
    "DxfExporter",
    "Exporter",
    "ExportManager",
    "ExporterRegistry",
    "JsonExporter",
    "SvgExporter",
]
