"""Command line interface for cabinet-wms."""
