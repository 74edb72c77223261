"""Exporter framework for placement run outputs.

Registered exporters:
- json: Opening schedule per category
- dxf: 2D plan with conduit centerlines, openings and labels

Usage:
    from openings.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()
    manager = ExportManager(Path("out"))
    manager.export_all(["json", "dxf"], output, project_name="level-3")
"""

from openings.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)
from openings.infrastructure.exporters.dxf import DxfPlanExporter
from openings.infrastructure.exporters.json_schedule import JsonScheduleExporter

__all__ = [
    "DxfPlanExporter",
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "JsonScheduleExporter",
]
