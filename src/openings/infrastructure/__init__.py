"""Infrastructure layer - reference host, formatters and exporters."""

from .exporters import ExportManager, ExporterRegistry
from .formatters import PlacementReportFormatter
from .memory_host import (
    HostView,
    InMemoryHostModel,
    OpeningFamily,
    OpeningInstance,
    WallBox,
)

__all__ = [
    "ExportManager",
    "ExporterRegistry",
    "HostView",
    "InMemoryHostModel",
    "OpeningFamily",
    "OpeningInstance",
    "PlacementReportFormatter",
    "WallBox",
]
