"""DXF plan-view exporter for placement runs.

Draws conduit centerlines, opening outlines and conduit labels in plan
(XY) on separate layers of an R2010 drawing.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, cast

import ezdxf

from openings.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from openings.application.dtos import RunOutput
    from openings.domain import ConduitSegment, Placement


logger = logging.getLogger(__name__)


# Layer configuration for DXF output
LAYERS = {
    "CONDUITS": {"color": 4},  # Cyan - conduit centerlines
    "OPENINGS": {"color": 1},  # Red - opening outlines
    "LABELS": {"color": 5},  # Blue - text labels
}


@ExporterRegistry.register("dxf")
class DxfPlanExporter:
    """Exports a placement run as a 2D plan drawing.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def __init__(self, text_height: float = 0.25, include_labels: bool = True) -> None:
        if text_height <= 0:
            raise ValueError(f"Invalid text_height: {text_height}. Must be positive")
        self.text_height = text_height
        self.include_labels = include_labels

    def export(self, output: RunOutput, path: Path) -> None:
        doc = self.build(output)
        doc.saveas(path)
        logger.debug(f"Wrote DXF plan to {path}")

    def export_string(self, output: RunOutput) -> str:
        stream = StringIO()
        self.build(output).write(stream)
        return stream.getvalue()

    def build(self, output: RunOutput) -> Drawing:
        """Create the drawing for a run."""
        doc = ezdxf.new("R2010")
        for name, props in LAYERS.items():
            doc.layers.add(name, color=cast(int, props["color"]))

        msp = doc.modelspace()
        for report in output.categories:
            for segment in report.segments:
                self._draw_segment(msp, segment)
            for placement in report.materialized:
                self._draw_opening(msp, placement)
        return doc

    def _draw_segment(self, msp: Modelspace, segment: ConduitSegment) -> None:
        start = (segment.start.x, segment.start.y)
        end = (segment.end.x, segment.end.y)
        msp.add_line(start, end, dxfattribs={"layer": "CONDUITS"})
        if self.include_labels:
            mid = ((start[0] + end[0]) / 2, (start[1] + end[1]) / 2)
            msp.add_text(
                str(segment.conduit_id),
                height=self.text_height,
                dxfattribs={"layer": "LABELS", "insert": mid},
            )

    def _draw_opening(self, msp: Modelspace, placement: Placement) -> None:
        half = placement.width / 2
        x, y = placement.point.x, placement.point.y
        points = [
            (x - half, y - half),
            (x + half, y - half),
            (x + half, y + half),
            (x - half, y + half),
        ]
        msp.add_lwpolyline(points, close=True, dxfattribs={"layer": "OPENINGS"})
