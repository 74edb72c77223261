"""JSON opening schedule exporter."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from openings.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from openings.application.dtos import CategoryReport, RunOutput
    from openings.domain import Placement


logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"


def _identity(value: Any) -> Any:
    return value if isinstance(value, (int, str)) else str(value)


@ExporterRegistry.register("json")
class JsonScheduleExporter:
    """Exports the run as an opening schedule.

    The schedule lists, per category, every planned placement with a
    ``placed`` flag, the diagnostics and the committed count.

    Attributes:
        format_name: "json"
        file_extension: "json"
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def export(self, output: RunOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")
        logger.debug(f"Wrote opening schedule to {path}")

    def export_string(self, output: RunOutput) -> str:
        return json.dumps(self.build(output), indent=self.indent)

    def build(self, output: RunOutput) -> dict[str, Any]:
        """Build the schedule as plain JSON-compatible data."""
        return {
            "schema_version": SCHEMA_VERSION,
            "categories": [self._category(report) for report in output.categories],
            "total_placed": output.total_placed,
        }

    def _category(self, report: CategoryReport) -> dict[str, Any]:
        materialized = set(report.materialized)
        return {
            "category": report.category.value,
            "conduits": len(report.segments),
            "placed": report.placed_count,
            "aborted": report.aborted,
            "abort_reason": report.abort_reason,
            "openings": [
                self._placement(p, placed=p in materialized)
                for p in report.placements
            ],
            "diagnostics": [
                {
                    "kind": d.kind.value,
                    "message": d.message,
                    "conduit_id": _identity(d.conduit_id) if d.conduit_id is not None else None,
                    "obstacle_id": _identity(d.obstacle_id) if d.obstacle_id is not None else None,
                }
                for d in report.diagnostics
            ],
        }

    @staticmethod
    def _placement(placement: Placement, placed: bool) -> dict[str, Any]:
        return {
            "conduit_id": _identity(placement.conduit_id),
            "obstacle_id": _identity(placement.obstacle_id),
            "linked_context_id": (
                _identity(placement.linked_context_id)
                if placement.linked_context_id is not None
                else None
            ),
            "level": placement.level.name,
            "point": list(placement.point.as_tuple()),
            "width": placement.width,
            "height": placement.height,
            "placed": placed,
        }
