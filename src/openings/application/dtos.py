"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from openings.domain import (
    ConduitCategory,
    ConduitSegment,
    Diagnostic,
    Placement,
)


@dataclass
class CategoryReport:
    """Outcome of processing one conduit category.

    Attributes:
        category: The conduit category.
        placements: Planned placements, in planning order.
        openings: Host objects returned for placements that were created.
        materialized: Placements for which the host created an opening.
        diagnostics: Skipped conduits, crossings and failed placements.
        segments: Straight segments that were planned.
        aborted: True if the category's unit of work was rolled back.
        abort_reason: Message of the failure that aborted the category.
    """

    category: ConduitCategory
    placements: list[Placement] = field(default_factory=list)
    openings: list[Any] = field(default_factory=list)
    materialized: list[Placement] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    segments: list[ConduitSegment] = field(default_factory=list)
    aborted: bool = False
    abort_reason: str | None = None

    @property
    def placed_count(self) -> int:
        """Number of openings committed for this category."""
        return 0 if self.aborted else len(self.openings)


@dataclass
class RunOutput:
    """Output of a placement run across all categories."""

    categories: list[CategoryReport] = field(default_factory=list)

    @property
    def total_placed(self) -> int:
        return sum(report.placed_count for report in self.categories)

    @property
    def placed_counts(self) -> dict[ConduitCategory, int]:
        return {report.category: report.placed_count for report in self.categories}

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for report in self.categories for d in report.diagnostics]

    def report_for(self, category: ConduitCategory) -> CategoryReport | None:
        return next((r for r in self.categories if r.category == category), None)
