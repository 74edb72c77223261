"""Text formatters for placement run output."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from openings.application.dtos import CategoryReport, RunOutput
    from openings.domain import Diagnostic


class PlacementReportFormatter:
    """Formats a placement run as a plain-text report.

    One table per category lists the planned openings, followed by the
    category's diagnostics and a summary of committed openings.
    """

    def format(self, output: RunOutput) -> str:
        if not output.categories:
            return "No conduit categories processed."

        sections = [self._format_category(report) for report in output.categories]
        sections.append(self._format_summary(output))
        return "\n\n".join(sections)

    def _format_category(self, report: CategoryReport) -> str:
        title = f"OPENINGS FOR {report.category.plural.upper()}"
        lines = [
            title,
            "=" * 78,
            f"{'Conduit':<14} {'Wall':<14} {'Level':<12} "
            f"{'X':>9} {'Y':>9} {'Z':>9} {'Size':>8}",
            "-" * 78,
        ]
        if not report.placements:
            lines.append("No crossings found.")
        for placement in report.placements:
            x, y, z = placement.point.as_tuple()
            lines.append(
                f"{str(placement.conduit_id):<14} {str(placement.obstacle_id):<14} "
                f"{placement.level.name:<12} {x:>9.3f} {y:>9.3f} {z:>9.3f} "
                f"{placement.width:>8.3f}"
            )
        lines.append("-" * 78)

        if report.aborted:
            lines.append(f"ROLLED BACK: {report.abort_reason}")
        lines.append(
            f"Conduits: {len(report.segments)}  "
            f"Planned: {len(report.placements)}  Placed: {report.placed_count}"
        )
        if report.diagnostics:
            lines.append("")
            lines.append("Diagnostics:")
            lines.extend(self._format_diagnostic(d) for d in report.diagnostics)
        return "\n".join(lines)

    @staticmethod
    def _format_diagnostic(diagnostic: Diagnostic) -> str:
        return f"  [{diagnostic.kind.value}] {diagnostic.message}"

    def _format_summary(self, output: RunOutput) -> str:
        lines = ["SUMMARY", "=" * 78]
        for category, count in output.placed_counts.items():
            lines.append(f"{category.plural.capitalize():<10} {count:>6} opening(s)")
        lines.append("-" * 78)
        lines.append(f"{'Total':<10} {output.total_placed:>6} opening(s)")
        return "\n".join(lines)
