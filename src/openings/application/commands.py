"""Application commands (use cases) for opening placement."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from openings.domain import (
    ConduitCategory,
    CrossingDeduplicator,
    Diagnostic,
    DiagnosticKind,
    IntersectionOracleAdapter,
    MaterializationError,
    MissingConduitModelError,
    MissingOpeningTemplateError,
    MissingReferenceContextError,
    Placement,
    PlacementPlanner,
)

from .config.schema import MaterializationPolicy, PlacementSettingsConfig
from .dtos import CategoryReport, RunOutput

if TYPE_CHECKING:
    from openings.contracts.protocols import (
        HostModelProtocol,
        OpeningTemplateProtocol,
    )

logger = logging.getLogger(__name__)


class _CategoryAborted(Exception):
    """Raised inside a category's unit of work to force a rollback."""

    def __init__(self, cause: MaterializationError) -> None:
        self.cause = cause
        super().__init__(str(cause))


class PlaceOpeningsCommand:
    """Place openings wherever straight ducts and pipes cross walls.

    The run checks host preconditions, activates the opening template in
    its own unit of work, then processes each configured category in
    order. All placements of a category are planned before the first
    opening is created, so openings never influence the crossings of the
    same run.

    Attributes:
        host: Host model providing conduits, ray queries and openings.
        settings: Placement settings.
    """

    def __init__(
        self,
        host: HostModelProtocol,
        settings: PlacementSettingsConfig | None = None,
    ) -> None:
        self.host = host
        self.settings = settings or PlacementSettingsConfig()

    def check_preconditions(self) -> tuple[OpeningTemplateProtocol, Any]:
        """Verify the host can run a placement.

        Returns:
            The opening template and the 3D reference context.

        Raises:
            MissingConduitModelError: No linked model provides conduits.
            MissingOpeningTemplateError: The opening family is not loaded.
            MissingReferenceContextError: The host has no non-template 3D view.
        """
        if not self.host.has_conduit_model():
            raise MissingConduitModelError(self.settings.conduit_model_pattern)

        template = self.host.get_opening_template()
        if template is None:
            raise MissingOpeningTemplateError(self.settings.opening_family)

        context = self.host.get_active_spatial_reference_context()
        if context is None:
            raise MissingReferenceContextError()

        return template, context

    def execute(self) -> RunOutput:
        """Run the placement for every configured category.

        Returns:
            RunOutput with one report per category, in processing order.

        Raises:
            PreconditionError: If a host precondition is not met. Nothing
                is placed in that case.
        """
        template, context = self.check_preconditions()

        if not template.is_active:
            with self.host.unit_of_work("Activate opening family"):
                self.host.activate_template(template)

        planner = PlacementPlanner(
            oracle=IntersectionOracleAdapter(self.host, context),
            elevation_resolver=self.host,
            deduplicator=CrossingDeduplicator(self.settings.tie_break),
        )

        output = RunOutput()
        for category in self.settings.categories:
            report = self._run_category(planner, category)
            logger.info(
                f"Placed {report.placed_count} opening(s) for {category.plural}"
            )
            output.categories.append(report)
        return output

    def _run_category(
        self, planner: PlacementPlanner, category: ConduitCategory
    ) -> CategoryReport:
        elements = self.host.list_linear_conduits(category)
        plan = planner.plan_elements(elements)
        report = CategoryReport(
            category=category,
            placements=plan.placements,
            diagnostics=plan.diagnostics,
            segments=plan.segments,
        )
        logger.debug(
            f"Planned {len(plan.placements)} placement(s) for "
            f"{len(elements)} {category.plural}"
        )

        try:
            with self.host.unit_of_work(f"Place openings for {category.plural}"):
                for placement in plan.placements:
                    self._materialize(placement, report)
        except _CategoryAborted as e:
            report.aborted = True
            report.abort_reason = str(e.cause)
            report.openings.clear()
            report.materialized.clear()
            logger.warning(
                f"Rolled back openings for {category.plural}: {e.cause}"
            )
        return report

    def _materialize(self, placement: Placement, report: CategoryReport) -> None:
        try:
            opening = self.host.materialize_opening(
                placement.point,
                placement.obstacle_id,
                placement.level,
                placement.width,
                placement.height,
                linked_context_id=placement.linked_context_id,
            )
        except MaterializationError as e:
            if e.conduit_id is None:
                e.conduit_id = placement.conduit_id
            if self.settings.materialization_policy == MaterializationPolicy.ABORT_CATEGORY:
                raise _CategoryAborted(e) from e
            message = (
                f"Opening for conduit {placement.conduit_id} in obstacle "
                f"{placement.obstacle_id} not created: {e}"
            )
            logger.warning(message)
            report.diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.MATERIALIZATION_FAILED,
                    message=message,
                    conduit_id=placement.conduit_id,
                    obstacle_id=placement.obstacle_id,
                )
            )
            return
        report.openings.append(opening)
        report.materialized.append(placement)
