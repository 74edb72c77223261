"""Placement planning: conduit segments in, sized opening placements out."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..exceptions import UnsupportedConduitShapeError
from ..value_objects import (
    ConduitElement,
    ConduitSegment,
    CurveKind,
    Diagnostic,
    DiagnosticKind,
    Placement,
    point_at,
)
from .crossing_deduplicator import CrossingDeduplicator

if TYPE_CHECKING:
    from openings.contracts.protocols import ElevationResolverProtocol

    from .intersection_oracle import IntersectionOracleAdapter

logger = logging.getLogger(__name__)

__all__ = [
    "PlacementPlanner",
    "PlanResult",
    "segment_from_element",
]


@dataclass
class PlanResult:
    """Placements planned for a batch of conduits.

    Attributes:
        placements: Placements in conduit order, then crossing order.
        diagnostics: Skipped conduits and crossings.
        segments: Straight segments that were planned.
    """

    placements: list[Placement] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    segments: list[ConduitSegment] = field(default_factory=list)

    def extend(self, other: PlanResult) -> PlanResult:
        self.placements.extend(other.placements)
        self.diagnostics.extend(other.diagnostics)
        self.segments.extend(other.segments)
        return self


def segment_from_element(element: ConduitElement) -> ConduitSegment:
    """Convert a host conduit into a straight segment.

    Raises:
        UnsupportedConduitShapeError: If the location curve is not a line,
            or the line has zero length.
    """
    if element.curve_kind != CurveKind.LINE:
        raise UnsupportedConduitShapeError(element.conduit_id, element.curve_kind.value)
    try:
        return ConduitSegment.from_endpoints(
            conduit_id=element.conduit_id,
            start=element.start,
            end=element.end,
            diameter=element.diameter,
            category=element.category,
        )
    except ValueError as e:
        raise UnsupportedConduitShapeError(element.conduit_id, "degenerate") from e


class PlacementPlanner:
    """Computes where openings go for a set of straight conduits.

    For each segment a ray is cast from its start point along its
    direction. Hits are deduplicated against the segment length, each
    crossing point is recomputed from the ray, and the obstacle's level is
    resolved. Crossings whose level cannot be resolved are skipped.

    Attributes:
        oracle: Intersection oracle adapter bound to a reference context.
        elevation_resolver: Host lookup for obstacle levels.
        deduplicator: Crossing deduplicator.
    """

    def __init__(
        self,
        oracle: IntersectionOracleAdapter,
        elevation_resolver: ElevationResolverProtocol,
        deduplicator: CrossingDeduplicator | None = None,
    ) -> None:
        self.oracle = oracle
        self.elevation_resolver = elevation_resolver
        self.deduplicator = deduplicator or CrossingDeduplicator()

    def plan_segment(self, segment: ConduitSegment) -> PlanResult:
        """Plan openings for a single conduit segment."""
        result = PlanResult(segments=[segment])
        origin = segment.start
        direction = segment.direction

        hits = self.oracle.query(origin, direction)
        crossings = self.deduplicator.deduplicate(hits, segment.length)

        for crossing in crossings:
            level = self.elevation_resolver.resolve_hosting_elevation(
                crossing.obstacle_id, crossing.linked_context_id
            )
            if level is None:
                message = (
                    f"Level of obstacle {crossing.obstacle_id} crossed by "
                    f"conduit {segment.conduit_id} could not be resolved"
                )
                logger.warning(message)
                result.diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.UNRESOLVED_LEVEL,
                        message=message,
                        conduit_id=segment.conduit_id,
                        obstacle_id=crossing.obstacle_id,
                    )
                )
                continue

            result.placements.append(
                Placement(
                    conduit_id=segment.conduit_id,
                    obstacle_id=crossing.obstacle_id,
                    point=point_at(origin, direction, crossing.distance),
                    level=level,
                    width=segment.diameter,
                    height=segment.diameter,
                    linked_context_id=crossing.linked_context_id,
                )
            )

        logger.debug(
            f"Conduit {segment.conduit_id}: {len(hits)} hit(s), "
            f"{len(crossings)} crossing(s), {len(result.placements)} placement(s)"
        )
        return result

    def plan_placements(self, conduits: Iterable[ConduitSegment]) -> PlanResult:
        """Plan openings for every segment, in input order."""
        result = PlanResult()
        for segment in conduits:
            result.extend(self.plan_segment(segment))
        return result

    def plan_elements(self, elements: Iterable[ConduitElement]) -> PlanResult:
        """Plan openings for host conduits, skipping non-straight ones."""
        result = PlanResult()
        for element in elements:
            try:
                segment = segment_from_element(element)
            except UnsupportedConduitShapeError as e:
                logger.warning(str(e))
                result.diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.UNSUPPORTED_SHAPE,
                        message=str(e),
                        conduit_id=element.conduit_id,
                    )
                )
                continue
            result.extend(self.plan_segment(segment))
        return result
