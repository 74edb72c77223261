"""Adapter over the host's ray-vs-obstacle intersection query."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..exceptions import IntersectionQueryError
from ..value_objects import Point3D, RawHit

if TYPE_CHECKING:
    from openings.contracts.protocols import ObstacleQueryProtocol

logger = logging.getLogger(__name__)

__all__ = ["IntersectionOracleAdapter"]


class IntersectionOracleAdapter:
    """Normalizes host intersection results into an ordered list of hits.

    The host query is distance-agnostic and unordered; this adapter keeps
    the host order untouched and leaves length filtering to the
    deduplicator.

    Attributes:
        oracle: Host object answering ray queries.
        context: Spatial reference context the rays are cast in.
    """

    def __init__(self, oracle: ObstacleQueryProtocol, context: Any) -> None:
        self.oracle = oracle
        self.context = context

    def query(self, origin: Point3D, direction: Point3D) -> list[RawHit]:
        """Cast a ray from origin along direction.

        Args:
            origin: Ray origin.
            direction: Unit ray direction.

        Returns:
            Every hit reported by the host, in host order.

        Raises:
            IntersectionQueryError: If the host returns something other than
                a RawHit, or a hit without an obstacle identity.
        """
        hits: list[RawHit] = []
        for hit in self.oracle.find_obstacle_crossings(origin, direction, self.context):
            if not isinstance(hit, RawHit):
                raise IntersectionQueryError(
                    f"Oracle returned {type(hit).__name__}, expected RawHit"
                )
            if hit.obstacle_id is None:
                raise IntersectionQueryError(
                    f"Oracle hit at distance {hit.distance} has no obstacle identity"
                )
            hits.append(hit)
        logger.debug(f"Ray from {origin.as_tuple()} returned {len(hits)} hit(s)")
        return hits
