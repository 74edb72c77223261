"""Domain services for crossing detection and placement planning."""

from .crossing_deduplicator import CrossingDeduplicator
from .intersection_oracle import IntersectionOracleAdapter
from .placement_planner import PlacementPlanner, PlanResult, segment_from_element

__all__ = [
    "CrossingDeduplicator",
    "IntersectionOracleAdapter",
    "PlacementPlanner",
    "PlanResult",
    "segment_from_element",
]
