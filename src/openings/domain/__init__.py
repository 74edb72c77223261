"""Domain layer - crossing detection and placement planning."""

from .exceptions import (
    IntersectionQueryError,
    MaterializationError,
    MissingConduitModelError,
    MissingOpeningTemplateError,
    MissingReferenceContextError,
    OpeningPlacementError,
    PreconditionError,
    UnsupportedConduitShapeError,
)
from .services import (
    CrossingDeduplicator,
    IntersectionOracleAdapter,
    PlacementPlanner,
    PlanResult,
)
from .value_objects import (
    ConduitCategory,
    ConduitElement,
    ConduitSegment,
    Crossing,
    CurveKind,
    Diagnostic,
    DiagnosticKind,
    Level,
    Placement,
    Point3D,
    RawHit,
    TieBreak,
    point_at,
)

__all__ = [
    "ConduitCategory",
    "ConduitElement",
    "ConduitSegment",
    "Crossing",
    "CrossingDeduplicator",
    "CurveKind",
    "Diagnostic",
    "DiagnosticKind",
    "IntersectionOracleAdapter",
    "IntersectionQueryError",
    "Level",
    "MaterializationError",
    "MissingConduitModelError",
    "MissingOpeningTemplateError",
    "MissingReferenceContextError",
    "OpeningPlacementError",
    "Placement",
    "PlacementPlanner",
    "PlanResult",
    "Point3D",
    "PreconditionError",
    "RawHit",
    "TieBreak",
    "UnsupportedConduitShapeError",
    "point_at",
]
