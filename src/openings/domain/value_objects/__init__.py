"""Value objects for the opening placement domain.

All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

from ._core_geometry import Point3D, point_at
from ._conduits import ConduitCategory, ConduitElement, ConduitSegment, CurveKind
from ._crossings import Crossing, CrossingKey, Level, Placement, RawHit, TieBreak
from ._diagnostics import Diagnostic, DiagnosticKind

__all__ = [
    "ConduitCategory",
    "ConduitElement",
    "ConduitSegment",
    "Crossing",
    "CrossingKey",
    "CurveKind",
    "Diagnostic",
    "DiagnosticKind",
    "Level",
    "Placement",
    "Point3D",
    "RawHit",
    "TieBreak",
    "point_at",
]
