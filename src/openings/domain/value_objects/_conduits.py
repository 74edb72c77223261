"""Conduit value objects: host-side conduit elements and straight segments."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum

from ._core_geometry import Point3D


class ConduitCategory(str, Enum):
    """Mechanical conduit categories, in the order they are processed."""

    DUCT = "duct"
    PIPE = "pipe"

    @property
    def plural(self) -> str:
        return f"{self.value}s"


class CurveKind(str, Enum):
    """Shape of a conduit's location curve as reported by the host."""

    LINE = "line"
    ARC = "arc"


@dataclass(frozen=True)
class ConduitElement:
    """A conduit as listed by the host, before its shape is checked.

    Attributes:
        conduit_id: Stable identity of the conduit in the host model.
        category: Duct or pipe.
        diameter: Nominal diameter used to size openings.
        curve_kind: Shape of the location curve.
        start: First end point of the location curve.
        end: Second end point of the location curve.
    """

    conduit_id: Hashable
    category: ConduitCategory
    diameter: float
    curve_kind: CurveKind
    start: Point3D
    end: Point3D


@dataclass(frozen=True)
class ConduitSegment:
    """Straight conduit centerline used to cast the crossing ray.

    Attributes:
        conduit_id: Stable identity of the conduit.
        start: Start point of the centerline.
        direction: Unit direction from start toward end.
        length: Centerline length (non-negative).
        diameter: Conduit diameter (positive); becomes the opening size.
        category: Duct or pipe.
    """

    conduit_id: Hashable
    start: Point3D
    direction: Point3D
    length: float
    diameter: float
    category: ConduitCategory = ConduitCategory.DUCT

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError("Conduit length must be non-negative")
        if self.diameter <= 0:
            raise ValueError("Conduit diameter must be positive")

    @property
    def end(self) -> Point3D:
        return self.start + self.direction * self.length

    @classmethod
    def from_endpoints(
        cls,
        conduit_id: Hashable,
        start: Point3D,
        end: Point3D,
        diameter: float,
        category: ConduitCategory = ConduitCategory.DUCT,
    ) -> ConduitSegment:
        """Build a segment from its two end points.

        Raises:
            ValueError: If the end points coincide.
        """
        span = end - start
        return cls(
            conduit_id=conduit_id,
            start=start,
            direction=span.normalized(),
            length=span.length,
            diameter=diameter,
            category=category,
        )
