"""Crossing detection value objects."""

from __future__ import annotations

import math
from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum

from ._core_geometry import Point3D


class TieBreak(str, Enum):
    """How to pick one hit when several hits share an obstacle.

    Attributes:
        FIRST_ENCOUNTERED: Keep the first hit in oracle order.
        NEAREST: Keep the hit with the smallest distance.
    """

    FIRST_ENCOUNTERED = "first_encountered"
    NEAREST = "nearest"


@dataclass(frozen=True)
class Level:
    """Hosting elevation of an obstacle."""

    level_id: Hashable
    name: str
    elevation: float


@dataclass(frozen=True)
class RawHit:
    """One ray-vs-obstacle hit as reported by the intersection oracle.

    Attributes:
        distance: Distance from the ray origin along the ray.
        obstacle_id: Identity of the obstacle that was hit.
        point: Hit point in model space.
        linked_context_id: Identity of the linked model instance the
            obstacle lives in, or None for obstacles in the host model.
    """

    distance: float
    obstacle_id: Hashable
    point: Point3D
    linked_context_id: Hashable | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.distance) or self.distance < 0:
            raise ValueError("Hit distance must be finite and non-negative")

    @property
    def key(self) -> CrossingKey:
        return CrossingKey(self.obstacle_id, self.linked_context_id)


@dataclass(frozen=True)
class CrossingKey:
    """Composite identity used to collapse hits on the same obstacle."""

    obstacle_id: Hashable
    linked_context_id: Hashable | None = None


@dataclass(frozen=True)
class Crossing:
    """A deduplicated crossing between one conduit and one obstacle."""

    obstacle_id: Hashable
    linked_context_id: Hashable | None
    distance: float
    point: Point3D

    @classmethod
    def from_hit(cls, hit: RawHit) -> Crossing:
        return cls(
            obstacle_id=hit.obstacle_id,
            linked_context_id=hit.linked_context_id,
            distance=hit.distance,
            point=hit.point,
        )

    @property
    def key(self) -> CrossingKey:
        return CrossingKey(self.obstacle_id, self.linked_context_id)


@dataclass(frozen=True)
class Placement:
    """Instruction to create one opening of a given size at one point.

    Attributes:
        conduit_id: Conduit that generated the crossing.
        obstacle_id: Wall that receives the opening.
        point: Opening insertion point on the conduit centerline.
        level: Hosting elevation of the wall.
        width: Opening width (equals the conduit diameter).
        height: Opening height (equals the conduit diameter).
        linked_context_id: Linked model instance the wall belongs to, or
            None for walls in the host model.
    """

    conduit_id: Hashable
    obstacle_id: Hashable
    point: Point3D
    level: Level
    width: float
    height: float
    linked_context_id: Hashable | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Opening dimensions must be positive")
