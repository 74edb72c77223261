"""Core geometry value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point3D:
    """Point or vector in model space.

    The same type is used for positions and directions. Arithmetic follows
    plain double-precision semantics; NaN and infinity propagate.
    """

    x: float
    y: float
    z: float

    def __add__(self, other: Point3D) -> Point3D:
        return Point3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point3D) -> Point3D:
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Point3D:
        return Point3D(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    @property
    def length(self) -> float:
        """Euclidean length when used as a vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def dot(self, other: Point3D) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def distance_to(self, other: Point3D) -> float:
        return (other - self).length

    def normalized(self) -> Point3D:
        """Return the unit vector in the same direction.

        Raises:
            ValueError: If the vector has zero length.
        """
        length = self.length
        if length == 0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Point3D(self.x / length, self.y / length, self.z / length)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def origin(cls) -> Point3D:
        return cls(0.0, 0.0, 0.0)


def point_at(origin: Point3D, direction: Point3D, distance: float) -> Point3D:
    """Evaluate ``origin + direction * distance``.

    ``direction`` must already be unit length.
    """
    return Point3D(
        origin.x + direction.x * distance,
        origin.y + direction.y * distance,
        origin.z + direction.z * distance,
    )
