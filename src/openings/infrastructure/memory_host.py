"""In-memory modelling host.

Implements the host protocols over plain Python objects so that placement
runs can be executed without a CAD application: walls are oriented boxes,
ray queries use the slab method, and openings are recorded inside named
units of work that commit or roll back like host transactions.
"""

from __future__ import annotations

import itertools
import logging
import math
from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from openings.domain.exceptions import (
    MaterializationError,
    MissingConduitModelError,
)
from openings.domain.value_objects import (
    ConduitCategory,
    ConduitElement,
    Level,
    Point3D,
    RawHit,
    point_at,
)

logger = logging.getLogger(__name__)

__all__ = [
    "HostView",
    "InMemoryHostModel",
    "OpeningFamily",
    "OpeningInstance",
    "WallBox",
]

# Direction components smaller than this are treated as parallel to a slab
PARALLEL_TOLERANCE = 1e-12


@dataclass(frozen=True)
class WallBox:
    """A straight wall as an oriented box.

    The location line runs from ``start`` to ``end`` in plan (z ignored),
    the thickness is centred on it, and the box spans
    ``base_elevation`` to ``base_elevation + height`` vertically.

    Attributes:
        wall_id: Wall identity.
        start: Start of the location line.
        end: End of the location line.
        thickness: Wall thickness.
        height: Wall height.
        base_elevation: Absolute elevation of the wall base.
        level: Hosting level, or None if it cannot be resolved.
        linked_context_id: Linked model instance the wall belongs to.
    """

    wall_id: Hashable
    start: Point3D
    end: Point3D
    thickness: float
    height: float
    base_elevation: float = 0.0
    level: Level | None = None
    linked_context_id: Hashable | None = None

    def __post_init__(self) -> None:
        if self.thickness <= 0 or self.height <= 0:
            raise ValueError("Wall thickness and height must be positive")
        if self.plan_length == 0:
            raise ValueError("Wall start and end must differ in plan")

    @property
    def plan_length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)

    def _axes(self) -> tuple[Point3D, Point3D]:
        length = self.plan_length
        along = Point3D(
            (self.end.x - self.start.x) / length,
            (self.end.y - self.start.y) / length,
            0.0,
        )
        across = Point3D(-along.y, along.x, 0.0)
        return along, across

    def ray_distances(self, origin: Point3D, direction: Point3D) -> list[float]:
        """Distances at which a ray enters and leaves the wall box.

        Only non-negative distances are returned, entry face first. A ray
        starting inside the wall reports the exit face only; a ray touching
        a single edge reports one distance.
        """
        along, across = self._axes()
        base = Point3D(self.start.x, self.start.y, 0.0)
        rel = origin - base
        half = self.thickness / 2
        slabs = (
            (rel.dot(along), direction.dot(along), 0.0, self.plan_length),
            (rel.dot(across), direction.dot(across), -half, half),
            (origin.z, direction.z, self.base_elevation, self.base_elevation + self.height),
        )

        t_enter = -math.inf
        t_exit = math.inf
        for offset, speed, low, high in slabs:
            if abs(speed) < PARALLEL_TOLERANCE:
                if offset < low or offset > high:
                    return []
                continue
            t1 = (low - offset) / speed
            t2 = (high - offset) / speed
            if t1 > t2:
                t1, t2 = t2, t1
            t_enter = max(t_enter, t1)
            t_exit = min(t_exit, t2)
            if t_enter > t_exit:
                return []

        distances = [t for t in (t_enter, t_exit) if math.isfinite(t) and t >= 0]
        if len(distances) == 2 and distances[0] == distances[1]:
            distances.pop()
        return distances


@dataclass
class HostView:
    """A 3D view in the host model."""

    name: str
    is_template: bool = False


@dataclass
class OpeningFamily:
    """An opening family type available for instantiation."""

    family_name: str
    type_name: str = "Default"
    parameters: tuple[str, ...] = ("Width", "Height")
    active: bool = False

    @property
    def is_active(self) -> bool:
        return self.active


@dataclass(frozen=True)
class OpeningInstance:
    """An opening created in the host model."""

    opening_id: int
    family_name: str
    point: Point3D
    obstacle_id: Hashable
    level: Level
    linked_context_id: Hashable | None = None
    parameters: dict[str, float] = field(default_factory=dict, hash=False)


class InMemoryHostModel:
    """Host model implementing ``HostModelProtocol`` in memory.

    Attributes:
        walls: Walls acting as obstacles, in query order.
        views: 3D views.
        opening_families: Loaded opening family types.
        conduit_models: Linked model title mapped to its conduits by category.
        openings: Committed openings.
        journal: ``(unit of work name, "committed" | "rolled_back")`` entries.
    """

    def __init__(
        self,
        walls: list[WallBox] | None = None,
        views: list[HostView] | None = None,
        opening_families: list[OpeningFamily] | None = None,
        conduit_models: dict[str, dict[ConduitCategory, list[ConduitElement]]] | None = None,
        *,
        conduit_model_pattern: str = "MEP",
        opening_family: str = "Opening",
        width_parameter: str = "Width",
        height_parameter: str = "Height",
    ) -> None:
        self.walls = list(walls or [])
        self.views = list(views or [])
        self.opening_families = list(opening_families or [])
        self.conduit_models = dict(conduit_models or {})
        self.conduit_model_pattern = conduit_model_pattern
        self.opening_family = opening_family
        self.width_parameter = width_parameter
        self.height_parameter = height_parameter

        self.openings: list[OpeningInstance] = []
        self.journal: list[tuple[str, str]] = []
        self._pending: list[OpeningInstance] | None = None
        self._ids = itertools.count(1)

    # -- conduit source ----------------------------------------------------

    def _conduit_model_title(self) -> str | None:
        for title in self.conduit_models:
            if self.conduit_model_pattern in title:
                return title
        return None

    def has_conduit_model(self) -> bool:
        return self._conduit_model_title() is not None

    def list_linear_conduits(self, category: ConduitCategory) -> list[ConduitElement]:
        title = self._conduit_model_title()
        if title is None:
            raise MissingConduitModelError(self.conduit_model_pattern)
        return list(self.conduit_models[title].get(category, []))

    # -- views and templates -------------------------------------------------

    def get_active_spatial_reference_context(self) -> HostView | None:
        return next((v for v in self.views if not v.is_template), None)

    def get_opening_template(self) -> OpeningFamily | None:
        return next(
            (f for f in self.opening_families if f.family_name == self.opening_family),
            None,
        )

    def activate_template(self, template: OpeningFamily) -> None:
        template.active = True
        logger.debug(f"Activated opening family {template.family_name!r}")

    # -- queries -----------------------------------------------------------

    def find_obstacle_crossings(
        self,
        origin: Point3D,
        direction: Point3D,
        context: Any,
    ) -> Iterator[RawHit]:
        for wall in self.walls:
            for distance in wall.ray_distances(origin, direction):
                yield RawHit(
                    distance=distance,
                    obstacle_id=wall.wall_id,
                    point=point_at(origin, direction, distance),
                    linked_context_id=wall.linked_context_id,
                )

    def _find_wall(
        self, obstacle_id: Hashable, linked_context_id: Hashable | None
    ) -> WallBox | None:
        return next(
            (
                w
                for w in self.walls
                if w.wall_id == obstacle_id and w.linked_context_id == linked_context_id
            ),
            None,
        )

    def resolve_hosting_elevation(
        self, obstacle_id: Hashable, linked_context_id: Hashable | None = None
    ) -> Level | None:
        wall = self._find_wall(obstacle_id, linked_context_id)
        return wall.level if wall is not None else None

    # -- mutation ----------------------------------------------------------

    def materialize_opening(
        self,
        point: Point3D,
        obstacle_id: Hashable,
        level: Level,
        width: float,
        height: float,
        linked_context_id: Hashable | None = None,
    ) -> OpeningInstance:
        if self._pending is None:
            raise MaterializationError(
                "Openings can only be created inside a unit of work",
                obstacle_id=obstacle_id,
            )
        template = self.get_opening_template()
        if template is None or not template.is_active:
            raise MaterializationError(
                f'Opening family "{self.opening_family}" is not active',
                obstacle_id=obstacle_id,
            )
        if self._find_wall(obstacle_id, linked_context_id) is None:
            raise MaterializationError(
                f"Host wall {obstacle_id} does not exist in linked context "
                f"{linked_context_id!r}",
                obstacle_id=obstacle_id,
            )
        for name in (self.width_parameter, self.height_parameter):
            if name not in template.parameters:
                raise MaterializationError(
                    f'Parameter "{name}" not found on opening family '
                    f'"{template.family_name}"',
                    obstacle_id=obstacle_id,
                )

        opening = OpeningInstance(
            opening_id=next(self._ids),
            family_name=template.family_name,
            point=point,
            obstacle_id=obstacle_id,
            level=level,
            linked_context_id=linked_context_id,
            parameters={self.width_parameter: width, self.height_parameter: height},
        )
        self._pending.append(opening)
        return opening

    @contextmanager
    def unit_of_work(self, name: str) -> Iterator[InMemoryHostModel]:
        """Collect openings created inside; commit on success, discard on error."""
        if self._pending is not None:
            raise RuntimeError(f"Cannot start {name!r}: a unit of work is already open")
        self._pending = []
        try:
            yield self
        except BaseException:
            discarded = len(self._pending)
            self._pending = None
            self.journal.append((name, "rolled_back"))
            logger.debug(f"Rolled back {name!r}, discarded {discarded} opening(s)")
            raise
        pending, self._pending = self._pending, None
        self.openings.extend(pending)
        self.journal.append((name, "committed"))
        logger.debug(f"Committed {name!r} with {len(pending)} opening(s)")
