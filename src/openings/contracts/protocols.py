"""Service protocols for dependency injection.

The modelling host (documents, transactions, family loading) is an
external collaborator. The engine only talks to it through the protocols
below, so the core can be exercised with a scripted or in-memory host.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from openings.domain.value_objects import (
        ConduitCategory,
        ConduitElement,
        Level,
        Point3D,
        RawHit,
    )


@runtime_checkable
class OpeningTemplateProtocol(Protocol):
    """A loadable opening family type in the host model."""

    family_name: str

    @property
    def is_active(self) -> bool:
        """Whether the template can be instantiated without activation."""
        ...


class ObstacleQueryProtocol(Protocol):
    """Ray-vs-obstacle intersection query over the host's walls.

    The query is unbounded in distance and makes no ordering guarantee.
    """

    def find_obstacle_crossings(
        self,
        origin: Point3D,
        direction: Point3D,
        context: Any,
    ) -> Iterable[RawHit]:
        """Cast a ray and report every obstacle hit.

        Args:
            origin: Ray origin.
            direction: Unit ray direction.
            context: Spatial reference context (a 3D view) to query in.

        Returns:
            Hits in host order.
        """
        ...


class ElevationResolverProtocol(Protocol):
    """Resolves the hosting elevation of an obstacle."""

    def resolve_hosting_elevation(
        self, obstacle_id: Hashable, linked_context_id: Hashable | None = None
    ) -> Level | None:
        """Return the level hosting the obstacle, or None if unresolvable.

        The obstacle is identified by its id within its linked context.
        """
        ...


class OpeningServiceProtocol(Protocol):
    """Creates opening objects in the host model."""

    def materialize_opening(
        self,
        point: Point3D,
        obstacle_id: Hashable,
        level: Level,
        width: float,
        height: float,
        linked_context_id: Hashable | None = None,
    ) -> Any:
        """Create one opening.

        Returns:
            Host handle of the created opening.

        Raises:
            MaterializationError: If the host cannot create or size the opening.
        """
        ...


@runtime_checkable
class HostModelProtocol(
    ObstacleQueryProtocol,
    ElevationResolverProtocol,
    OpeningServiceProtocol,
    Protocol,
):
    """Full modelling host contract consumed by the placement run."""

    def list_linear_conduits(self, category: ConduitCategory) -> list[ConduitElement]:
        """List conduits of a category from the linked conduit model."""
        ...

    def has_conduit_model(self) -> bool:
        """Whether the linked model providing conduits is available."""
        ...

    def get_active_spatial_reference_context(self) -> Any | None:
        """Return a non-template 3D view, or None if there is none."""
        ...

    def get_opening_template(self) -> OpeningTemplateProtocol | None:
        """Return the opening family type, or None if it is not loaded."""
        ...

    def activate_template(self, template: OpeningTemplateProtocol) -> None:
        """Activate the opening template so it can be instantiated."""
        ...

    def unit_of_work(self, name: str) -> AbstractContextManager[Any]:
        """Open a named host transaction.

        Leaving the context normally commits; leaving it with an exception
        rolls back everything created inside it.
        """
        ...
