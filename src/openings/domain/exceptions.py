"""Exceptions raised by the opening placement engine.

Precondition errors are fatal and stop a run before any opening is
placed. The remaining errors are raised at conduit, crossing or
placement granularity and are normally converted into diagnostics by
the caller.
"""

from __future__ import annotations

from collections.abc import Hashable


class OpeningPlacementError(Exception):
    """Base class for all placement engine errors."""


class PreconditionError(OpeningPlacementError):
    """A host precondition is not met; the run cannot start."""


class MissingReferenceContextError(PreconditionError):
    """The host has no non-template 3D view to cast rays in."""

    def __init__(self) -> None:
        super().__init__("No 3D view found in the host model")


class MissingOpeningTemplateError(PreconditionError):
    """The opening family is not loaded in the host model."""

    def __init__(self, family_name: str) -> None:
        self.family_name = family_name
        super().__init__(f'Opening family "{family_name}" not found')


class MissingConduitModelError(PreconditionError):
    """No linked model providing ducts and pipes was found."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f'No linked model with "{pattern}" in its title found')


class UnsupportedConduitShapeError(OpeningPlacementError):
    """A conduit's location curve is not a straight line."""

    def __init__(self, conduit_id: Hashable, shape: str) -> None:
        self.conduit_id = conduit_id
        self.shape = shape
        super().__init__(
            f"Conduit {conduit_id} has unsupported {shape} geometry; "
            "only straight segments are supported"
        )


class IntersectionQueryError(OpeningPlacementError):
    """The intersection oracle returned a result that breaks its contract."""


class MaterializationError(OpeningPlacementError):
    """The host failed to create an opening for a placement."""

    def __init__(
        self,
        message: str,
        conduit_id: Hashable | None = None,
        obstacle_id: Hashable | None = None,
    ) -> None:
        self.conduit_id = conduit_id
        self.obstacle_id = obstacle_id
        super().__init__(message)
