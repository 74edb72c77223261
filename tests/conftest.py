"""Pytest configuration and shared fixtures for opening placement tests."""

from __future__ import annotations

import copy
from collections.abc import Hashable
from typing import Any

import pytest

from openings.domain import Level, Point3D, RawHit

GROUND = Level(level_id="L1", name="Level 1", elevation=0.0)


class ScriptedHost:
    """Fake host returning scripted ray hits keyed by ray origin.

    Used where a test needs exact control over what the intersection
    query reports, including duplicates and out-of-range hits.
    """

    def __init__(
        self,
        hits: dict[tuple[float, float, float], list[RawHit]] | None = None,
        levels: dict[Hashable, Level | None] | None = None,
    ) -> None:
        self.hits = hits or {}
        self.levels = levels or {}
        self.queries: list[tuple[Point3D, Point3D, Any]] = []

    def find_obstacle_crossings(
        self, origin: Point3D, direction: Point3D, context: Any
    ) -> list[RawHit]:
        self.queries.append((origin, direction, context))
        return list(self.hits.get(origin.as_tuple(), []))

    def resolve_hosting_elevation(
        self, obstacle_id: Hashable, linked_context_id: Hashable | None = None
    ) -> Level | None:
        return self.levels.get(obstacle_id, GROUND)


def hit(distance: float, obstacle_id: Hashable, context: Hashable | None = None) -> RawHit:
    """Build a hit on the +X axis at the given distance."""
    return RawHit(
        distance=distance,
        obstacle_id=obstacle_id,
        point=Point3D(distance, 0.0, 0.0),
        linked_context_id=context,
    )


SAMPLE_SCENE: dict[str, Any] = {
    "version": "1.1",
    "levels": [
        {"id": "L1", "name": "Level 1", "elevation": 0.0},
        {"id": "L2", "name": "Level 2", "elevation": 4.0},
    ],
    "walls": [
        {
            "id": "W1",
            "start": [2.0, -5.0, 0.0],
            "end": [2.0, 5.0, 0.0],
            "thickness": 0.2,
            "height": 3.0,
            "level": "L1",
        },
        {
            "id": "W2",
            "start": [6.0, -5.0, 0.0],
            "end": [6.0, 5.0, 0.0],
            "thickness": 0.2,
            "height": 3.0,
            "level": "L1",
        },
    ],
    "views": [
        {"name": "{3D - template}", "is_template": True},
        {"name": "{3D}"},
    ],
    "opening_families": [
        {"family_name": "Opening", "parameters": ["Width", "Height"]},
    ],
    "linked_models": [
        {"title": "Architecture.rvt"},
        {
            "title": "Tower-MEP.rvt",
            "ducts": [
                {
                    "id": 101,
                    "diameter": 0.4,
                    "geometry": {"start": [0.0, 0.0, 1.5], "end": [8.0, 0.0, 1.5]},
                },
                {
                    "id": 102,
                    "diameter": 0.3,
                    "geometry": {"start": [0.0, 1.0, 1.5], "end": [4.0, 1.0, 1.5]},
                },
            ],
            "pipes": [
                {
                    "id": 201,
                    "diameter": 0.1,
                    "geometry": {"start": [0.0, -1.0, 1.0], "end": [3.0, -1.0, 1.0]},
                },
                {
                    "id": 202,
                    "diameter": 0.1,
                    "geometry": {
                        "kind": "arc",
                        "start": [0.0, -2.0, 1.0],
                        "end": [3.0, -2.0, 1.0],
                    },
                },
            ],
        },
    ],
}


@pytest.fixture
def scene_dict() -> dict[str, Any]:
    """A scene with two walls, two ducts and two pipes (one curved).

    Duct 101 crosses W1 and W2, duct 102 and pipe 201 cross W1 only,
    pipe 202 is an arc and is skipped. A clean run places four openings.
    """
    return copy.deepcopy(SAMPLE_SCENE)


@pytest.fixture
def scene(scene_dict: dict[str, Any]):
    from openings.application.config import load_config_from_dict

    return load_config_from_dict(scene_dict)


@pytest.fixture
def host(scene):
    from openings.application.config import config_to_host

    return config_to_host(scene)


@pytest.fixture
def make_hit():
    """Factory for hits on the +X axis."""
    return hit


@pytest.fixture
def scripted_host():
    """Factory for ScriptedHost instances."""
    return ScriptedHost


@pytest.fixture
def broken_oracle_factory():
    """ServiceFactory whose hosts answer ray queries with malformed hits."""
    from openings.application.factory import ServiceFactory

    class BrokenOracleFactory(ServiceFactory):
        def create_host(self, scene):
            host = super().create_host(scene)
            host.find_obstacle_crossings = lambda *args: [("W1", 2.0)]
            return host

    return BrokenOracleFactory()
