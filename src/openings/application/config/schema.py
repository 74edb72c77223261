"""Pydantic schemas for scene and placement settings files.

A scene file describes a host model for the in-memory reference host:
levels, walls, 3D views, loaded opening families and the linked model
that provides ducts and pipes. Placement settings may be embedded in the
scene or loaded from a separate file.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from openings.domain.value_objects import ConduitCategory, TieBreak

# Supported scene schema versions
# Version 1.0: Levels, walls, views, opening families and linked models
# Version 1.1: Added base_offset and linked_context on walls
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})

Vector3 = tuple[float, float, float]
Identity = int | str


class MaterializationPolicy(str, Enum):
    """What to do when the host fails to create an opening.

    - SKIP: Record a diagnostic and continue with the next placement
    - ABORT_CATEGORY: Roll back the current category and move on
    """

    SKIP = "skip"
    ABORT_CATEGORY = "abort_category"


class PlacementSettingsConfig(BaseModel):
    """Settings controlling a placement run.

    Attributes:
        categories: Conduit categories in processing order.
        conduit_model_pattern: Title substring identifying the linked model
            that contains ducts and pipes.
        opening_family: Family name of the opening template.
        width_parameter: Template parameter receiving the opening width.
        height_parameter: Template parameter receiving the opening height.
        materialization_policy: Reaction to host failures while creating openings.
        tie_break: Which hit represents several hits on the same wall.
    """

    model_config = ConfigDict(extra="forbid")

    categories: list[ConduitCategory] = Field(
        default_factory=lambda: [ConduitCategory.DUCT, ConduitCategory.PIPE],
        min_length=1,
    )
    conduit_model_pattern: str = Field(default="MEP", min_length=1)
    opening_family: str = Field(default="Opening", min_length=1)
    width_parameter: str = Field(default="Width", min_length=1)
    height_parameter: str = Field(default="Height", min_length=1)
    materialization_policy: MaterializationPolicy = MaterializationPolicy.SKIP
    tie_break: TieBreak = TieBreak.FIRST_ENCOUNTERED

    @field_validator("categories")
    @classmethod
    def validate_unique_categories(
        cls, v: list[ConduitCategory]
    ) -> list[ConduitCategory]:
        if len(set(v)) != len(v):
            raise ValueError("categories must not repeat")
        return v


class LevelConfig(BaseModel):
    """A building level that hosts walls."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str
    elevation: float = 0.0


class WallConfig(BaseModel):
    """A straight wall modelled as an oriented box.

    Attributes:
        id: Wall identity.
        start: Start of the wall location line (z is ignored; the base is
            the level elevation plus base_offset).
        end: End of the wall location line.
        thickness: Wall thickness, centred on the location line.
        height: Unconnected height above the base.
        level: Id of the hosting level, or None when the wall has no
            resolvable level (its crossings are skipped).
        base_offset: Offset of the wall base above its level.
        linked_context: Identity of the linked model instance the wall
            comes from, or None for walls in the host model.
    """

    model_config = ConfigDict(extra="forbid")

    id: Identity
    start: Vector3
    end: Vector3
    thickness: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    level: str | None = None
    base_offset: float = 0.0
    linked_context: Identity | None = None

    @model_validator(mode="after")
    def validate_length(self) -> WallConfig:
        dx = self.end[0] - self.start[0]
        dy = self.end[1] - self.start[1]
        if dx == 0 and dy == 0:
            raise ValueError("Wall start and end must differ in plan")
        return self


class ViewConfig(BaseModel):
    """A 3D view; template views cannot host ray queries."""

    model_config = ConfigDict(extra="forbid")

    name: str
    is_template: bool = False


class OpeningFamilyConfig(BaseModel):
    """A loaded opening family type."""

    model_config = ConfigDict(extra="forbid")

    family_name: str = Field(..., min_length=1)
    type_name: str = "Default"
    parameters: list[str] = Field(default_factory=lambda: ["Width", "Height"])
    active: bool = False


class ConduitGeometryConfig(BaseModel):
    """Location curve of a conduit."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["line", "arc"] = "line"
    start: Vector3
    end: Vector3


class ConduitConfig(BaseModel):
    """A duct or pipe in the linked model."""

    model_config = ConfigDict(extra="forbid")

    id: Identity
    diameter: float = Field(..., gt=0)
    geometry: ConduitGeometryConfig


class LinkedModelConfig(BaseModel):
    """A linked model, usually the mechanical model providing conduits."""

    model_config = ConfigDict(extra="forbid")

    title: str
    ducts: list[ConduitConfig] = Field(default_factory=list)
    pipes: list[ConduitConfig] = Field(default_factory=list)

    def conduits(self, category: ConduitCategory) -> list[ConduitConfig]:
        return self.ducts if category == ConduitCategory.DUCT else self.pipes


class SceneConfiguration(BaseModel):
    """Root scene configuration.

    Attributes:
        version: Scene schema version.
        levels: Building levels.
        walls: Walls that act as obstacles.
        views: 3D views in the host model.
        opening_families: Opening family types loaded in the host model.
        linked_models: Linked models; one must provide the conduits.
        settings: Placement settings for runs on this scene.
    """

    model_config = ConfigDict(extra="forbid")

    version: str = "1.0"
    levels: list[LevelConfig] = Field(default_factory=list)
    walls: list[WallConfig] = Field(default_factory=list)
    views: list[ViewConfig] = Field(default_factory=list)
    opening_families: list[OpeningFamilyConfig] = Field(default_factory=list)
    linked_models: list[LinkedModelConfig] = Field(default_factory=list)
    settings: PlacementSettingsConfig = Field(default_factory=PlacementSettingsConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(f"Unsupported scene version {v!r} (supported: {supported})")
        return v

    @model_validator(mode="after")
    def validate_references(self) -> SceneConfiguration:
        level_ids = [level.id for level in self.levels]
        if len(set(level_ids)) != len(level_ids):
            raise ValueError("Level ids must be unique")

        wall_keys = [(wall.id, wall.linked_context) for wall in self.walls]
        if len(set(wall_keys)) != len(wall_keys):
            raise ValueError("Wall ids must be unique within a linked context")

        known_levels = set(level_ids)
        for wall in self.walls:
            if wall.level is not None and wall.level not in known_levels:
                raise ValueError(f"Wall {wall.id} references unknown level {wall.level!r}")
        return self
