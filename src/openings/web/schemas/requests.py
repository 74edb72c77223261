"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from openings.application.config import MaterializationPolicy
from openings.domain import TieBreak


class PlacementRequest(BaseModel):
    """Request for running a placement over a scene."""

    scene: dict[str, Any] = Field(..., description="Full scene configuration JSON")
    materialization_policy: MaterializationPolicy | None = Field(
        default=None, description="Override for the scene's materialization policy"
    )
    tie_break: TieBreak | None = Field(
        default=None, description="Override for the scene's tie-break policy"
    )


class SceneValidateRequest(BaseModel):
    """Request for validating a scene."""

    scene: dict[str, Any] = Field(..., description="Scene configuration to validate")
