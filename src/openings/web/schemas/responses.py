"""Pydantic response schemas for the REST API."""

from pydantic import BaseModel, Field

from openings.web.schemas.common import Identity


class OpeningSchema(BaseModel):
    """A planned opening."""

    conduit_id: Identity = Field(..., description="Conduit that crosses the wall")
    obstacle_id: Identity = Field(..., description="Wall the opening is placed in")
    linked_context_id: Identity | None = Field(
        default=None, description="Linked model instance the wall belongs to"
    )
    level: str = Field(..., description="Name of the wall's level")
    point: tuple[float, float, float] = Field(..., description="Opening location")
    width: float = Field(..., description="Opening width")
    height: float = Field(..., description="Opening height")
    placed: bool = Field(..., description="Whether the host created the opening")


class DiagnosticSchema(BaseModel):
    """A skipped conduit, crossing or placement."""

    kind: str = Field(..., description="Diagnostic kind")
    message: str = Field(..., description="Human-readable description")
    conduit_id: Identity | None = Field(default=None)
    obstacle_id: Identity | None = Field(default=None)


class CategoryResultSchema(BaseModel):
    """Outcome for one conduit category."""

    category: str = Field(..., description="Conduit category")
    conduits: int = Field(..., description="Straight conduits planned")
    placed: int = Field(..., description="Openings committed")
    aborted: bool = Field(..., description="Whether the category was rolled back")
    abort_reason: str | None = Field(default=None)
    openings: list[OpeningSchema] = Field(default_factory=list)
    diagnostics: list[DiagnosticSchema] = Field(default_factory=list)


class PlacementRunSchema(BaseModel):
    """Response for a placement run."""

    schema_version: str = Field(..., description="Schedule schema version")
    categories: list[CategoryResultSchema] = Field(default_factory=list)
    total_placed: int = Field(..., description="Openings committed across categories")


class ValidationMessageSchema(BaseModel):
    path: str
    message: str


class ValidationResultSchema(BaseModel):
    """Response for scene validation."""

    is_valid: bool = Field(..., description="Whether a run would pass its preconditions")
    errors: list[ValidationMessageSchema] = Field(default_factory=list)
    warnings: list[ValidationMessageSchema] = Field(default_factory=list)


class ExportFormatsSchema(BaseModel):
    """Response for available export formats."""

    formats: list[str] = Field(..., description="Available format names")
