"""Pydantic schemas for the REST API."""

from openings.web.schemas.common import ErrorResponseSchema, Identity
from openings.web.schemas.requests import PlacementRequest, SceneValidateRequest
from openings.web.schemas.responses import (
    CategoryResultSchema,
    DiagnosticSchema,
    ExportFormatsSchema,
    OpeningSchema,
    PlacementRunSchema,
    ValidationMessageSchema,
    ValidationResultSchema,
)

__all__ = [
    "CategoryResultSchema",
    "DiagnosticSchema",
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "Identity",
    "OpeningSchema",
    "PlacementRequest",
    "PlacementRunSchema",
    "SceneValidateRequest",
    "ValidationMessageSchema",
    "ValidationResultSchema",
]
