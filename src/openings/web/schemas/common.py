"""Common Pydantic schemas shared across requests and responses."""

from typing import Any

from pydantic import BaseModel, Field

Identity = int | str


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
