"""API routers for the REST API."""

from openings.web.routers.placements import router as placements_router
from openings.web.routers.validate import router as validate_router

__all__ = [
    "placements_router",
    "validate_router",
]
