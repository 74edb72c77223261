"""FastAPI REST API for opening placement.

Usage:
    uvicorn openings.web:app --reload
"""

from openings.web.app import app, create_app

__all__ = ["app", "create_app"]
