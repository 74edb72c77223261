"""Automatic placement of wall openings where straight ducts and pipes cross walls."""

__version__ = "0.1.0"
