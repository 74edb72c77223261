"""Application layer - use cases and orchestration."""

from .commands import PlaceOpeningsCommand
from .dtos import CategoryReport, RunOutput
from .factory import ServiceFactory, get_factory, set_factory

__all__ = [
    "CategoryReport",
    "PlaceOpeningsCommand",
    "RunOutput",
    "ServiceFactory",
    "get_factory",
    "set_factory",
]
