"""FastAPI dependency injection for placement services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from openings.application.factory import ServiceFactory, get_factory


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
