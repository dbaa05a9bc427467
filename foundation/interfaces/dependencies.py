"""
Dependency injection for the HTTP interface.

Provides FastAPI dependency functions that wire collaborators held on
``app.state`` into use cases via constructor injection.
"""

from fastapi import Depends, Request
from sqlalchemy.engine import Engine

from foundation.application.health import HealthService
from foundation.core.config import Settings
from foundation.core.database import get_database


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_health_service(
    database: Engine | None = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> HealthService:
    """Build HealthService with its collaborators."""
    return HealthService(database=database, version=settings.version)
