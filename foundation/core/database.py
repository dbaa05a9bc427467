"""
Database collaborator.

The contract layer never owns the connection lifecycle: the engine is
created by the application lifespan, borrowed per request through
``get_database`` and disposed on shutdown.
"""

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from starlette.requests import Request

logger = logging.getLogger(__name__)


def create_database_engine(database_url: str, echo: bool = False) -> Engine | None:
    """Build a SQLAlchemy engine from a database URL.

    Args:
        database_url: SQLAlchemy URL. An empty value disables the database.
        echo: Log every emitted statement (development only).

    Returns:
        The engine, or None when no database is configured.
    """
    if not database_url:
        logger.warning("DATABASE_URL is not set; database features are disabled")
        return None
    return create_engine(database_url, pool_pre_ping=True, echo=echo)


def ping_database(engine: Engine) -> None:
    """Run a trivial query; raises whatever the driver raises on failure."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def dispose_database(engine: Engine | None) -> None:
    """Close every pooled connection of the engine."""
    if engine is None:
        return
    engine.dispose()
    logger.info("Database connection closed")


def get_database(request: Request) -> Engine | None:
    """FastAPI dependency returning the application's database engine."""
    return getattr(request.app.state, "database", None)
