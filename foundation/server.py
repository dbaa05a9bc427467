"""
Process bootstrap.

Loads settings, configures logging and serves the application with
uvicorn. uvicorn handles SIGINT/SIGTERM; the application lifespan closes
the database collaborator on shutdown.
"""

import logging

import uvicorn

from foundation.core.config import get_settings
from foundation.main import create_app
from foundation.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def run() -> None:
    """Start the HTTP server."""
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        log_dir=settings.log_dir if settings.is_production else None,
    )
    logger.info("Starting %s with %s", settings.project_name, settings.safe_for_logging())

    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
    logger.info("Server stopped")


if __name__ == "__main__":
    run()
