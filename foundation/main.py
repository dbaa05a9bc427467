"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health probes, the prefixed API router for feature modules)
- Error handlers (the global error sink)
- Security middleware (headers, CORS, rate limiting)
- Compression and request logging
- The database collaborator (created and disposed by the lifespan)

No business logic belongs here.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy.exc import SQLAlchemyError

from foundation.core.config import Settings, get_settings
from foundation.core.database import (
    create_database_engine,
    dispose_database,
    ping_database,
)
from foundation.interfaces.health import router as health_router
from foundation.shared.errors.handlers import (
    UnhandledErrorMiddleware,
    register_error_handlers,
)
from foundation.shared.request_logging import RequestLoggingMiddleware
from foundation.shared.security.auth import TokenVerifier
from foundation.shared.security.headers import SecurityHeadersMiddleware
from foundation.shared.security.rate_limiting import (
    RateLimitMiddleware,
    build_default_rate_limiter,
)

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]
GZIP_MINIMUM_SIZE = 1024


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: open and close the database collaborator."""
    settings: Settings = app.state.settings
    engine = create_database_engine(settings.database_url, echo=settings.is_development)
    app.state.database = engine

    if engine is not None:
        try:
            ping_database(engine)
            logger.info("Database connection established")
        except SQLAlchemyError:
            logger.error("Failed to connect to database", exc_info=True)

    yield

    dispose_database(engine)
    app.state.database = None


def create_app(
    settings: Settings | None = None,
    token_verifier: TokenVerifier | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and middleware.
    This is the composition root of the application.

    Args:
        settings: Explicit settings; loaded from the environment when omitted.
        token_verifier: Resolves bearer tokens to identities for the auth
            gates. Every token is rejected when omitted.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or get_settings()
    default_rate_limiter = build_default_rate_limiter(settings)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = None
    app.state.token_verifier = token_verifier
    app.state.rate_limiter = default_rate_limiter

    # --- Middleware (last added runs first) ---
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RateLimitMiddleware, limiter=default_rate_limiter)
    app.add_middleware(GZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)

    api_router = APIRouter()
    # Feature module routers are mounted here, e.g.
    # api_router.include_router(users_router, prefix="/users")
    app.include_router(api_router, prefix=settings.api_prefix)

    return app
