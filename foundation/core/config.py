"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here; no scattered magic strings.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "production", "test"]


def redact_secret(secret: str) -> str:
    """Return a non-recoverable placeholder for sensitive values."""
    if not secret:
        return "<empty>"
    return "<redacted>"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Field names map to upper-case environment variables
    (``node_env`` <- ``NODE_ENV``, ``rate_limit_window_ms`` <-
    ``RATE_LIMIT_WINDOW_MS``, ...).

    Attributes:
        node_env: Deployment environment (development, production, test).
        port: TCP port the HTTP server binds to.
        host: Interface the HTTP server binds to.
        api_prefix: Mount point of the feature module router.
        database_url: SQLAlchemy URL of the database. Empty disables it.
        redis_host: Reserved for a cache collaborator; unused by the core.
        redis_port: Reserved for a cache collaborator; unused by the core.
        jwt_secret: Reserved for a token verifier; unused by the core.
        jwt_expires_in: Reserved for a token verifier; unused by the core.
        rate_limit_window_ms: Window of the default rate limiter.
        rate_limit_max_requests: Ceiling of the default rate limiter.
        log_level: Logging level (debug, info, warning, error).
        log_dir: Directory for rotating log files in production.
        cors_origin: Allowed CORS origin(s), comma separated, or ``*``.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "foundation"
    version: str = "1.0.0"

    node_env: Environment = "development"
    port: int = 3000
    host: str = "0.0.0.0"
    api_prefix: str = "/api/v1"

    database_url: str = ""

    redis_host: str = "localhost"
    redis_port: int = 6379

    jwt_secret: str = "default-secret-change-me"
    jwt_expires_in: str = "7d"

    rate_limit_window_ms: int = 900_000  # 15 minutes
    rate_limit_max_requests: int = 100

    log_level: str = "debug"
    log_dir: str = "logs"

    cors_origin: str = "*"

    @property
    def is_development(self) -> bool:
        return self.node_env == "development"

    @property
    def is_production(self) -> bool:
        return self.node_env == "production"

    @property
    def is_test(self) -> bool:
        return self.node_env == "test"

    @property
    def cors_origins(self) -> list[str]:
        """Return the configured CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    def safe_for_logging(self) -> dict[str, str | int]:
        """Return settings safe for logs."""
        return {
            "node_env": self.node_env,
            "port": self.port,
            "api_prefix": self.api_prefix,
            "database_url": redact_secret(self.database_url),
            "jwt_secret": redact_secret(self.jwt_secret),
            "rate_limit_window_ms": self.rate_limit_window_ms,
            "rate_limit_max_requests": self.rate_limit_max_requests,
            "log_level": self.log_level,
            "cors_origin": self.cors_origin,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment once per process."""
    return Settings()
