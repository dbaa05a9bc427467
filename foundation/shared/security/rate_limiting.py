"""
Rate limiting gates.

Counts requests per client in fixed windows and rejects the request that
goes over the ceiling with a TooManyRequestsError. Counters live in the
in-memory storage of the ``limits`` library (the engine behind slowapi),
whose increments are lock-protected per key.

Standard ``RateLimit-*`` headers are attached to allowed and blocked
responses alike; legacy ``X-RateLimit-*`` headers are never sent.
"""

import logging
import math
import time

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from foundation.core.config import Settings
from foundation.shared.errors import TooManyRequestsError
from foundation.shared.errors.handlers import handle_error

logger = logging.getLogger(__name__)

HEADER_LIMIT = "RateLimit-Limit"
HEADER_REMAINING = "RateLimit-Remaining"
HEADER_RESET = "RateLimit-Reset"
HEADER_RETRY_AFTER = "Retry-After"

DEFAULT_MESSAGE = "Too many requests, please try again later"
STRICT_MESSAGE = "Too many attempts, please try again later"
FACTORY_MESSAGE = "Rate limit exceeded"

STRICT_WINDOW_MS = 15 * 60 * 1000
STRICT_MAX_REQUESTS = 10

_STATE_HEADERS = "rate_limit_headers"


def get_client_address(request: Request) -> str:
    """Return the client address, trusting one reverse-proxy hop.

    The last ``X-Forwarded-For`` entry is the one appended by the proxy in
    front of the application; earlier entries are client-controlled.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
        if hops:
            return hops[-1]
    return get_remote_address(request)


class RateLimiter:
    """Gate enforcing ``max_requests`` per ``window_ms``, usable as a FastAPI dependency.

    Attributes:
        window_ms: Window length in milliseconds (rounded down to seconds).
        max_requests: Requests allowed per client in one window.
        message: Message of the TooManyRequestsError raised on overflow.
    """

    def __init__(
        self, window_ms: int, max_requests: int, message: str = FACTORY_MESSAGE
    ) -> None:
        if max_requests < 1:
            raise ValueError(f"max_requests must be >= 1, got {max_requests}")
        self.window_ms = window_ms
        self.max_requests = max_requests
        self.message = message
        self._item = RateLimitItemPerSecond(max_requests, max(1, window_ms // 1000))
        self._storage = MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self._storage)

    def __repr__(self) -> str:
        return f"RateLimiter(window_ms={self.window_ms}, max_requests={self.max_requests})"

    async def __call__(self, request: Request) -> None:
        key = get_client_address(request)
        allowed = self._strategy.hit(self._item, key)
        reset_at, remaining = self._strategy.get_window_stats(self._item, key)
        reset_in = max(0, math.ceil(reset_at - time.time()))

        headers = {
            HEADER_LIMIT: str(self.max_requests),
            HEADER_REMAINING: str(remaining),
            HEADER_RESET: str(reset_in),
        }
        if not allowed:
            headers[HEADER_RETRY_AFTER] = str(reset_in)
        setattr(request.state, _STATE_HEADERS, headers)

        if not allowed:
            logger.warning("Rate limit exceeded for client=%s on %s", key, request.url.path)
            raise TooManyRequestsError(self.message)

    def reset(self) -> None:
        """Forget every counter."""
        self._storage.reset()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply the default limiter to every request and send its headers.

    Runs ahead of routing, so requests to unmatched paths are counted too.
    Headers left on the request by route-level gates replace the default
    ones, and the headers are copied onto error responses as well.
    """

    def __init__(self, app: ASGIApp, limiter: RateLimiter) -> None:
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            await self.limiter(request)
        except TooManyRequestsError as exc:
            response: Response = await handle_error(request, exc)
        else:
            response = await call_next(request)

        headers = getattr(request.state, _STATE_HEADERS, None)
        if headers:
            for header_name, header_value in headers.items():
                response.headers[header_name] = header_value
        return response


def create_rate_limiter(window_ms: int, max_requests: int) -> RateLimiter:
    """Build a rate limiter for arbitrary window and ceiling."""
    return RateLimiter(window_ms, max_requests, FACTORY_MESSAGE)


def build_default_rate_limiter(settings: Settings) -> RateLimiter:
    """Build the application-wide limiter from configuration."""
    return RateLimiter(
        settings.rate_limit_window_ms,
        settings.rate_limit_max_requests,
        DEFAULT_MESSAGE,
    )


# Sensitive endpoints (sign-in, password reset, ...)
strict_rate_limiter = RateLimiter(STRICT_WINDOW_MS, STRICT_MAX_REQUESTS, STRICT_MESSAGE)
