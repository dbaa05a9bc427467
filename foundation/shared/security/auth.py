"""
Authentication gates.

Extracts a bearer token and resolves it to an identity through the
application's token verifier. Token verification itself is an extension
point: a verifier is any callable taking the raw token and returning an
AuthUser, or raising UnauthorizedError. Until one is configured every
token is rejected.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from starlette.requests import Request

from foundation.shared.errors import UnauthorizedError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthUser:
    """Identity attached to an authenticated request."""

    id: str
    email: str
    role: str


TokenVerifier = Callable[[str], AuthUser]


def reject_all_tokens(_token: str) -> AuthUser:
    """Default verifier used until a real one is wired in."""
    raise UnauthorizedError("Token verification is not configured")


def _get_verifier(request: Request) -> TokenVerifier:
    return getattr(request.app.state, "token_verifier", None) or reject_all_tokens


def _extract_token(request: Request) -> str:
    header = request.headers.get("authorization")
    if not header or not header.startswith(BEARER_PREFIX):
        raise UnauthorizedError("No token provided")

    parts = header.split(" ")
    token = parts[1] if len(parts) > 1 else ""
    if not token:
        raise UnauthorizedError("Invalid token")
    return token


def authenticate(request: Request) -> AuthUser:
    """Require a verifiable bearer token and attach its identity.

    Raises:
        UnauthorizedError: When the header is missing, malformed or the
            token does not verify.
    """
    token = _extract_token(request)
    user = _get_verifier(request)(token)
    request.state.user = user
    return user


def authorize(*allowed_roles: str) -> Callable[[Request], AuthUser]:
    """Build a dependency requiring an attached identity with one of the roles.

    Must run after ``authenticate``. A role mismatch is reported as
    Unauthorized, not Forbidden.
    """

    def role_gate(request: Request) -> AuthUser:
        user: AuthUser | None = getattr(request.state, "user", None)
        if user is None:
            raise UnauthorizedError("User not authenticated")
        if user.role not in allowed_roles:
            raise UnauthorizedError("Insufficient permissions")
        return user

    return role_gate


def optional_auth(request: Request) -> AuthUser | None:
    """Attach an identity when a valid bearer token is present; never fails."""
    header = request.headers.get("authorization")
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    try:
        return authenticate(request)
    except Exception as exc:
        logger.debug("Optional authentication skipped: %s", exc)
        return None
