"""
Shared error handling package.

Defines the operational error taxonomy. The mapping of errors to HTTP
responses lives in ``foundation.shared.errors.handlers``.
"""

from foundation.shared.errors.exceptions import (
    AppError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    TooManyRequestsError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    "AppError",
    "BadRequestError",
    "ConflictError",
    "ForbiddenError",
    "InternalServerError",
    "NotFoundError",
    "TooManyRequestsError",
    "UnauthorizedError",
    "ValidationError",
]
