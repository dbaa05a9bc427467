"""
Operational error taxonomy.

All errors raised by gates and handlers must be defined here.
These are mapped to HTTP responses by the global error sink.
No framework imports allowed.
"""


class AppError(Exception):
    """Base error carrying an HTTP status and a machine-readable code."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal Server Error"
    is_operational: bool = True

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        *,
        status_code: int | None = None,
        is_operational: bool | None = None,
    ) -> None:
        self.message = message if message is not None else self.default_message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        if is_operational is not None:
            self.is_operational = is_operational
        super().__init__(self.message)


class BadRequestError(AppError):
    """Raised when the request is malformed."""

    status_code = 400
    code = "BAD_REQUEST"
    default_message = "Bad Request"


class UnauthorizedError(AppError):
    """Raised when credentials are missing, invalid or insufficient."""

    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    """Raised when an authenticated caller may not access a resource."""

    status_code = 403
    code = "FORBIDDEN"
    default_message = "Forbidden"


class NotFoundError(AppError):
    """Raised when a resource does not exist."""

    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not Found"


class ConflictError(AppError):
    """Raised when a resource state conflicts with the request."""

    status_code = 409
    code = "CONFLICT"
    default_message = "Conflict"


class ValidationError(AppError):
    """Raised when request data violates its schema.

    Attributes:
        errors: Violation messages grouped by dotted field path, in the
            order they were discovered.
    """

    status_code = 422
    code = "VALIDATION_ERROR"
    default_message = "Validation Error"

    def __init__(
        self,
        message: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = dict(errors) if errors else {}


class TooManyRequestsError(AppError):
    """Raised when a client exceeds its rate-limit window."""

    status_code = 429
    code = "RATE_LIMITED"
    default_message = "Too Many Requests"


class InternalServerError(AppError):
    """Raised for unexpected faults. Never operational."""

    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal Server Error"
    is_operational = False
