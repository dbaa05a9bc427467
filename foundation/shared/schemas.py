"""
Shared Pydantic schemas.

Reusable request fragments for the validation gate and the response
envelope models used to document endpoints in OpenAPI.
No business logic belongs here.
"""

from typing import Generic, Literal, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")

PAGE_MIN = 1
LIMIT_MIN = 1
LIMIT_MAX = 100
LIMIT_DEFAULT = 10
SEARCH_MIN_LEN = 1
SEARCH_MAX_LEN = 100


class RequestSchema(BaseModel):
    """Base for request schemas. Unknown fields are dropped, not rejected."""

    model_config = ConfigDict(extra="ignore")


class IdParams(RequestSchema):
    """Path parameters identifying a single resource.

    ``id`` stays a string, normalized to the canonical lower-case UUID form.
    """

    id: str = Field(..., description="Resource identifier (UUID)")

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        try:
            return str(UUID(value))
        except ValueError as exc:
            raise ValueError("must be a valid UUID") from exc


class PaginationQuery(RequestSchema):
    """Query parameters for paginated listings.

    Attributes:
        page: 1-based page number.
        limit: Page size (1-100).
        sort_by: Optional field to sort by.
        sort_order: Sort direction, ``asc`` or ``desc``.
    """

    page: int = Field(default=PAGE_MIN, ge=PAGE_MIN)
    limit: int = Field(default=LIMIT_DEFAULT, ge=LIMIT_MIN, le=LIMIT_MAX)
    sort_by: str | None = Field(default=None, alias="sortBy")
    sort_order: Literal["asc", "desc"] = Field(default="desc", alias="sortOrder")


class SearchQuery(RequestSchema):
    """Query parameters for free-text search."""

    q: str | None = Field(
        default=None, min_length=SEARCH_MIN_LEN, max_length=SEARCH_MAX_LEN
    )


class PageMeta(BaseModel):
    """Pagination metadata. ``totalPages`` is always derived."""

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    totalPages: int = Field(..., ge=0)


class SuccessResponse(BaseModel, Generic[T]):
    """Success envelope returned by every endpoint."""

    success: Literal[True] = True
    message: str
    data: T | None = None
    meta: PageMeta | None = None


class ErrorResponse(BaseModel):
    """Failure envelope returned by all error handlers."""

    success: Literal[False] = False
    message: str
    errors: dict[str, list[str]] | None = None

