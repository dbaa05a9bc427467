"""
Standardized response envelope builders.

Every endpoint answers with the same JSON shape:

- success: ``{"success": true, "message": ..., "data"?: ..., "meta"?: ...}``
- failure: ``{"success": false, "message": ..., "errors"?: {...}}``

Optional keys are left out entirely when absent, never sent as null.
"""

from collections.abc import Iterable
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def build_page_meta(page: int, limit: int, total: int) -> dict[str, int]:
    """Return pagination metadata with a derived page count.

    Raises:
        ValueError: If limit is lower than 1.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    total_pages = (total + limit - 1) // limit
    return {"page": page, "limit": limit, "total": total, "totalPages": total_pages}


def send_success(
    message: str,
    data: Any = None,
    status_code: int = 200,
    meta: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build a success envelope response."""
    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    if meta is not None:
        body["meta"] = meta
    return JSONResponse(status_code=status_code, content=body)


def send_error(
    message: str,
    status_code: int = 500,
    errors: dict[str, list[str]] | None = None,
) -> JSONResponse:
    """Build a failure envelope response."""
    body: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)


def send_paginated(
    message: str,
    items: Iterable[Any],
    *,
    page: int,
    limit: int,
    total: int,
) -> JSONResponse:
    """Build a success envelope for one page of a listing."""
    return send_success(message, list(items), 200, build_page_meta(page, limit, total))
