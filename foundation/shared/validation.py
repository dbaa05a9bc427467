"""
Request validation gate.

Validates one section of the request (body, query or path params) against
a Pydantic schema before it reaches the handler. All violations are
collected and raised as a single ValidationError; the global error sink
turns it into a 422 envelope. On success the handler receives the
normalized value: coerced, defaulted and stripped of unknown fields.
"""

import json
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any, Literal, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from starlette.requests import Request

from foundation.shared.errors import ValidationError

ValidationTarget = Literal["body", "query", "params"]
SchemaT = TypeVar("SchemaT", bound=BaseModel)

ROOT_FIELD = "request"
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _field_path(location: Iterable[Any], strip_prefix: bool = False) -> str:
    parts = [str(part) for part in location]
    if strip_prefix and parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or ROOT_FIELD


def collect_field_errors(
    issues: Iterable[Mapping[str, Any]], strip_prefix: bool = False
) -> dict[str, list[str]]:
    """Group validation issues by dotted field path.

    Args:
        issues: Pydantic-style error dicts (``loc``, ``msg``).
        strip_prefix: Drop a leading request-location element such as
            ``body`` or ``query`` (FastAPI request validation errors).

    Returns:
        Mapping of field path to its messages, in discovery order.
    """
    errors: dict[str, list[str]] = {}
    for issue in issues:
        key = _field_path(issue.get("loc", ()), strip_prefix=strip_prefix)
        errors.setdefault(key, []).append(str(issue.get("msg", "Invalid value")))
    return errors


async def _read_target(request: Request, target: ValidationTarget) -> Any:
    if target == "query":
        return dict(request.query_params)
    if target == "params":
        return dict(request.path_params)
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise json.JSONDecodeError("Body is not valid UTF-8", "", 0) from exc
    return json.loads(text)


def validate(
    schema: type[SchemaT], target: ValidationTarget = "body"
) -> Callable[[Request], Awaitable[SchemaT]]:
    """Build a dependency validating ``target`` against ``schema``.

    Usage::

        @router.get("/items")
        def list_items(
            query: PaginationQuery = Depends(validate(PaginationQuery, "query")),
        ) -> JSONResponse:
            ...

    Raises (from the dependency):
        ValidationError: With every violation grouped by field.
        json.JSONDecodeError: When the body is not valid JSON.
    """

    async def validation_gate(request: Request) -> SchemaT:
        data = await _read_target(request, target)
        try:
            value = schema.model_validate(data)
        except SchemaValidationError as exc:
            raise ValidationError(
                "Validation failed", errors=collect_field_errors(exc.errors())
            ) from exc

        validated = getattr(request.state, "validated", None)
        if validated is None:
            validated = {}
            request.state.validated = validated
        validated[target] = value.model_dump(by_alias=True)
        return value

    validation_gate.__name__ = f"validate_{target}_{schema.__name__}"
    return validation_gate
