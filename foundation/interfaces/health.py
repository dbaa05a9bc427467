"""
Health check router.

Liveness and readiness probes. Mounted without the API prefix.
No business logic. Returns the standard success envelope.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from foundation.application.health import HealthService
from foundation.interfaces.dependencies import get_health_service
from foundation.shared.responses import send_success
from foundation.shared.schemas import ErrorResponse, SuccessResponse

HTTP_200 = 200
HTTP_503 = 503

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=SuccessResponse[dict],
    summary="Health check",
    description="Liveness probe. Always succeeds; no dependency checks.",
)
def health_check(
    service: HealthService = Depends(get_health_service),
) -> JSONResponse:
    """Return basic application health."""
    health = service.get_health_status()
    return send_success("Service is healthy", health.to_dict())


@router.get(
    "/detailed",
    response_model=SuccessResponse[dict],
    responses={503: {"model": SuccessResponse[dict]}, 429: {"model": ErrorResponse}},
    summary="Detailed health check",
    description="Readiness probe with database reachability and memory usage.",
)
def detailed_health_check(
    service: HealthService = Depends(get_health_service),
) -> JSONResponse:
    """Return health with dependency checks; 503 unless healthy."""
    health = service.get_detailed_health()
    status_code = HTTP_200 if health.status == "healthy" else HTTP_503
    return send_success(f"Service is {health.status}", health.to_dict(), status_code)
