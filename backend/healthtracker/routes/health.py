"""
HealthTracker — Health & About Routes
=======================================

What:  GET /health (liveness probe) and GET /about (aggregate status).

Status codes:
    /health  200 {"status": "Healthy", ...}    store answered SELECT 1
             503 {"status": "Unhealthy", ...}  store unreachable
    /about   always 200; unreadable aggregates come back as 0 / null
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from healthtracker.dependencies import get_status_service
from healthtracker.schemas.status import AboutInfo, HealthStatus
from healthtracker.services.status_base import StatusService

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthStatus,
    responses={503: {"description": "Data store unreachable", "model": HealthStatus}},
    summary="Service health check",
)
async def health_check(
    status_service: StatusService = Depends(get_status_service),
):
    """
    Probe the store with a trivial round-trip query.

    The body never names the database path or the driver error; details go
    to the server log.
    """
    if await status_service.is_healthy():
        return HealthStatus(status="Healthy", message="Database connection is healthy")

    unhealthy = HealthStatus(status="Unhealthy", message="Database connection failed")
    return JSONResponse(status_code=503, content=unhealthy.model_dump())


@router.get(
    "/about",
    response_model=AboutInfo,
    summary="API version and record statistics",
)
async def about(
    status_service: StatusService = Depends(get_status_service),
) -> AboutInfo:
    """Computed on every call: four store round trips, no caching."""
    return await status_service.get_about_info()
