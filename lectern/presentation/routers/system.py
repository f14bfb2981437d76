"""System endpoints (health)."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from lectern.core.container import get_database

router = APIRouter(tags=["System"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check for load balancers."""
    return {"status": "healthy"}


@router.get("/health/ready", response_model=None)
async def readiness() -> dict[str, str] | JSONResponse:
    """Readiness check: the durable store answers a trivial query."""
    if await get_database().check_connection():
        return {"status": "ready", "database": "ok"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unavailable", "database": "unreachable"},
    )
