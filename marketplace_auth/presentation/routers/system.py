"""System router for non-versioned application endpoints.

Root and health checks. Lightweight and side-effect free.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from marketplace_auth.core.config import settings
from marketplace_auth.core.container import get_database

system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - basic status check."""
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health() -> JSONResponse:
    """Health check for monitoring and load balancers.

    Returns:
        200 when the database answers, 503 otherwise.
    """
    database_ok = await get_database().check_connection()
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if database_ok else "unhealthy",
            "database": "ok" if database_ok else "unavailable",
        },
    )
