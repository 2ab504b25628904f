"""
Health check router for liveness and readiness probes.
"""
import asyncio

from fastapi import APIRouter, Depends, status

from app.config import Settings, get_settings
from app.database.connections import ConnectionProvider, get_connection_provider

router = APIRouter(tags=["Health"])


async def ping_database(provider: ConnectionProvider) -> None:
    handle = await provider.acquire()
    await handle.client.admin.command("ping")


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the API is running.
    """
    return {"status": "healthy"}


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness check with dependencies",
)
async def readiness_check(
    settings: Settings = Depends(get_settings),
    provider: ConnectionProvider = Depends(get_connection_provider),
):
    """
    Readiness check that verifies the database connection.
    Returns 200 with status "degraded" if MongoDB is not reachable
    within DB_TIMEOUT_SECONDS.
    """
    checks = {
        "api": "healthy",
        "mongodb": "unknown",
    }

    try:
        await asyncio.wait_for(
            ping_database(provider), settings.db_timeout_seconds
        )
        checks["mongodb"] = "healthy"
    except Exception as e:
        checks["mongodb"] = f"unhealthy: {type(e).__name__}"

    all_healthy = all(v == "healthy" for v in checks.values())

    return {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }
