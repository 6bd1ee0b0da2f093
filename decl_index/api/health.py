"""Health check and monitoring API endpoints."""

import time
from datetime import datetime, timezone

import psutil
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from ..models.response import HealthResponse
from ..config import get_settings

router = APIRouter(prefix="/api/v1", tags=["health"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine

# Track application start time
app_start_time = time.time()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the declaration index service"
)
async def health_check() -> HealthResponse:
    """
    Perform a health check on the declaration index service.

    The service is healthy once a snapshot is attached and a search over it
    completes; before that it reports unhealthy.
    """
    uptime = time.time() - app_start_time

    dependencies = {
        "snapshot": "healthy" if search_engine.is_ready else "unhealthy",
        "search_engine": "healthy",
    }

    if search_engine.is_ready:
        try:
            search_engine.search("", max_results=1)
        except Exception:
            dependencies["search_engine"] = "unhealthy"
    else:
        dependencies["search_engine"] = "degraded"

    if all(status == "healthy" for status in dependencies.values()):
        status = "healthy"
    elif any(status == "unhealthy" for status in dependencies.values()):
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        version=settings.app_version,
        uptime=uptime,
        dependencies=dependencies
    )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the service is ready to accept requests"
)
async def readiness_check() -> JSONResponse:
    """Ready once the snapshot has been loaded."""
    if not search_engine.is_ready:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "timestamp": _now()}
        )

    stats = search_engine.get_stats()
    return JSONResponse(
        status_code=200,
        content={
            "status": "ready",
            "timestamp": _now(),
            "index_stats": stats.get("index_stats", {})
        }
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": _now(),
            "uptime": time.time() - app_start_time
        }
    )


@router.get(
    "/status",
    summary="Service status",
    description="Get detailed status information about the service"
)
async def service_status() -> JSONResponse:
    """
    Get detailed status information about the service.

    Includes snapshot statistics, the effective search configuration and the
    resident memory of the process.
    """
    try:
        stats = search_engine.get_stats()
        memory_usage_mb = psutil.Process().memory_info().rss / (1024 * 1024)

        config_info = {
            "integer_key_mode": settings.integer_key_mode.value,
            "serve_docs": settings.serve_docs,
            "debug": settings.debug
        }

        return JSONResponse(
            status_code=200,
            content={
                "service": {
                    "name": settings.app_name,
                    "version": settings.app_version,
                    "status": "running",
                    "uptime": time.time() - app_start_time,
                    "start_time": datetime.fromtimestamp(app_start_time, timezone.utc).isoformat(),
                    "memory_usage_mb": round(memory_usage_mb, 2)
                },
                "configuration": config_info,
                "statistics": stats,
                "timestamp": _now()
            }
        )

    except psutil.Error as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get service status: {str(e)}"
        )
