"""Health check and monitoring API endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from ..config import Settings
from ..core.service import IndexService
from ..models.response import HealthResponse
from .dependencies import get_app_settings, get_index_service

router = APIRouter(prefix="/api/v1", tags=["health"])

# Track application start time
app_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the index service"
)
async def health_check(
    service: IndexService = Depends(get_index_service),
    settings: Settings = Depends(get_app_settings)
) -> HealthResponse:
    """
    Perform a health check on the index service.

    Reads the index statistics, which leaves the search counters untouched.
    """
    try:
        uptime = time.time() - app_start_time

        dependencies = {"index_service": "healthy"}
        try:
            service.get_stats()
        except Exception:
            dependencies["index_service"] = "unhealthy"

        status = "healthy" if all(
            state == "healthy" for state in dependencies.values()
        ) else "unhealthy"

        return HealthResponse(
            status=status,
            version=settings.app_version,
            uptime=uptime,
            dependencies=dependencies
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Health check failed: {str(e)}"
        )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the service is ready to accept requests"
)
async def readiness_check(
    service: IndexService = Depends(get_index_service)
) -> JSONResponse:
    """Ready once the index can report its statistics."""
    try:
        stats = service.get_stats()

        return JSONResponse(
            status_code=200,
            content={
                "status": "ready",
                "timestamp": datetime.utcnow().isoformat(),
                "index_stats": stats.get("index_stats", {})
            }
        )

    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "error": str(e),
                "timestamp": datetime.utcnow().isoformat()
            }
        )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    """Simple liveness probe."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": datetime.utcnow().isoformat(),
            "uptime": time.time() - app_start_time
        }
    )


@router.get(
    "/status",
    summary="Service status",
    description="Get detailed status information about the service"
)
async def service_status(
    service: IndexService = Depends(get_index_service),
    settings: Settings = Depends(get_app_settings)
) -> JSONResponse:
    """
    Get detailed status information about the service.

    Includes configuration and index statistics.
    """
    try:
        stats = service.get_stats()

        config_info = {
            "default_max_distance": settings.default_max_distance,
            "max_word_length": settings.max_word_length,
            "max_batch_size": settings.max_batch_size,
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
                    "start_time": datetime.fromtimestamp(app_start_time).isoformat()
                },
                "configuration": config_info,
                "statistics": stats,
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get service status: {str(e)}"
        )
