"""Metrics API endpoints."""

import psutil
from fastapi import APIRouter, Depends, HTTPException

from ..core.service import IndexService
from ..models.response import MetricsResponse
from .dependencies import get_index_service

router = APIRouter(prefix="/api/v1", tags=["metrics"])


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get operation counters, index size and process memory usage"
)
async def get_metrics(
    service: IndexService = Depends(get_index_service)
) -> MetricsResponse:
    """Collect service counters and process memory usage."""
    try:
        stats = service.get_stats()
        index_stats = stats.get("index_stats", {})

        # Resident set size of this process
        memory_usage_mb = psutil.Process().memory_info().rss / (1024 * 1024)

        return MetricsResponse(
            total_searches=stats.get("total_searches", 0),
            total_inserts=stats.get("total_inserts", 0),
            total_deletes=stats.get("total_deletes", 0),
            average_search_time_ms=stats.get("average_search_time_ms", 0.0),
            word_count=index_stats.get("word_count", 0),
            node_count=index_stats.get("node_count", 0),
            memory_usage_mb=memory_usage_mb
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get metrics: {str(e)}"
        )
