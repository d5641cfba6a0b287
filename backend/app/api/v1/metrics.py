"""
Metrics API Router

Prometheus scrape endpoint for the job board counters.
"""

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST

from app.api.deps import get_metrics
from app.utils.metrics import JobBoardMetrics

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
async def get_metrics_endpoint(metrics: JobBoardMetrics = Depends(get_metrics)):
    """Application metrics in Prometheus text format."""
    return Response(content=metrics.get_metrics(), media_type=CONTENT_TYPE_LATEST)
