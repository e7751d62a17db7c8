"""Prometheus scrape endpoint."""

from fastapi import APIRouter, Response

from ethwatch.api.dependencies import MetricsDep

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
async def metrics_endpoint(metrics: MetricsDep) -> Response:
    """Expose wallet balance metrics in the Prometheus text format."""
    return Response(content=metrics.render(), media_type=metrics.content_type)
