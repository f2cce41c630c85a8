"""Metrics endpoint for Prometheus scraping."""

from fastapi import APIRouter, Depends, Response

from modqueue.api.dependencies.moderation import get_moderation_metrics
from modqueue.infrastructure.monitoring.metrics import (
    METRICS_CONTENT_TYPE,
    ModerationMetricsCollector,
)

router = APIRouter(prefix="/v1", tags=["metrics"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    response_class=Response,
    responses={
        200: {
            "description": "Metrics in Prometheus format",
            "content": {"text/plain": {}},
        }
    },
)
async def get_metrics(
    metrics: ModerationMetricsCollector = Depends(get_moderation_metrics),
) -> Response:
    """Moderation action, bulk run and audit write metrics."""
    return Response(content=metrics.generate_latest(), media_type=METRICS_CONTENT_TYPE)
