"""Operational metrics for the moderation queue."""

from modqueue.infrastructure.monitoring.metrics import (
    METRICS_CONTENT_TYPE,
    ModerationMetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)

__all__ = [
    "METRICS_CONTENT_TYPE",
    "ModerationMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
