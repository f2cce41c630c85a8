"""Moderation API dependencies.

The controller is a process-wide singleton owned by the bootstrap layer;
tests replace it with set_moderation_controller().
"""

from modqueue.application.services.moderation_queue_service import (
    ModerationQueueController,
)
from modqueue.bootstrap.moderation import (
    get_moderation_controller as _get_moderation_controller,
)
from modqueue.infrastructure.monitoring.metrics import (
    ModerationMetricsCollector,
    get_metrics_collector,
)


async def get_moderation_controller() -> ModerationQueueController:
    """FastAPI dependency returning the started controller."""
    return await _get_moderation_controller()


def get_moderation_metrics() -> ModerationMetricsCollector:
    return get_metrics_collector()
