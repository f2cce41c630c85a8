"""Health check endpoint."""

from fastapi import APIRouter, Depends

from modqueue.api.dependencies.moderation import get_moderation_controller
from modqueue.api.models.health import HealthResponse
from modqueue.application.services.moderation_queue_service import (
    ModerationQueueController,
)

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    controller: ModerationQueueController = Depends(get_moderation_controller),
) -> HealthResponse:
    """Return health status.

    A degraded audit tier does not make the service unhealthy; it is
    reported so operators can see it.
    """
    return HealthResponse(
        status="healthy",
        persistence_mode=controller.persistence_mode.value,
    )
