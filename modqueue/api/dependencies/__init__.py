"""FastAPI dependencies."""

from modqueue.api.dependencies.moderation import (
    get_moderation_controller,
    get_moderation_metrics,
)

__all__ = ["get_moderation_controller", "get_moderation_metrics"]
