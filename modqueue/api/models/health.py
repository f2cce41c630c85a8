"""Health check response models."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Health status string (e.g., "healthy").
        persistence_mode: Current audit persistence tier.
    """

    status: str
    persistence_mode: str | None = None
