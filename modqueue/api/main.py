"""FastAPI application entry point for the moderation queue."""

from fastapi import FastAPI

from modqueue import __version__
from modqueue.api.middleware.logging_middleware import LoggingMiddleware
from modqueue.api.routes.health import router as health_router
from modqueue.api.routes.metrics import router as metrics_router
from modqueue.api.routes.moderation import router as moderation_router
from modqueue.config import ModerationConfig
from modqueue.infrastructure.observability import configure_structlog

configure_structlog(ModerationConfig.from_environment().environment)

app = FastAPI(
    title="Moderation Queue API",
    description="Unified moderation queue for reports, listings and user accounts",
    version=__version__,
)

app.add_middleware(LoggingMiddleware)

app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(moderation_router)
