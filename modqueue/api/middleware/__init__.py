"""HTTP middleware."""

from modqueue.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
