"""Moderation queue configuration.

This module defines configuration for the audit trail store and the
moderation controller, with environment variable overrides.

Environment Variables:
- MODQUEUE_DURABLE_URL: Base URL of the durable audit store (empty = none)
- MODQUEUE_DURABLE_API_KEY: API key sent to the durable store
- MODQUEUE_DURABLE_TABLE: Audit table name (default: admin_moderation_events)
- MODQUEUE_DURABLE_TIMEOUT: Request timeout in seconds (default: 10.0)
- MODQUEUE_CACHE_DIR: Directory of the local fallback cache
- MODQUEUE_CACHE_KEY: Well-known local cache key
- MODQUEUE_LOG_CAP: Maximum retained decision log entries (default: 400)
- MODQUEUE_HISTORY_LIMIT: Entries shown per queue item (default: 5)
- MODQUEUE_ACTOR_ID: Identity recorded as created_by on durable rows
- ENVIRONMENT: "production" (JSON logs) or "development" (console logs)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


DEFAULT_CACHE_KEY = "fasomarket_admin_moderation_decision_logs_v1"
DEFAULT_DURABLE_TABLE = "admin_moderation_events"


@dataclass(frozen=True)
class ModerationConfig:
    """Configuration for the audit trail store and moderation controller.

    Attributes:
        durable_url: Base URL of the durable audit store. Empty disables the
            durable tier and the session starts degraded.
        durable_api_key: API key for the durable store.
        durable_table: Table holding audit rows.
        durable_timeout_seconds: HTTP timeout for durable reads/writes.
        cache_dir: Directory of the local fallback cache.
        cache_key: Well-known key of the bounded local log.
        log_cap: Maximum entries kept locally and loaded remotely.
        history_limit: Decision history entries shown per item.
        actor_id: Identity recorded as created_by on durable rows.
        environment: Logging environment.
    """

    durable_url: str = ""
    durable_api_key: str = ""
    durable_table: str = DEFAULT_DURABLE_TABLE
    durable_timeout_seconds: float = 10.0
    cache_dir: str = ".modqueue"
    cache_key: str = DEFAULT_CACHE_KEY
    log_cap: int = 400
    history_limit: int = 5
    actor_id: str | None = None
    environment: str = "development"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.log_cap < 1:
            raise ValueError(f"log_cap must be positive, got {self.log_cap}")
        if self.history_limit < 1:
            raise ValueError(
                f"history_limit must be positive, got {self.history_limit}"
            )
        if self.durable_timeout_seconds <= 0:
            raise ValueError(
                "durable_timeout_seconds must be positive, "
                f"got {self.durable_timeout_seconds}"
            )
        if not self.cache_key:
            raise ValueError("cache_key must not be empty")

    @property
    def durable_enabled(self) -> bool:
        return bool(self.durable_url)

    @classmethod
    def from_environment(cls) -> "ModerationConfig":
        """Create config from environment variables with defaults."""
        return cls(
            durable_url=os.environ.get("MODQUEUE_DURABLE_URL", "").strip(),
            durable_api_key=os.environ.get("MODQUEUE_DURABLE_API_KEY", ""),
            durable_table=os.environ.get("MODQUEUE_DURABLE_TABLE", DEFAULT_DURABLE_TABLE),
            durable_timeout_seconds=_get_float_env("MODQUEUE_DURABLE_TIMEOUT", 10.0),
            cache_dir=os.environ.get("MODQUEUE_CACHE_DIR", ".modqueue"),
            cache_key=os.environ.get("MODQUEUE_CACHE_KEY", DEFAULT_CACHE_KEY),
            log_cap=_get_int_env("MODQUEUE_LOG_CAP", 400),
            history_limit=_get_int_env("MODQUEUE_HISTORY_LIMIT", 5),
            actor_id=os.environ.get("MODQUEUE_ACTOR_ID") or None,
            environment=os.environ.get("ENVIRONMENT", "development"),
        )


__all__ = ["DEFAULT_CACHE_KEY", "DEFAULT_DURABLE_TABLE", "ModerationConfig"]
