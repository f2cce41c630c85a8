"""Bootstrap wiring for the moderation queue controller.

Builds the audit trail store from ModerationConfig (HTTP durable backend
when a URL is configured, JSON file cache always) and the controller over
the collaborators. Without injected collaborators the in-memory stubs are
used, which is what development and the API tests run against.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

from structlog import get_logger

from modqueue.application.ports.audit_backend import (
    DurableAuditBackendProtocol,
    LocalAuditCacheProtocol,
)
from modqueue.application.ports.moderation_collaborator import (
    ModerationCollaboratorProtocol,
)
from modqueue.application.services.audit_trail_service import AuditTrailStore
from modqueue.application.services.moderation_queue_service import (
    ModerationQueueController,
)
from modqueue.config import ModerationConfig
from modqueue.domain.models.queue_item import QueueKind
from modqueue.infrastructure.adapters.persistence import (
    HttpDurableAuditBackend,
    JsonFileAuditCache,
)
from modqueue.infrastructure.monitoring.metrics import (
    ModerationMetricsCollector,
    get_metrics_collector,
)
from modqueue.infrastructure.stubs import (
    ListingCollaboratorStub,
    ReportCollaboratorStub,
    UserCollaboratorStub,
)

logger = get_logger(__name__)

_controller: ModerationQueueController | None = None
_controller_lock = asyncio.Lock()


def build_audit_store(
    config: ModerationConfig,
    *,
    durable: DurableAuditBackendProtocol | None = None,
    cache: LocalAuditCacheProtocol | None = None,
    metrics: ModerationMetricsCollector | None = None,
) -> AuditTrailStore:
    """Create the audit trail store for a configuration.

    Explicit backends win over the configured ones.
    """
    if durable is None and config.durable_enabled:
        durable = HttpDurableAuditBackend(
            config.durable_url,
            config.durable_api_key,
            config.durable_table,
            timeout_seconds=config.durable_timeout_seconds,
        )
    return AuditTrailStore(
        cache if cache is not None else JsonFileAuditCache(config.cache_dir),
        durable,
        cache_key=config.cache_key,
        log_cap=config.log_cap,
        history_limit=config.history_limit,
        actor_id=config.actor_id,
        metrics=metrics,
    )


def build_moderation_controller(
    config: ModerationConfig | None = None,
    *,
    collaborators: Mapping[QueueKind, ModerationCollaboratorProtocol] | None = None,
    audit_store: AuditTrailStore | None = None,
    metrics: ModerationMetricsCollector | None = None,
) -> ModerationQueueController:
    """Create a controller; call ``await controller.start()`` before use."""
    config = config or ModerationConfig.from_environment()
    metrics = metrics or get_metrics_collector()
    if collaborators is None:
        collaborators = _stub_collaborators(config)
    store = audit_store or build_audit_store(config, metrics=metrics)
    logger.info(
        "Moderation controller wired",
        durable=config.durable_enabled,
        kinds=sorted(kind.value for kind in collaborators),
    )
    return ModerationQueueController(collaborators, store, metrics=metrics)


def _stub_collaborators(
    config: ModerationConfig,
) -> dict[QueueKind, ModerationCollaboratorProtocol]:
    actor = config.actor_id or "admin"
    return {
        QueueKind.REPORT: ReportCollaboratorStub(),
        QueueKind.LISTING: ListingCollaboratorStub(actor_id=actor),
        QueueKind.USER: UserCollaboratorStub(actor_id=actor),
    }


async def get_moderation_controller() -> ModerationQueueController:
    """Get the started controller singleton.

    Concurrent first callers share one build and one startup probe.
    """
    global _controller
    if _controller is not None:
        return _controller
    async with _controller_lock:
        if _controller is None:
            controller = build_moderation_controller()
            await controller.start()
            _controller = controller
    return _controller


def set_moderation_controller(controller: ModerationQueueController | None) -> None:
    """Set a custom controller (testing/override)."""
    global _controller
    _controller = controller


def reset_moderation() -> None:
    """Reset singletons (testing cleanup)."""
    global _controller, _controller_lock
    _controller = None
    _controller_lock = asyncio.Lock()
