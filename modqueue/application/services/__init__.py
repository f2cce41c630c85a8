"""Application services for the moderation queue."""

from modqueue.application.services.action_dispatcher_service import ActionDispatcher
from modqueue.application.services.audit_trail_service import AuditTrailStore
from modqueue.application.services.bulk_operation_service import (
    BulkOperationCoordinator,
)
from modqueue.application.services.moderation_queue_service import (
    ModerationQueueController,
)
from modqueue.application.services.self_service_suspension_service import (
    SelfServiceSuspensionService,
)

__all__ = [
    "ActionDispatcher",
    "AuditTrailStore",
    "BulkOperationCoordinator",
    "ModerationQueueController",
    "SelfServiceSuspensionService",
]
