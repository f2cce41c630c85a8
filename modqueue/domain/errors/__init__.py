"""Domain errors for the moderation queue.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ModerationError.
"""

from modqueue.domain.errors.audit import AuditCacheError, DurableAuditStoreError
from modqueue.domain.errors.moderation import (
    QueueItemNotFoundError,
    SuspensionNotReversibleError,
    UnsupportedActionError,
)

__all__: list[str] = [
    "AuditCacheError",
    "DurableAuditStoreError",
    "QueueItemNotFoundError",
    "SuspensionNotReversibleError",
    "UnsupportedActionError",
]
