"""Pure domain services for the moderation queue."""

from modqueue.domain.services.queue_filter import QueueFilter, filter_queue, queue_counts
from modqueue.domain.services.queue_normalizer import normalize
from modqueue.domain.services.suspension_authorization import (
    SuspensionNotice,
    can_reverse,
    explain,
    may_reactivate,
    suspension_notice,
)

__all__ = [
    "QueueFilter",
    "SuspensionNotice",
    "can_reverse",
    "explain",
    "filter_queue",
    "may_reactivate",
    "normalize",
    "queue_counts",
    "suspension_notice",
]
