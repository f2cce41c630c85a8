"""Domain models for the moderation queue."""

from modqueue.domain.models.decision_log import DecisionLogEntry, PersistenceMode
from modqueue.domain.models.moderation_action import (
    ACTION_LABELS,
    LEGAL_ACTIONS,
    ActionName,
    BulkItemResult,
    BulkMode,
    BulkResult,
    ModerationAction,
)
from modqueue.domain.models.queue_item import (
    QueueItem,
    QueueKind,
    make_queue_id,
    parse_queue_id,
)
from modqueue.domain.models.queue_state import ModerationQueueState
from modqueue.domain.models.suspension import ActorRole, SuspensionState, SuspensionType

__all__ = [
    "ACTION_LABELS",
    "LEGAL_ACTIONS",
    "ActionName",
    "ActorRole",
    "BulkItemResult",
    "BulkMode",
    "BulkResult",
    "DecisionLogEntry",
    "ModerationAction",
    "ModerationQueueState",
    "PersistenceMode",
    "QueueItem",
    "QueueKind",
    "SuspensionState",
    "SuspensionType",
    "make_queue_id",
    "parse_queue_id",
]
