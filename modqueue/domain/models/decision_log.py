"""Decision log domain model.

Every successfully applied moderation action produces exactly one
DecisionLogEntry. Entries are created once and never mutated or deleted.

Persistence modes (session-scoped):
    UNKNOWN -> DURABLE   (remote store answered the startup probe)
    UNKNOWN -> DEGRADED  (probe failed, local cache used)
    DURABLE -> DEGRADED  (first remote write failure)

DEGRADED is absorbing for the life of the session.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from modqueue.domain.models.queue_item import parse_timestamp


class PersistenceMode(Enum):
    """Which storage tier currently holds the audit trail."""

    UNKNOWN = "unknown"
    DURABLE = "durable"
    DEGRADED = "degraded"

    def can_transition_to(self, target: PersistenceMode) -> bool:
        """Check whether a mode transition is legal.

        Args:
            target: The mode to move to.

        Returns:
            True if the transition keeps the mode monotonic.
        """
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[PersistenceMode, frozenset[PersistenceMode]] = {
    PersistenceMode.UNKNOWN: frozenset(
        {PersistenceMode.DURABLE, PersistenceMode.DEGRADED}
    ),
    PersistenceMode.DURABLE: frozenset({PersistenceMode.DEGRADED}),
    PersistenceMode.DEGRADED: frozenset(),
}


@dataclass(frozen=True)
class DecisionLogEntry:
    """An audit record of one applied moderation decision.

    Attributes:
        id: Unique entry identifier
        queue_id: Queue id of the item acted upon
        action: Human-readable action label ("Suspend listing", ...)
        note: Free-text note
        created_at: When the decision was recorded (UTC)
    """

    id: str
    queue_id: str
    action: str
    note: str
    created_at: datetime

    def to_cache_dict(self) -> dict[str, str]:
        """Serialize to the local cache format (historical camelCase keys)."""
        return {
            "id": self.id,
            "queueId": self.queue_id,
            "action": self.action,
            "note": self.note,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_cache_dict(cls, data: Mapping[str, Any]) -> DecisionLogEntry | None:
        """Parse one local cache element.

        Returns:
            The entry, or None if the element is malformed.
        """
        created_at = parse_timestamp(data.get("createdAt"))
        entry_id = data.get("id")
        queue_id = data.get("queueId")
        action = data.get("action")
        if not (entry_id and queue_id and action) or created_at is None:
            return None
        return cls(
            id=str(entry_id),
            queue_id=str(queue_id),
            action=str(action),
            note=str(data.get("note") or ""),
            created_at=created_at,
        )

    @classmethod
    def from_durable_row(
        cls, row: Mapping[str, Any], index: int
    ) -> DecisionLogEntry | None:
        """Map a durable store row to an entry.

        Remote rows have no entry id of their own; one is derived from the
        queue id, the timestamp text and the row position.
        """
        queue_id = row.get("queue_id")
        raw_created = row.get("created_at")
        created_at = parse_timestamp(raw_created)
        if not queue_id or not row.get("action") or created_at is None:
            return None
        return cls(
            id=f"{queue_id}-{raw_created}-{index}",
            queue_id=str(queue_id),
            action=str(row["action"]),
            note=str(row.get("note") or ""),
            created_at=created_at,
        )


__all__ = ["DecisionLogEntry", "PersistenceMode"]
