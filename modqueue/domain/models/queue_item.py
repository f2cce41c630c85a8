"""Queue item domain model.

A queue item is the normalized, kind-tagged representation of a
moderatable entity. Items are ephemeral: they are recomputed on every
normalization pass and never stored.

Identity:
    queue_id = "<kind>-<item_id>", unique within one queue snapshot.
    Item ids may themselves contain dashes (UUIDs), so parsing splits on
    the first dash only.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class QueueKind(Enum):
    """Kind discriminant of a queue item.

    Values:
        REPORT: A user report awaiting triage
        LISTING: A marketplace listing flagged, high-risk or suspended
        USER: A user account that is high-risk or suspended
    """

    REPORT = "report"
    LISTING = "listing"
    USER = "user"


def make_queue_id(kind: QueueKind, item_id: str) -> str:
    """Derive the queue id for an entity.

    Args:
        kind: The entity kind.
        item_id: Identity of the underlying entity.

    Returns:
        The deterministic queue id ("<kind>-<item_id>").
    """
    return f"{kind.value}-{item_id}"


def parse_queue_id(queue_id: str) -> tuple[QueueKind, str]:
    """Split a queue id back into kind and item id.

    Args:
        queue_id: A queue id produced by make_queue_id.

    Returns:
        Tuple of (kind, item_id).

    Raises:
        ValueError: If the queue id is malformed or the kind is unknown.
    """
    kind_value, sep, item_id = queue_id.partition("-")
    if not sep or not item_id:
        raise ValueError(f"Malformed queue id: {queue_id!r}")
    return QueueKind(kind_value), item_id


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a record timestamp into an aware UTC datetime.

    Accepts datetimes and ISO 8601 strings (including a trailing "Z").
    Naive values are assumed to be UTC.

    Returns:
        The parsed datetime, or None if the value is missing or invalid.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class QueueItem:
    """A normalized moderation work item.

    Attributes:
        queue_id: Deterministic identity ("<kind>-<item_id>")
        kind: Discriminant selecting the entity-specific semantics
        item_id: Identity of the underlying entity
        title: Primary display string
        subject: Secondary display string (target, merchant, email)
        status: Entity-specific lifecycle value (pending, suspended, ...)
        created_at: Timestamp used for default ordering (None if unknown)
        reason: Why the item is in the queue
        raw: Read-only view of the original source record
    """

    queue_id: str
    kind: QueueKind
    item_id: str
    title: str
    subject: str
    status: str
    created_at: datetime | None
    reason: str
    raw: Mapping[str, Any]

    @property
    def is_suspended(self) -> bool:
        """Whether the underlying entity is currently suspended."""
        return self.raw.get("status") == "suspended"

    def sort_key(self) -> tuple[bool, float, str]:
        """Ordering key: newest first, unknown timestamps last, then queue id."""
        if self.created_at is None:
            return (True, 0.0, self.queue_id)
        return (False, -self.created_at.timestamp(), self.queue_id)


__all__ = [
    "QueueItem",
    "QueueKind",
    "make_queue_id",
    "parse_queue_id",
    "parse_timestamp",
]
