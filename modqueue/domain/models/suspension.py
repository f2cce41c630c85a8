"""Suspension provenance model.

Listings and users carry a suspension attribute set. Three actors write
to it, each owning its own fields:

- the owning user (self-service pause/resume), tag "user"
- an administrator (moderation action), tag "admin"
- an automated system process, tag "system"

Records written before provenance tagging existed carry no
suspension_type at all; the resolver treats that absence as "user".
Any other unrecognised tag reads as UNKNOWN and is never owner-reversible.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from modqueue.domain.models.queue_item import parse_timestamp

SUSPENDED_STATUS = "suspended"


class SuspensionType(Enum):
    """Who imposed a suspension.

    Values:
        USER: Owner-initiated pause, reversible by the owner
        ADMIN: Imposed by an administrator
        SYSTEM: Imposed by an automated process
        NONE: Explicitly no suspension provenance
        UNKNOWN: Tag present on the record but not recognised
    """

    USER = "user"
    ADMIN = "admin"
    SYSTEM = "system"
    NONE = "none"
    UNKNOWN = "unknown"


class ActorRole(Enum):
    """Role of the actor attempting a lifecycle transition."""

    OWNER = "owner"
    ADMINISTRATOR = "administrator"


def _read(entity: Any, name: str) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(name)
    return getattr(entity, name, None)


@dataclass(frozen=True)
class SuspensionState:
    """Suspension attributes of a listing or user.

    Attributes:
        status: Lifecycle status (active, suspended, ...)
        suspension_type: Provenance tag, None when absent on the record
        suspended_by: Identity of the suspending actor
        suspension_reason: Free-text reason
        suspended_until: End of a timed suspension (None = indefinite)
    """

    status: str
    suspension_type: SuspensionType | None = None
    suspended_by: str | None = None
    suspension_reason: str | None = None
    suspended_until: datetime | None = None

    @property
    def is_suspended(self) -> bool:
        return self.status == SUSPENDED_STATUS

    @classmethod
    def from_record(cls, entity: Any) -> SuspensionState:
        """Build a SuspensionState from a record mapping or object.

        An empty or missing suspension_type reads as None. Any other
        unrecognised value reads as SuspensionType.UNKNOWN.
        """
        if isinstance(entity, SuspensionState):
            return entity
        raw_type = _read(entity, "suspension_type")
        suspension_type: SuspensionType | None
        if isinstance(raw_type, SuspensionType):
            suspension_type = raw_type
        else:
            try:
                suspension_type = SuspensionType(raw_type) if raw_type else None
            except ValueError:
                suspension_type = SuspensionType.UNKNOWN
        suspended_by = _read(entity, "suspended_by")
        return cls(
            status=str(_read(entity, "status") or ""),
            suspension_type=suspension_type,
            suspended_by=str(suspended_by) if suspended_by else None,
            suspension_reason=_read(entity, "suspension_reason") or None,
            suspended_until=parse_timestamp(_read(entity, "suspended_until")),
        )


__all__ = [
    "SUSPENDED_STATUS",
    "ActorRole",
    "SuspensionState",
    "SuspensionType",
]
