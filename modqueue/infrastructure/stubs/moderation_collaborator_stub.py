"""In-memory moderation collaborators.

One stub per entity kind, implementing ModerationCollaboratorProtocol over
a dict of source records. Mutations land in the source store immediately,
but records() keeps serving the last snapshot until refresh() is awaited,
the way a remote-backed collaborator behaves.

Test switches:
- fail_ids: entity ids whose apply_action returns False
- raise_ids: entity ids whose apply_action raises
- fail_refresh: refresh() raises
- calls / refresh_count: recorded interactions
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from modqueue.domain.models.moderation_action import (
    DEFAULT_USER_SUSPENSION_DAYS,
    ActionName,
    ModerationAction,
)
from modqueue.domain.models.suspension import SUSPENDED_STATUS, SuspensionType
from modqueue.domain.services.risk_classification import (
    assess_listing,
    classify_user,
    report_priority,
)

SUSPENSION_FIELDS = ("suspension_type", "suspended_by", "suspension_reason", "suspended_at")


class CollaboratorStubError(RuntimeError):
    """Raised by stubs configured to fail loudly."""


class InMemoryCollaboratorStub:
    """Shared storage and switches for the per-kind stubs."""

    def __init__(self, records: Iterable[Mapping[str, Any]] = ()) -> None:
        self._store: dict[str, dict[str, Any]] = {}
        self._snapshot: list[dict[str, Any]] = []
        self.fail_ids: set[str] = set()
        self.raise_ids: set[str] = set()
        self.fail_refresh = False
        self.calls: list[tuple[str, ModerationAction]] = []
        self.refresh_count = 0
        for record in records:
            self.add(record)
        self._rebuild()

    def add(self, record: Mapping[str, Any]) -> None:
        """Store a record; visible after the next refresh()."""
        self._store[str(record["id"])] = dict(record)

    def get(self, entity_id: str) -> dict[str, Any] | None:
        record = self._store.get(entity_id)
        return copy.deepcopy(record) if record is not None else None

    def records(self) -> list[dict[str, Any]]:
        return list(self._snapshot)

    async def refresh(self) -> None:
        self.refresh_count += 1
        if self.fail_refresh:
            raise CollaboratorStubError("refresh failed")
        self._rebuild()

    async def apply_action(self, entity_id: str, action: ModerationAction) -> bool:
        self.calls.append((entity_id, action))
        if entity_id in self.raise_ids:
            raise CollaboratorStubError(f"mutation of {entity_id} failed")
        record = self._store.get(entity_id)
        if record is None or entity_id in self.fail_ids:
            return False
        updated = self._mutate(dict(record), action)
        if updated is None:
            return False
        self._store[entity_id] = updated
        return True

    def _rebuild(self) -> None:
        self._snapshot = [self._classify(copy.deepcopy(r)) for r in self._store.values()]

    def _classify(self, record: dict[str, Any]) -> dict[str, Any]:
        return record

    def _mutate(self, record: dict[str, Any], action: ModerationAction) -> dict[str, Any] | None:
        raise NotImplementedError


class ReportCollaboratorStub(InMemoryCollaboratorStub):
    """Reports: approve resolves, dismiss dismisses."""

    def _classify(self, record: dict[str, Any]) -> dict[str, Any]:
        record["priority"] = report_priority(record.get("reason"))
        return record

    def _mutate(self, record: dict[str, Any], action: ModerationAction) -> dict[str, Any] | None:
        if action.type is ActionName.APPROVE:
            record["status"] = "resolved"
        elif action.type is ActionName.DISMISS:
            record["status"] = "dismissed"
        else:
            return None
        record["resolution"] = action.reason
        record["admin_notes"] = action.notes
        record["notify_user"] = action.notify_user
        record["resolved_at"] = datetime.now(timezone.utc).isoformat()
        return record


class ListingCollaboratorStub(InMemoryCollaboratorStub):
    """Listings: administrator suspend/unsuspend plus owner pause/resume."""

    def __init__(
        self,
        records: Iterable[Mapping[str, Any]] = (),
        *,
        actor_id: str = "admin",
    ) -> None:
        self.actor_id = actor_id
        super().__init__(records)

    def _classify(self, record: dict[str, Any]) -> dict[str, Any]:
        assessment = assess_listing(
            record,
            reports_count=int(record.get("reports_count") or 0),
            favorites_count=int(record.get("favorites_count") or 0),
            owner_suspended=bool(record.get("owner_suspended")),
        )
        record.update(assessment.as_fields())
        return record

    def _mutate(self, record: dict[str, Any], action: ModerationAction) -> dict[str, Any] | None:
        if action.type is ActionName.SUSPEND_LISTING:
            return self._suspend(
                record, SuspensionType.ADMIN, action.reason, suspended_by=self.actor_id
            )
        if action.type is ActionName.UNSUSPEND:
            return self._activate(record)
        return None

    async def set_paused(
        self, listing_id: str, paused: bool, reason: str | None = None
    ) -> bool:
        """Owner-initiated pause or resume (ListingOwnerProtocol)."""
        record = self._store.get(listing_id)
        if record is None or listing_id in self.fail_ids:
            return False
        if paused:
            updated = self._suspend(dict(record), SuspensionType.USER, reason)
        else:
            updated = self._activate(dict(record))
        self._store[listing_id] = updated
        self._rebuild()
        return True

    @staticmethod
    def _suspend(
        record: dict[str, Any],
        suspension_type: SuspensionType,
        reason: str | None,
        *,
        suspended_by: str | None = None,
    ) -> dict[str, Any]:
        record.update(
            status=SUSPENDED_STATUS,
            suspension_type=suspension_type.value,
            suspended_by=suspended_by,
            suspension_reason=reason,
            suspended_at=datetime.now(timezone.utc).isoformat(),
        )
        return record

    @staticmethod
    def _activate(record: dict[str, Any]) -> dict[str, Any]:
        record["status"] = "active"
        for key in SUSPENSION_FIELDS:
            record[key] = None
        return record


class UserCollaboratorStub(InMemoryCollaboratorStub):
    """Users: suspend for a number of days, verify lifts the suspension."""

    def __init__(
        self,
        records: Iterable[Mapping[str, Any]] = (),
        *,
        actor_id: str = "admin",
    ) -> None:
        self.actor_id = actor_id
        super().__init__(records)

    def _classify(self, record: dict[str, Any]) -> dict[str, Any]:
        trust_score = record.get("trust_score")
        record["risk_level"] = classify_user(
            int(record.get("reports_received") or 0),
            float(trust_score) if trust_score is not None else 100.0,
        )
        return record

    def _mutate(self, record: dict[str, Any], action: ModerationAction) -> dict[str, Any] | None:
        now = datetime.now(timezone.utc)
        if action.type is ActionName.SUSPEND:
            days = action.duration_days or DEFAULT_USER_SUSPENSION_DAYS
            record.update(
                status=SUSPENDED_STATUS,
                suspension_type=SuspensionType.ADMIN.value,
                suspended_by=self.actor_id,
                suspension_reason=action.reason,
                suspended_at=now.isoformat(),
                suspended_until=(now + timedelta(days=days)).isoformat(),
            )
            return record
        if action.type is ActionName.VERIFY:
            record["status"] = "active"
            record["verified_at"] = now.isoformat()
            for key in (*SUSPENSION_FIELDS, "suspended_until"):
                record[key] = None
            return record
        return None


__all__ = [
    "CollaboratorStubError",
    "InMemoryCollaboratorStub",
    "ListingCollaboratorStub",
    "ReportCollaboratorStub",
    "UserCollaboratorStub",
]
