"""Moderation queue API request/response models.

Pydantic models for the unified moderation queue endpoints consumed by the
admin UI: queue listing, per-item actions, selection, bulk runs, decision
history and the persistence banner.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, Field, PlainSerializer

from modqueue.domain.models.decision_log import DecisionLogEntry
from modqueue.domain.models.moderation_action import BulkMode, BulkResult
from modqueue.domain.models.queue_item import QueueItem
from modqueue.domain.services.suspension_authorization import suspension_notice

DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class SuspensionNoticeResponse(BaseModel):
    """Explanation rendered next to a suspended item."""

    message: str
    can_reactivate: bool
    is_admin_action: bool
    contact_support: bool


class QueueItemResponse(BaseModel):
    """One row of the unified queue.

    Attributes:
        queue_id: "<kind>-<item_id>" identifier.
        kind: report, listing or user.
        selected: Whether the item is in the bulk selection.
        busy: Whether an action is in flight for the item.
        suspension: Notice for suspended items, None otherwise.
        raw: Source record, for the detail panel.
    """

    queue_id: str
    kind: str
    item_id: str
    title: str
    subject: str
    status: str
    created_at: DateTimeWithZ | None
    reason: str
    selected: bool = False
    busy: bool = False
    suspension: SuspensionNoticeResponse | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_item(cls, item: QueueItem, *, selected: bool, busy: bool) -> QueueItemResponse:
        suspension = None
        if item.is_suspended:
            notice = suspension_notice(item.raw)
            suspension = SuspensionNoticeResponse(
                message=notice.message,
                can_reactivate=notice.can_reactivate,
                is_admin_action=notice.is_admin_action,
                contact_support=notice.contact_support,
            )
        return cls(
            queue_id=item.queue_id,
            kind=item.kind.value,
            item_id=item.item_id,
            title=item.title,
            subject=item.subject,
            status=item.status,
            created_at=item.created_at,
            reason=item.reason,
            selected=selected,
            busy=busy,
            suspension=suspension,
            raw=dict(item.raw),
        )


class QueueCountsResponse(BaseModel):
    total: int
    report: int
    listing: int
    user: int


class QueueResponse(BaseModel):
    """Filtered queue plus the session state the UI renders around it."""

    items: list[QueueItemResponse]
    counts: QueueCountsResponse
    selection: list[str]
    busy: list[str]
    persistence_mode: str
    degraded: bool


class ActionRequest(BaseModel):
    """Single-item moderation action.

    Omitted fields fall back to the per-action defaults (reason, 7-day
    user suspension, user notification on report decisions).
    """

    action: str = Field(..., description="approve, dismiss, suspend_listing, unsuspend, suspend or verify")
    reason: str | None = None
    duration_days: int | None = Field(default=None, ge=1)
    notify_user: bool | None = None
    notes: str | None = None


class ActionResponse(BaseModel):
    queue_id: str
    action: str
    ok: bool


class SelectionToggleRequest(BaseModel):
    queue_id: str


class SelectionFilterRequest(BaseModel):
    """Filter whose visible items are selected (or deselected) at once."""

    search: str = ""
    kind: str = "all"
    status: str = "all"


class SelectionResponse(BaseModel):
    selection: list[str]
    selected: bool | None = None


class BulkRequest(BaseModel):
    mode: BulkMode


class BulkItemResponse(BaseModel):
    queue_id: str
    ok: bool
    action: str | None = None
    skipped: bool = False
    error: str | None = None


class BulkResponse(BaseModel):
    """Per-item bulk outcomes, in queue order."""

    mode: str
    items: list[BulkItemResponse]
    succeeded: int
    failed: int
    skipped: int

    @classmethod
    def from_result(cls, result: BulkResult) -> BulkResponse:
        return cls(
            mode=result.mode.value,
            items=[
                BulkItemResponse(
                    queue_id=r.queue_id,
                    ok=r.ok,
                    action=r.action.value if r.action else None,
                    skipped=r.skipped,
                    error=r.error,
                )
                for r in result.items
            ],
            succeeded=len(result.succeeded),
            failed=len(result.failed),
            skipped=len(result.skipped),
        )


class DecisionLogEntryResponse(BaseModel):
    id: str
    queue_id: str
    action: str
    note: str
    created_at: DateTimeWithZ

    @classmethod
    def from_entry(cls, entry: DecisionLogEntry) -> DecisionLogEntryResponse:
        return cls(
            id=entry.id,
            queue_id=entry.queue_id,
            action=entry.action,
            note=entry.note,
            created_at=entry.created_at,
        )


class HistoryResponse(BaseModel):
    queue_id: str
    entries: list[DecisionLogEntryResponse]


class PersistenceResponse(BaseModel):
    """Drives the degraded-persistence banner."""

    persistence_mode: str
    degraded: bool


class ModerationErrorResponse(BaseModel):
    """RFC 7807 problem details."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
