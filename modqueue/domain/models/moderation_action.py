"""Moderation actions, bulk modes and bulk outcomes.

Each queue kind accepts a closed set of actions:

    report:  approve | dismiss
    listing: suspend_listing | unsuspend
    user:    suspend | verify
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from modqueue.domain.models.queue_item import QueueKind

DEFAULT_USER_SUSPENSION_DAYS = 7


class ActionName(Enum):
    """Collaborator mutation names."""

    APPROVE = "approve"
    DISMISS = "dismiss"
    SUSPEND_LISTING = "suspend_listing"
    UNSUSPEND = "unsuspend"
    SUSPEND = "suspend"
    VERIFY = "verify"

    @property
    def is_reactivation(self) -> bool:
        """Whether this action lifts a suspension."""
        return self in REACTIVATION_ACTIONS


REACTIVATION_ACTIONS: frozenset[ActionName] = frozenset(
    {ActionName.UNSUSPEND, ActionName.VERIFY}
)

LEGAL_ACTIONS: dict[QueueKind, frozenset[ActionName]] = {
    QueueKind.REPORT: frozenset({ActionName.APPROVE, ActionName.DISMISS}),
    QueueKind.LISTING: frozenset({ActionName.SUSPEND_LISTING, ActionName.UNSUSPEND}),
    QueueKind.USER: frozenset({ActionName.SUSPEND, ActionName.VERIFY}),
}

# Audit label recorded for single-item actions
ACTION_LABELS: dict[ActionName, str] = {
    ActionName.APPROVE: "Approve report",
    ActionName.DISMISS: "Dismiss report",
    ActionName.SUSPEND_LISTING: "Suspend listing",
    ActionName.UNSUSPEND: "Reactivate listing",
    ActionName.SUSPEND: "Suspend user",
    ActionName.VERIFY: "Reactivate user",
}

DEFAULT_REASONS: dict[ActionName, str] = {
    ActionName.APPROVE: "Approved from unified moderation",
    ActionName.DISMISS: "Dismissed from unified moderation",
    ActionName.SUSPEND_LISTING: "Suspended from listing moderation",
    ActionName.UNSUSPEND: "Reactivated from listing moderation",
    ActionName.SUSPEND: "Suspended from unified moderation",
    ActionName.VERIFY: "Account reactivated from unified moderation",
}


@dataclass(frozen=True)
class ModerationAction:
    """Payload handed to a collaborator's apply_action.

    Attributes:
        type: The action to apply
        reason: Reason recorded on the entity
        duration_days: Suspension length in days (None = indefinite)
        notify_user: Whether the affected user is notified
        notes: Optional moderation notes
    """

    type: ActionName
    reason: str
    duration_days: int | None = None
    notify_user: bool = False
    notes: str | None = None

    @classmethod
    def default_for(cls, action: ActionName) -> ModerationAction:
        """Build the payload used when the operator supplies none."""
        return cls(
            type=action,
            reason=DEFAULT_REASONS[action],
            duration_days=(
                DEFAULT_USER_SUSPENSION_DAYS if action is ActionName.SUSPEND else None
            ),
            notify_user=action in (ActionName.APPROVE, ActionName.DISMISS),
        )


class BulkMode(Enum):
    """Bulk operation mode."""

    REACTIVATE = "reactivate"
    SUSPEND = "suspend"

    @property
    def audit_label(self) -> str:
        return "Bulk reactivate" if self is BulkMode.REACTIVATE else "Bulk suspend"


@dataclass(frozen=True)
class BulkItemResult:
    """Outcome of one item in a bulk run.

    Attributes:
        queue_id: The item's queue id
        ok: True only if the dispatcher applied the action
        action: The concrete action chosen (None when skipped)
        skipped: True when the mode is a no-op for this item
        error: Failure description, if any
    """

    queue_id: str
    ok: bool
    action: ActionName | None = None
    skipped: bool = False
    error: str | None = None


@dataclass(frozen=True)
class BulkResult:
    """Structured per-item outcome list of a bulk run, in selection order."""

    mode: BulkMode
    items: list[BulkItemResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[str]:
        return [r.queue_id for r in self.items if r.ok]

    @property
    def failed(self) -> list[str]:
        return [r.queue_id for r in self.items if not r.ok and not r.skipped]

    @property
    def skipped(self) -> list[str]:
        return [r.queue_id for r in self.items if r.skipped]


__all__ = [
    "ACTION_LABELS",
    "DEFAULT_REASONS",
    "DEFAULT_USER_SUSPENSION_DAYS",
    "LEGAL_ACTIONS",
    "REACTIVATION_ACTIONS",
    "ActionName",
    "BulkItemResult",
    "BulkMode",
    "BulkResult",
    "ModerationAction",
]
