"""Unit tests for moderation action models."""

from __future__ import annotations

from modqueue.domain.models.moderation_action import (
    ACTION_LABELS,
    LEGAL_ACTIONS,
    ActionName,
    BulkItemResult,
    BulkMode,
    BulkResult,
    ModerationAction,
)
from modqueue.domain.models.queue_item import QueueKind


class TestModerationAction:
    """Tests for default payloads."""

    def test_user_suspension_defaults_to_seven_days(self) -> None:
        payload = ModerationAction.default_for(ActionName.SUSPEND)
        assert payload.duration_days == 7
        assert payload.notify_user is False

    def test_report_decisions_notify_the_user(self) -> None:
        assert ModerationAction.default_for(ActionName.APPROVE).notify_user is True
        assert ModerationAction.default_for(ActionName.DISMISS).notify_user is True

    def test_every_action_has_a_label(self) -> None:
        assert set(ACTION_LABELS) == set(ActionName)
        assert ACTION_LABELS[ActionName.UNSUSPEND] == "Reactivate listing"

    def test_legal_actions_cover_each_kind(self) -> None:
        assert LEGAL_ACTIONS[QueueKind.REPORT] == {ActionName.APPROVE, ActionName.DISMISS}
        assert ActionName.SUSPEND not in LEGAL_ACTIONS[QueueKind.LISTING]

    def test_reactivations(self) -> None:
        assert ActionName.UNSUSPEND.is_reactivation
        assert ActionName.VERIFY.is_reactivation
        assert not ActionName.SUSPEND.is_reactivation


class TestBulkResult:
    """Tests for BulkResult views."""

    def test_views_partition_items(self) -> None:
        result = BulkResult(
            mode=BulkMode.SUSPEND,
            items=[
                BulkItemResult(queue_id="listing-1", ok=True, action=ActionName.SUSPEND_LISTING),
                BulkItemResult(queue_id="listing-2", ok=False, error="boom"),
                BulkItemResult(queue_id="report-3", ok=False, skipped=True),
            ],
        )
        assert result.succeeded == ["listing-1"]
        assert result.failed == ["listing-2"]
        assert result.skipped == ["report-3"]

    def test_audit_labels(self) -> None:
        assert BulkMode.REACTIVATE.audit_label == "Bulk reactivate"
        assert BulkMode.SUSPEND.audit_label == "Bulk suspend"
