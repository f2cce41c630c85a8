"""Bulk operation coordinator.

Applies one bulk mode to a set of queue items, sequentially and without
rollback. Each item's concrete action depends on its kind, the mode and
the entity's current status:

    kind     reactivate                      suspend
    report   approve                         (no-op)
    listing  unsuspend, if suspended         suspend_listing, if not suspended
    user     verify, if suspended            suspend (7 days), if not suspended

Audit entries are written only by the dispatcher on per-item success, so
the decision log records exactly which items changed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from structlog import get_logger

from modqueue.domain.exceptions import ModerationError
from modqueue.domain.models.moderation_action import (
    DEFAULT_USER_SUSPENSION_DAYS,
    ActionName,
    BulkItemResult,
    BulkMode,
    BulkResult,
    ModerationAction,
)
from modqueue.domain.models.queue_item import QueueItem, QueueKind

if TYPE_CHECKING:
    from modqueue.application.ports.moderation_collaborator import (
        ModerationCollaboratorProtocol,
    )
    from modqueue.application.services.action_dispatcher_service import ActionDispatcher
    from modqueue.infrastructure.monitoring.metrics import ModerationMetricsCollector

logger = get_logger(__name__)

BULK_REASONS: dict[ActionName, str] = {
    ActionName.APPROVE: "Bulk approval from unified moderation",
    ActionName.UNSUSPEND: "Bulk reactivation from listing moderation",
    ActionName.SUSPEND_LISTING: "Bulk suspension from listing moderation",
    ActionName.VERIFY: "Bulk reactivation from unified moderation",
    ActionName.SUSPEND: "Bulk suspension from unified moderation",
}


def resolve_bulk_action(item: QueueItem, mode: BulkMode) -> ActionName | None:
    """Pick the concrete action for an item, or None when it is a no-op."""
    if item.kind is QueueKind.REPORT:
        return ActionName.APPROVE if mode is BulkMode.REACTIVATE else None
    if mode is BulkMode.REACTIVATE:
        if not item.is_suspended:
            return None
        return ActionName.UNSUSPEND if item.kind is QueueKind.LISTING else ActionName.VERIFY
    if item.is_suspended:
        return None
    return ActionName.SUSPEND_LISTING if item.kind is QueueKind.LISTING else ActionName.SUSPEND


def bulk_payload(action: ActionName) -> ModerationAction:
    return ModerationAction(
        type=action,
        reason=BULK_REASONS[action],
        duration_days=(
            DEFAULT_USER_SUSPENSION_DAYS if action is ActionName.SUSPEND else None
        ),
        notify_user=action is ActionName.APPROVE,
    )


class BulkOperationCoordinator:
    """Sequential, non-transactional batch executor over the dispatcher."""

    def __init__(
        self,
        dispatcher: ActionDispatcher,
        collaborators: Mapping[QueueKind, ModerationCollaboratorProtocol],
        *,
        metrics: ModerationMetricsCollector | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._collaborators = dict(collaborators)
        self._metrics = metrics

    async def run_bulk(self, items: Iterable[QueueItem], mode: BulkMode) -> BulkResult:
        """Apply a bulk mode to items, one at a time.

        A failing item never aborts the run. After the loop, each kind that
        had at least one dispatch attempt is refreshed exactly once.

        Args:
            items: Selected queue items, in the order to process them.
            mode: Bulk mode.

        Returns:
            BulkResult with one entry per item, in input order.
        """
        log = logger.bind(mode=mode.value)
        results: list[BulkItemResult] = []
        attempted: list[QueueKind] = []

        for item in items:
            action = resolve_bulk_action(item, mode)
            if action is None:
                results.append(BulkItemResult(queue_id=item.queue_id, ok=False, skipped=True))
                continue

            if item.kind not in attempted:
                attempted.append(item.kind)

            error: str | None = None
            try:
                ok = await self._dispatcher.dispatch(
                    item,
                    action,
                    bulk_payload(action),
                    audit_label=mode.audit_label,
                    note=f"Bulk action ({item.kind.value})",
                    meta={"bulk": True},
                    refresh=False,
                )
            except ModerationError as e:
                ok = False
                error = str(e)
            if not ok and error is None:
                error = "action not applied"
            results.append(
                BulkItemResult(queue_id=item.queue_id, ok=ok, action=action, error=error)
            )

        for kind in attempted:
            collaborator = self._collaborators.get(kind)
            if collaborator is None:
                continue
            try:
                await collaborator.refresh()
            except Exception as e:
                log.warning("Collaborator refresh failed after bulk run", kind=kind.value, error=str(e))

        result = BulkResult(mode=mode, items=results)
        if self._metrics is not None:
            self._metrics.record_bulk_run(mode.value)
        log.info(
            "Bulk run completed",
            succeeded=len(result.succeeded),
            failed=len(result.failed),
            skipped=len(result.skipped),
        )
        return result


__all__ = [
    "BULK_REASONS",
    "BulkOperationCoordinator",
    "bulk_payload",
    "resolve_bulk_action",
]
