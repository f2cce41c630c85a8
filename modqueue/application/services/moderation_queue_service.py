"""Moderation queue controller.

Single owner of the moderation session state:

- queue snapshot (re-normalized after every mutation)
- selection set (valid only against the current snapshot)
- busy flags (held by the dispatcher)
- persistence mode (held by the audit trail store)

The UI reads this state through state(), visible() and history(); it
never mutates it directly.

Data flow:
    collaborators -> normalize -> filter -> operator selection
    -> dispatcher / bulk coordinator -> collaborator mutation
    -> audit write -> collaborator refresh -> normalize
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from structlog import get_logger

from modqueue.application.services.action_dispatcher_service import ActionDispatcher
from modqueue.application.services.bulk_operation_service import (
    BulkOperationCoordinator,
)
from modqueue.domain.errors import QueueItemNotFoundError
from modqueue.domain.models.decision_log import DecisionLogEntry, PersistenceMode
from modqueue.domain.models.moderation_action import (
    ActionName,
    BulkMode,
    BulkResult,
    ModerationAction,
)
from modqueue.domain.models.queue_item import QueueItem, QueueKind
from modqueue.domain.models.queue_state import ModerationQueueState
from modqueue.domain.models.suspension import ActorRole
from modqueue.domain.services.queue_filter import QueueFilter, filter_queue, queue_counts
from modqueue.domain.services.queue_normalizer import normalize

if TYPE_CHECKING:
    from modqueue.application.ports.moderation_collaborator import (
        ModerationCollaboratorProtocol,
    )
    from modqueue.application.services.audit_trail_service import AuditTrailStore
    from modqueue.infrastructure.monitoring.metrics import ModerationMetricsCollector

logger = get_logger(__name__)


class ModerationQueueController:
    """Owns the unified moderation queue for one operator session.

    Example:
        >>> controller = ModerationQueueController(collaborators, audit_store)
        >>> await controller.start()
        >>> item = controller.visible(QueueFilter(kind="listing"))[0]
        >>> await controller.dispatch(item.queue_id, "suspend_listing")
        True
    """

    def __init__(
        self,
        collaborators: Mapping[QueueKind, ModerationCollaboratorProtocol],
        audit_store: AuditTrailStore,
        *,
        actor_role: ActorRole = ActorRole.ADMINISTRATOR,
        metrics: ModerationMetricsCollector | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            collaborators: Collaborator per queue kind.
            audit_store: Decision log store.
            actor_role: Role of the operator (administrator by default).
            metrics: Optional metrics collector.
        """
        self._collaborators = dict(collaborators)
        self._audit_store = audit_store
        self._dispatcher = ActionDispatcher(
            self._collaborators, audit_store, actor_role=actor_role, metrics=metrics
        )
        self._bulk = BulkOperationCoordinator(
            self._dispatcher, self._collaborators, metrics=metrics
        )
        self._queue: list[QueueItem] = []
        self._index: dict[str, QueueItem] = {}
        self._selection: set[str] = set()

    async def start(self) -> list[QueueItem]:
        """Load the decision log and take the first queue snapshot."""
        await self._audit_store.load()
        queue = self.snapshot()
        logger.info(
            "Moderation session started",
            items=len(queue),
            persistence_mode=self._audit_store.persistence_mode.value,
        )
        return queue

    def snapshot(self) -> list[QueueItem]:
        """Re-normalize the queue from the collaborators' current records.

        Selected ids that left the queue are dropped from the selection.
        """

        def records(kind: QueueKind):
            collaborator = self._collaborators.get(kind)
            return collaborator.records() if collaborator is not None else []

        self._queue = normalize(
            records(QueueKind.REPORT),
            records(QueueKind.LISTING),
            records(QueueKind.USER),
        )
        self._index = {item.queue_id: item for item in self._queue}
        self._selection &= self._index.keys()
        return list(self._queue)

    @property
    def queue(self) -> list[QueueItem]:
        return list(self._queue)

    @property
    def selection(self) -> frozenset[str]:
        return frozenset(self._selection)

    @property
    def persistence_mode(self) -> PersistenceMode:
        return self._audit_store.persistence_mode

    def visible(self, queue_filter: QueueFilter | None = None) -> list[QueueItem]:
        """The filtered queue, in default order."""
        return filter_queue(self._queue, queue_filter or QueueFilter())

    def counts(self) -> dict[str, int]:
        return queue_counts(self._queue)

    def get(self, queue_id: str) -> QueueItem:
        """Look up an item of the current snapshot.

        Raises:
            QueueItemNotFoundError: If the id is not in the snapshot.
        """
        try:
            return self._index[queue_id]
        except KeyError:
            raise QueueItemNotFoundError(queue_id) from None

    def is_busy(self, queue_id: str) -> bool:
        return self._dispatcher.is_busy(queue_id)

    def toggle_selected(self, queue_id: str) -> bool:
        """Flip one item's selection.

        Returns:
            True if the item is selected afterwards.

        Raises:
            QueueItemNotFoundError: If the id is not in the snapshot.
        """
        self.get(queue_id)
        if queue_id in self._selection:
            self._selection.discard(queue_id)
            return False
        self._selection.add(queue_id)
        return True

    def toggle_select_all(self, queue_filter: QueueFilter | None = None) -> frozenset[str]:
        """Select every filtered item, or deselect them if all are selected."""
        filtered_ids = {item.queue_id for item in self.visible(queue_filter)}
        if filtered_ids and filtered_ids <= self._selection:
            self._selection -= filtered_ids
        else:
            self._selection |= filtered_ids
        return self.selection

    def clear_selection(self) -> None:
        self._selection.clear()

    async def dispatch(
        self,
        queue_id: str,
        action: ActionName | str,
        payload: ModerationAction | None = None,
    ) -> bool:
        """Apply one action to one item of the current snapshot.

        Returns:
            True if the action was applied and recorded.

        Raises:
            QueueItemNotFoundError: If the id is not in the snapshot.
            UnsupportedActionError: If the action is illegal for the kind.
        """
        item = self.get(queue_id)
        applied = await self._dispatcher.dispatch(item, action, payload)
        if applied:
            self.snapshot()
        return applied

    async def run_bulk(self, mode: BulkMode | str) -> BulkResult:
        """Apply a bulk mode to the current selection.

        Items are processed in queue order. The selection is cleared after
        the run whatever the per-item outcomes.
        """
        mode = BulkMode(mode) if isinstance(mode, str) else mode
        selected = [item for item in self._queue if item.queue_id in self._selection]
        if not selected:
            return BulkResult(mode=mode)
        try:
            return await self._bulk.run_bulk(selected, mode)
        finally:
            self._selection.clear()
            self.snapshot()

    def history(self, queue_id: str, limit: int | None = None) -> list[DecisionLogEntry]:
        """Most recent decisions recorded for a queue item."""
        return self._audit_store.history(queue_id, limit)

    def state(self) -> ModerationQueueState:
        """Serializable view of the session state."""
        return ModerationQueueState(
            selection=set(self._selection),
            busy=set(self._dispatcher.busy_ids),
            persistence_mode=self._audit_store.persistence_mode,
        )


__all__ = ["ModerationQueueController"]
