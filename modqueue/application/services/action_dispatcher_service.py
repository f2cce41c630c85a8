"""Action dispatcher: routes one moderation action to its collaborator.

Sequence for one dispatch:
1. Validate the action against the item's kind (raises on misuse)
2. BUSY CHECK - reject a second in-flight action on the same queue id
3. Reactivations consult the suspension authorization resolver
4. Apply the collaborator mutation
5. On success: write ONE audit entry, THEN refresh the collaborator
6. Clear the busy flag on every path

Side effects are limited to one collaborator mutation, at most one audit
write and one busy-flag toggle.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from structlog import get_logger

from modqueue.domain.errors import UnsupportedActionError
from modqueue.domain.models.moderation_action import (
    ACTION_LABELS,
    LEGAL_ACTIONS,
    ActionName,
    ModerationAction,
)
from modqueue.domain.models.queue_item import QueueItem, QueueKind
from modqueue.domain.models.suspension import ActorRole
from modqueue.domain.services.suspension_authorization import may_reactivate

if TYPE_CHECKING:
    from modqueue.application.ports.moderation_collaborator import (
        ModerationCollaboratorProtocol,
    )
    from modqueue.application.services.audit_trail_service import AuditTrailStore
    from modqueue.infrastructure.monitoring.metrics import ModerationMetricsCollector

logger = get_logger(__name__)

DEFAULT_NOTE = "Action executed from unified moderation"


def coerce_action(kind: QueueKind, action: ActionName | str) -> ActionName:
    """Resolve an action name and check it is legal for the kind.

    Raises:
        UnsupportedActionError: For unknown names or kind mismatches.
    """
    if isinstance(action, str):
        try:
            action = ActionName(action)
        except ValueError:
            raise UnsupportedActionError(kind.value, action) from None
    if action not in LEGAL_ACTIONS[kind]:
        raise UnsupportedActionError(kind.value, action.value)
    return action


class ActionDispatcher:
    """Applies moderation actions to queue items, one per item at a time.

    The per-item busy flag serializes actions on the same queue id; all
    other items stay actionable while one is in flight.
    """

    def __init__(
        self,
        collaborators: Mapping[QueueKind, ModerationCollaboratorProtocol],
        audit_store: AuditTrailStore,
        *,
        actor_role: ActorRole = ActorRole.ADMINISTRATOR,
        metrics: ModerationMetricsCollector | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            collaborators: Collaborator per queue kind.
            audit_store: Decision log written on success.
            actor_role: Role used for reactivation eligibility.
            metrics: Optional metrics collector.
        """
        self._collaborators = dict(collaborators)
        self._audit_store = audit_store
        self._actor_role = actor_role
        self._metrics = metrics
        self._busy: set[str] = set()

    @property
    def busy_ids(self) -> frozenset[str]:
        return frozenset(self._busy)

    def is_busy(self, queue_id: str) -> bool:
        return queue_id in self._busy

    async def dispatch(
        self,
        item: QueueItem,
        action: ActionName | str,
        payload: ModerationAction | None = None,
        *,
        audit_label: str | None = None,
        note: str | None = None,
        meta: dict[str, Any] | None = None,
        refresh: bool = True,
    ) -> bool:
        """Apply one action to one queue item.

        Args:
            item: Target queue item.
            action: Action name, legal for the item's kind.
            payload: Collaborator payload (defaults per action).
            audit_label: Decision log label (defaults per action).
            note: Decision log note.
            meta: Extra metadata for the durable audit row.
            refresh: Whether to refresh the collaborator afterwards.

        Returns:
            True if the entity was mutated and the decision recorded.

        Raises:
            UnsupportedActionError: If the action is not legal for the kind
                or no collaborator owns the kind.
        """
        action = coerce_action(item.kind, action)
        collaborator = self._collaborators.get(item.kind)
        if collaborator is None:
            raise UnsupportedActionError(item.kind.value, action.value)

        log = logger.bind(queue_id=item.queue_id, kind=item.kind.value, action=action.value)

        if item.queue_id in self._busy:
            log.info("Action rejected, item already busy")
            self._record(item, action, "busy")
            return False

        if action.is_reactivation and not may_reactivate(item.raw, self._actor_role):
            log.info("Reactivation not permitted", actor_role=self._actor_role.value)
            self._record(item, action, "ineligible")
            return False

        if payload is None:
            payload = ModerationAction.default_for(action)
        elif payload.type is not action:
            raise UnsupportedActionError(item.kind.value, payload.type.value)

        self._busy.add(item.queue_id)
        try:
            try:
                applied = await collaborator.apply_action(item.item_id, payload)
            except Exception as e:
                log.warning("Collaborator mutation raised", error=str(e))
                applied = False

            if not applied:
                log.warning("Collaborator mutation failed")
                self._record(item, action, "failed")
                return False

            await self._audit_store.append(
                item.queue_id,
                audit_label or ACTION_LABELS[action],
                note or DEFAULT_NOTE,
                meta=meta,
            )
            self._record(item, action, "applied")
            log.info("Moderation action applied")

            if refresh:
                try:
                    await collaborator.refresh()
                except Exception as e:
                    log.warning("Collaborator refresh failed", error=str(e))
            return True
        finally:
            self._busy.discard(item.queue_id)

    def _record(self, item: QueueItem, action: ActionName, outcome: str) -> None:
        if self._metrics is not None:
            self._metrics.record_action(item.kind.value, action.value, outcome)


__all__ = ["DEFAULT_NOTE", "ActionDispatcher", "coerce_action"]
