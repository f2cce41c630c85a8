"""Moderation action errors.

These errors describe programming or authorization mistakes, not action
outcomes. A collaborator refusing a mutation is reported as a boolean
``False`` by the dispatcher and never raises.
"""

from __future__ import annotations

from modqueue.domain.exceptions import ModerationError


class UnsupportedActionError(ModerationError):
    """Raised when an action is not legal for the queue item's kind.

    Attributes:
        kind: The queue item kind ("report", "listing", "user").
        action: The rejected action name.
    """

    def __init__(self, kind: str, action: str) -> None:
        """Initialize unsupported action error.

        Args:
            kind: The queue item kind.
            action: The rejected action name.
        """
        self.kind = kind
        self.action = action
        super().__init__(f"Action {action!r} is not supported for {kind} items")


class QueueItemNotFoundError(ModerationError):
    """Raised when a queue id is not part of the current queue snapshot."""

    def __init__(self, queue_id: str) -> None:
        self.queue_id = queue_id
        super().__init__(f"Queue item {queue_id} not found in current snapshot")


class SuspensionNotReversibleError(ModerationError):
    """Raised when a self-service reactivation targets an admin/system suspension.

    The actor must be routed to support instead of an action button.

    Attributes:
        entity_id: Identifier of the suspended entity.
        explanation: Human-readable provenance statement.
        contact_support: Whether the escalation path is support contact.
    """

    def __init__(
        self,
        entity_id: str,
        explanation: str,
        contact_support: bool = True,
    ) -> None:
        self.entity_id = entity_id
        self.explanation = explanation
        self.contact_support = contact_support
        super().__init__(
            f"Suspension of {entity_id} cannot be reversed by its owner: {explanation}"
        )
