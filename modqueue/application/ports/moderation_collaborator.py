"""Moderation collaborator port.

Reports, listings and users are owned by independent collaborators. The
moderation queue never fetches or mutates them at the data-source level;
it consumes each collaborator through this protocol.

Implementation Requirements:
- records() returns the current snapshot, already risk-classified
- refresh() re-fetches after a mutation
- apply_action() returns False (or raises) when the mutation did not happen
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from modqueue.domain.models.moderation_action import ModerationAction


class ModerationCollaboratorProtocol(Protocol):
    """Protocol for the owner of one moderatable entity kind."""

    def records(self) -> Sequence[Mapping[str, Any]]:
        """Return the current snapshot of records.

        Returns:
            Records already classified/flagged where applicable.
        """
        ...

    async def refresh(self) -> None:
        """Re-fetch records after a mutation."""
        ...

    async def apply_action(self, entity_id: str, action: ModerationAction) -> bool:
        """Apply a moderation action to one entity.

        Args:
            entity_id: Identity of the entity.
            action: The action payload (type, reason, duration, ...).

        Returns:
            True if the entity was mutated, False otherwise.
        """
        ...


__all__ = ["ModerationCollaboratorProtocol"]
