"""Moderation queue session state.

The selection set, busy flags and persistence mode are owned by a single
controller. This object is the serializable view of that state handed to
the surrounding UI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from modqueue.domain.models.decision_log import PersistenceMode


@dataclass
class ModerationQueueState:
    """Snapshot of controller-owned session state.

    Attributes:
        selection: Queue ids selected for a bulk operation
        busy: Queue ids with an action in flight
        persistence_mode: Current audit persistence tier
    """

    selection: set[str] = field(default_factory=set)
    busy: set[str] = field(default_factory=set)
    persistence_mode: PersistenceMode = PersistenceMode.UNKNOWN

    @property
    def degraded(self) -> bool:
        return self.persistence_mode is PersistenceMode.DEGRADED

    def to_dict(self) -> dict[str, Any]:
        return {
            "selection": sorted(self.selection),
            "busy": sorted(self.busy),
            "persistence_mode": self.persistence_mode.value,
            "degraded": self.degraded,
        }


__all__ = ["ModerationQueueState"]
