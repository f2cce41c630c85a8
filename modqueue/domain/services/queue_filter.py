"""Queue filter and sort domain service.

Pure functions over a normalized queue, safe to re-run on every keystroke.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from modqueue.domain.models.queue_item import QueueItem, QueueKind

WILDCARD = "all"


@dataclass(frozen=True)
class QueueFilter:
    """Operator-supplied queue filter.

    Attributes:
        search: Case-insensitive substring matched against title,
            subject and reason (any of them)
        kind: Exact kind value or "all"
        status: Exact status value or "all"
    """

    search: str = ""
    kind: str = WILDCARD
    status: str = WILDCARD

    def matches(self, item: QueueItem) -> bool:
        if self.kind != WILDCARD and item.kind.value != self.kind:
            return False
        if self.status != WILDCARD and item.status != self.status:
            return False
        term = self.search.strip().lower()
        if not term:
            return True
        return (
            term in item.title.lower()
            or term in item.subject.lower()
            or term in item.reason.lower()
        )


def filter_queue(items: Iterable[QueueItem], queue_filter: QueueFilter) -> list[QueueItem]:
    """Apply the kind, status and search predicates (logical AND).

    Input order is preserved; callers pass an already sorted queue.
    """
    return [item for item in items if queue_filter.matches(item)]


def sort_queue(items: Iterable[QueueItem]) -> list[QueueItem]:
    """Default order: newest first, stable tie-break on queue_id."""
    return sorted(items, key=QueueItem.sort_key)


def queue_counts(items: Iterable[QueueItem]) -> dict[str, int]:
    """Total and per-kind item counts."""
    counts = {kind.value: 0 for kind in QueueKind}
    total = 0
    for item in items:
        counts[item.kind.value] += 1
        total += 1
    return {"total": total, **counts}


__all__ = ["WILDCARD", "QueueFilter", "filter_queue", "queue_counts", "sort_queue"]
