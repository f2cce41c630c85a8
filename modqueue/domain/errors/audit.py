"""Audit trail storage errors.

Both errors are raised by storage backends and caught by the audit trail
store. Neither is allowed to reach the caller of a moderation action:
a durable failure downgrades the session to local persistence, and a
local failure is logged while the in-memory log keeps the entry.
"""

from modqueue.domain.exceptions import ModerationError


class DurableAuditStoreError(ModerationError):
    """Raised when the durable (remote) audit store cannot be read or written.

    Covers network failures, HTTP error statuses and a missing table.

    Attributes:
        operation: "read" or "write".
    """

    def __init__(self, operation: str, detail: str) -> None:
        """Initialize durable store error.

        Args:
            operation: The failed operation ("read" or "write").
            detail: Underlying failure description.
        """
        self.operation = operation
        self.detail = detail
        super().__init__(f"Durable audit store {operation} failed: {detail}")


class AuditCacheError(ModerationError):
    """Raised when the local audit cache cannot be written."""

    def __init__(self, key: str, detail: str) -> None:
        self.key = key
        self.detail = detail
        super().__init__(f"Local audit cache write failed for {key!r}: {detail}")
