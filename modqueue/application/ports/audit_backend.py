"""Audit trail backend ports.

The audit trail store has two interchangeable tiers:

- Durable: network-backed table of audit rows. Any failure is reported by
  raising DurableAuditStoreError.
- Local: bounded key/value cache holding one JSON document under a
  well-known key. Absence reads as None; write failures raise
  AuditCacheError.

Durable row schema:
    {queue_id, entity_type, entity_id, action, note, meta, created_by, created_at}
"""

from __future__ import annotations

from typing import Any, Protocol


class DurableAuditBackendProtocol(Protocol):
    """Protocol for the durable (remote) audit store."""

    async def fetch_recent(self, limit: int) -> list[dict[str, Any]]:
        """Read the most recent audit rows, newest first.

        Args:
            limit: Maximum number of rows.

        Returns:
            List of row dictionaries.

        Raises:
            DurableAuditStoreError: On network, status or schema failure.
        """
        ...

    async def insert(self, row: dict[str, Any]) -> None:
        """Insert one audit row.

        Raises:
            DurableAuditStoreError: On any write failure.
        """
        ...


class LocalAuditCacheProtocol(Protocol):
    """Protocol for the local fallback cache."""

    def read(self, key: str) -> str | None:
        """Return the stored document, or None if absent or unreadable."""
        ...

    def write(self, key: str, value: str) -> None:
        """Replace the stored document.

        Raises:
            AuditCacheError: If the document cannot be written.
        """
        ...


__all__ = ["DurableAuditBackendProtocol", "LocalAuditCacheProtocol"]
