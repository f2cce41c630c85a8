"""In-memory audit backends.

DurableAuditBackendStub stands in for the remote audit table and can be
switched to fail reads or writes. InMemoryAuditCacheStub stands in for the
local key/value cache.
"""

from __future__ import annotations

from typing import Any

from modqueue.domain.errors import AuditCacheError, DurableAuditStoreError


class DurableAuditBackendStub:
    """DurableAuditBackendProtocol stub with fail-on-demand switches."""

    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self.rows: list[dict[str, Any]] = list(rows or [])
        self.fail_reads = False
        self.fail_writes = False
        self.read_count = 0
        self.write_attempts = 0

    async def fetch_recent(self, limit: int) -> list[dict[str, Any]]:
        self.read_count += 1
        if self.fail_reads:
            raise DurableAuditStoreError("read", 'relation "admin_moderation_events" does not exist')
        ordered = sorted(self.rows, key=lambda row: str(row.get("created_at", "")), reverse=True)
        return [dict(row) for row in ordered[:limit]]

    async def insert(self, row: dict[str, Any]) -> None:
        self.write_attempts += 1
        if self.fail_writes:
            raise DurableAuditStoreError("write", "service unavailable")
        self.rows.append(dict(row))


class InMemoryAuditCacheStub:
    """LocalAuditCacheProtocol stub backed by a dict."""

    def __init__(self, documents: dict[str, str] | None = None) -> None:
        self.documents: dict[str, str] = dict(documents or {})
        self.fail_writes = False
        self.write_count = 0

    def read(self, key: str) -> str | None:
        return self.documents.get(key)

    def write(self, key: str, value: str) -> None:
        self.write_count += 1
        if self.fail_writes:
            raise AuditCacheError(key, "quota exceeded")
        self.documents[key] = value


__all__ = ["DurableAuditBackendStub", "InMemoryAuditCacheStub"]
