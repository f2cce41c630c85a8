"""Durable audit backend over a REST table endpoint.

Reads and writes rows of the audit events table through a
PostgREST-style HTTP interface:

    GET  {base_url}/rest/v1/{table}?select=*&order=created_at.desc&limit=N
    POST {base_url}/rest/v1/{table}

Every transport, status or decoding failure is surfaced as
DurableAuditStoreError so the audit trail store can downgrade the session.
"""

from __future__ import annotations

from typing import Any

import httpx
from structlog import get_logger

from modqueue.domain.errors import DurableAuditStoreError

logger = get_logger(__name__)


class HttpDurableAuditBackend:
    """DurableAuditBackendProtocol implementation backed by httpx.

    Usage:
        backend = HttpDurableAuditBackend(
            base_url="https://db.example.com",
            api_key="service-key",
            table="admin_moderation_events",
        )
        rows = await backend.fetch_recent(400)
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str,
        *,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the backend.

        Args:
            base_url: Root URL of the REST service.
            api_key: Service key sent as apikey and bearer token.
            table: Audit events table name.
            timeout_seconds: Per-request timeout.
            transport: Optional transport override (tests use MockTransport).
        """
        self._endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self._table = table
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self._timeout = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def fetch_recent(self, limit: int) -> list[dict[str, Any]]:
        """Read the most recent audit rows, newest first.

        Raises:
            DurableAuditStoreError: On network, status, decoding or schema
                failure, or any other error raised by the client.
        """
        params = {"select": "*", "order": "created_at.desc", "limit": str(limit)}
        try:
            async with self._client() as client:
                response = await client.get(self._endpoint, params=params)
                response.raise_for_status()
                rows = response.json()
        except Exception as e:
            logger.warning("durable_audit_read_failed", table=self._table, error=str(e))
            raise DurableAuditStoreError("read", str(e)) from e

        if not isinstance(rows, list):
            raise DurableAuditStoreError("read", "unexpected response shape")
        return [row for row in rows if isinstance(row, dict)]

    async def insert(self, row: dict[str, Any]) -> None:
        """Insert one audit row.

        Raises:
            DurableAuditStoreError: On any write failure, including rows that
                cannot be JSON-encoded.
        """
        try:
            async with self._client() as client:
                response = await client.post(
                    self._endpoint,
                    json=row,
                    headers={"Prefer": "return=minimal"},
                )
                response.raise_for_status()
        except Exception as e:
            logger.warning(
                "durable_audit_write_failed",
                table=self._table,
                queue_id=row.get("queue_id"),
                error=str(e),
            )
            raise DurableAuditStoreError("write", str(e)) from e


__all__ = ["HttpDurableAuditBackend"]
