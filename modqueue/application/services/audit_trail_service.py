"""Audit trail store: dual-tier, append-only decision log.

The durable remote store is preferred. If it cannot be read at startup,
or fails on any write, the session switches to the local bounded cache
and never probes the remote store again.

Developer Golden Rules:
1. PROBE ONCE - load() decides the tier; later calls reuse the result
2. MONOTONIC MODE - DURABLE may become DEGRADED, never the reverse
3. NEVER LOSE A DECISION - a failed remote write still lands locally
4. BOUNDED LOCAL LOG - at most log_cap entries are kept
5. CORRUPT CACHE IS EMPTY - never fatal
6. ANY DURABLE ERROR DOWNGRADES - not only DurableAuditStoreError
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from structlog import get_logger

from modqueue.domain.errors import AuditCacheError
from modqueue.domain.models.decision_log import DecisionLogEntry, PersistenceMode
from modqueue.domain.models.queue_item import parse_queue_id

if TYPE_CHECKING:
    from modqueue.application.ports.audit_backend import (
        DurableAuditBackendProtocol,
        LocalAuditCacheProtocol,
    )
    from modqueue.infrastructure.monitoring.metrics import ModerationMetricsCollector

logger = get_logger(__name__)

DEFAULT_LOG_CAP = 400
DEFAULT_HISTORY_LIMIT = 5


class AuditTrailStore:
    """Repository over two interchangeable audit backends.

    The store keeps the session's decision log in memory, most recent
    first, and mirrors it to whichever tier currently owns persistence.

    Example:
        >>> store = AuditTrailStore(cache=cache, durable=remote)
        >>> await store.load()
        >>> await store.append("listing-42", "Suspend listing", "note")
        True
        >>> store.persistence_mode
        <PersistenceMode.DURABLE: 'durable'>
    """

    def __init__(
        self,
        cache: LocalAuditCacheProtocol,
        durable: DurableAuditBackendProtocol | None = None,
        *,
        cache_key: str,
        log_cap: int = DEFAULT_LOG_CAP,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        actor_id: str | None = None,
        metrics: ModerationMetricsCollector | None = None,
    ) -> None:
        """Initialize the audit trail store.

        Args:
            cache: Local fallback cache.
            durable: Durable remote store; None starts the session degraded.
            cache_key: Well-known key of the local log document.
            log_cap: Maximum number of retained entries.
            history_limit: Default number of entries returned by history().
            actor_id: Recorded as created_by on durable rows.
            metrics: Optional metrics collector.
        """
        self._cache = cache
        self._durable = durable
        self._cache_key = cache_key
        self._log_cap = log_cap
        self._history_limit = history_limit
        self._actor_id = actor_id
        self._metrics = metrics
        self._mode = PersistenceMode.UNKNOWN
        self._entries: list[DecisionLogEntry] = []
        self._loaded = False
        self._load_lock = asyncio.Lock()

    @property
    def persistence_mode(self) -> PersistenceMode:
        return self._mode

    @property
    def entries(self) -> list[DecisionLogEntry]:
        """The session's decision log, most recent first."""
        return list(self._entries)

    def history(self, queue_id: str, limit: int | None = None) -> list[DecisionLogEntry]:
        """Decision history of one queue item, most recent first.

        Args:
            queue_id: The queue item.
            limit: Maximum entries (defaults to the configured history limit).
        """
        limit = self._history_limit if limit is None else limit
        return [e for e in self._entries if e.queue_id == queue_id][:limit]

    async def load(self) -> list[DecisionLogEntry]:
        """Load the decision log from whichever tier holds it.

        Runs the remote probe at most once per session. On success the mode
        becomes DURABLE; on any read failure the local cache is parsed
        (absent or corrupt reads as empty) and the mode becomes DEGRADED.

        Returns:
            The loaded entries, most recent first.
        """
        async with self._load_lock:
            if self._loaded:
                return self.entries

            log = logger.bind(cache_key=self._cache_key)
            if self._durable is None:
                log.info("No durable audit store configured, using local cache")
                self._entries = self._read_local()
                self._set_mode(PersistenceMode.DEGRADED)
            else:
                try:
                    rows = await self._durable.fetch_recent(self._log_cap)
                except Exception as e:
                    log.warning(
                        "Durable audit store unavailable at load",
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    self._entries = self._read_local()
                    self._set_mode(PersistenceMode.DEGRADED)
                else:
                    self._entries = self._map_rows(rows)
                    self._set_mode(PersistenceMode.DURABLE)

            self._loaded = True
            log.info(
                "Decision log loaded",
                entries=len(self._entries),
                persistence_mode=self._mode.value,
            )
            return self.entries

    async def append(
        self,
        queue_id: str,
        action: str,
        note: str,
        *,
        meta: dict[str, Any] | None = None,
    ) -> bool:
        """Record one applied decision.

        In DURABLE mode the row is written remotely first; a failure
        downgrades the session and the entry falls through to the local
        path. In DEGRADED mode the capped log goes to the local cache.

        Args:
            queue_id: Queue id of the item acted upon.
            action: Action label.
            note: Free-text note.
            meta: Extra metadata stored on the durable row.

        Returns:
            True only if the remote write succeeded.
        """
        if not self._loaded:
            await self.load()

        entry = DecisionLogEntry(
            id=f"{queue_id}-{uuid4().hex[:12]}",
            queue_id=queue_id,
            action=action,
            note=note,
            created_at=datetime.now(timezone.utc),
        )
        log = logger.bind(queue_id=queue_id, action=action)

        remote_ok = False
        if self._mode is PersistenceMode.DURABLE and self._durable is not None:
            try:
                await self._durable.insert(self._to_row(entry, meta or {}))
            except Exception as e:
                log.warning(
                    "Durable audit write failed, switching to local persistence",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                self._record_write("durable", "failed")
                self._set_mode(PersistenceMode.DEGRADED)
            else:
                remote_ok = True
                self._record_write("durable", "written")

        self._entries.insert(0, entry)
        del self._entries[self._log_cap :]

        if self._mode is PersistenceMode.DEGRADED:
            self._write_local(log)

        log.info("Decision recorded", remote=remote_ok, persistence_mode=self._mode.value)
        return remote_ok

    def _set_mode(self, target: PersistenceMode) -> None:
        if target is self._mode:
            return
        if not self._mode.can_transition_to(target):
            logger.error(
                "Rejected persistence mode transition",
                current=self._mode.value,
                target=target.value,
            )
            return
        self._mode = target
        if self._metrics is not None:
            self._metrics.set_persistence_degraded(target is PersistenceMode.DEGRADED)

    def _read_local(self) -> list[DecisionLogEntry]:
        raw = self._cache.read(self._cache_key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt local decision log", cache_key=self._cache_key)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring malformed local decision log", cache_key=self._cache_key)
            return []
        entries = [
            entry
            for entry in (
                DecisionLogEntry.from_cache_dict(item)
                for item in data
                if isinstance(item, dict)
            )
            if entry is not None
        ]
        return entries[: self._log_cap]

    def _write_local(self, log: Any) -> None:
        document = json.dumps(
            [entry.to_cache_dict() for entry in self._entries[: self._log_cap]],
            ensure_ascii=False,
        )
        try:
            self._cache.write(self._cache_key, document)
        except AuditCacheError as e:
            log.error("Local decision log write failed", error=str(e))
            self._record_write("local", "failed")
        else:
            self._record_write("local", "written")

    def _map_rows(self, rows: list[dict[str, Any]]) -> list[DecisionLogEntry]:
        entries = [
            entry
            for entry in (
                DecisionLogEntry.from_durable_row(row, index)
                for index, row in enumerate(rows)
            )
            if entry is not None
        ]
        entries.sort(key=lambda e: e.created_at, reverse=True)
        return entries[: self._log_cap]

    def _to_row(self, entry: DecisionLogEntry, meta: dict[str, Any]) -> dict[str, Any]:
        kind, entity_id = parse_queue_id(entry.queue_id)
        return {
            "queue_id": entry.queue_id,
            "entity_type": kind.value,
            "entity_id": entity_id,
            "action": entry.action,
            "note": entry.note,
            "meta": meta,
            "created_by": self._actor_id,
            "created_at": entry.created_at.isoformat(),
        }

    def _record_write(self, tier: str, outcome: str) -> None:
        if self._metrics is not None:
            self._metrics.record_audit_write(tier, outcome)


__all__ = ["DEFAULT_HISTORY_LIMIT", "DEFAULT_LOG_CAP", "AuditTrailStore"]
