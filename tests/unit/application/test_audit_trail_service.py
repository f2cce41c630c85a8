"""Unit tests for the audit trail store.

Covers the startup probe, monotonic persistence mode, the degraded local
path, the bounded log and the durable row schema.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from modqueue.application.services.audit_trail_service import AuditTrailStore
from modqueue.domain.errors import DurableAuditStoreError
from modqueue.domain.models.decision_log import PersistenceMode
from modqueue.infrastructure.stubs import DurableAuditBackendStub, InMemoryAuditCacheStub

CACHE_KEY = "fasomarket_admin_moderation_decision_logs_v1"


def _sample(registry, name: str, **labels: str) -> float:
    total = 0.0
    for family in registry.collect():
        for sample in family.samples:
            if sample.name == name and all(sample.labels.get(k) == v for k, v in labels.items()):
                total += sample.value
    return total


def _local_log(cache: InMemoryAuditCacheStub) -> list[dict]:
    return json.loads(cache.documents[CACHE_KEY])


class TestLoad:
    """Tests for the startup probe."""

    async def test_durable_rows_make_the_session_durable(self, audit_cache) -> None:
        durable = DurableAuditBackendStub(
            rows=[
                {"queue_id": "report-1", "action": "Approve report", "note": "a",
                 "created_at": "2026-03-01T10:00:00Z"},
                {"queue_id": "user-2", "action": "Suspend user", "note": "b",
                 "created_at": "2026-03-02T10:00:00Z"},
            ]
        )
        store = AuditTrailStore(audit_cache, durable, cache_key=CACHE_KEY)

        entries = await store.load()

        assert store.persistence_mode is PersistenceMode.DURABLE
        assert [e.queue_id for e in entries] == ["user-2", "report-1"]
        assert entries[0].id == "user-2-2026-03-02T10:00:00Z-0"

    async def test_remote_read_limit_is_log_cap(self, audit_cache) -> None:
        durable = AsyncMock()
        durable.fetch_recent.return_value = []
        store = AuditTrailStore(audit_cache, durable, cache_key=CACHE_KEY)

        await store.load()

        durable.fetch_recent.assert_awaited_once_with(400)

    async def test_read_failure_falls_back_to_local_cache(self, durable_backend) -> None:
        cache = InMemoryAuditCacheStub(
            {
                CACHE_KEY: json.dumps(
                    [{"id": "x", "queueId": "listing-9", "action": "Suspend listing",
                      "note": "", "createdAt": "2026-03-01T00:00:00Z"}]
                )
            }
        )
        durable_backend.fail_reads = True
        store = AuditTrailStore(cache, durable_backend, cache_key=CACHE_KEY)

        entries = await store.load()

        assert store.persistence_mode is PersistenceMode.DEGRADED
        assert [e.queue_id for e in entries] == ["listing-9"]

    async def test_no_durable_backend_starts_degraded(self, audit_cache) -> None:
        store = AuditTrailStore(audit_cache, None, cache_key=CACHE_KEY)
        assert await store.load() == []
        assert store.persistence_mode is PersistenceMode.DEGRADED

    @pytest.mark.parametrize("document", ["{not json", json.dumps({"a": 1}), ""])
    async def test_corrupt_cache_reads_as_empty(self, durable_backend, document: str) -> None:
        durable_backend.fail_reads = True
        cache = InMemoryAuditCacheStub({CACHE_KEY: document})
        store = AuditTrailStore(cache, durable_backend, cache_key=CACHE_KEY)
        assert await store.load() == []
        assert store.persistence_mode is PersistenceMode.DEGRADED

    async def test_probe_runs_once(self, audit_store, durable_backend) -> None:
        await audit_store.load()
        await audit_store.load()
        await audit_store.append("report-1", "Approve report", "n")
        assert durable_backend.read_count == 1

    async def test_append_before_load_loads_first(self, audit_store, durable_backend) -> None:
        assert audit_store.persistence_mode is PersistenceMode.UNKNOWN
        assert await audit_store.append("report-1", "Approve report", "n") is True
        assert durable_backend.read_count == 1
        assert audit_store.persistence_mode is PersistenceMode.DURABLE


class TestAppendDurable:
    """Tests for appends while the durable tier is healthy."""

    async def test_row_schema(self, audit_store, durable_backend, audit_cache) -> None:
        await audit_store.load()

        ok = await audit_store.append(
            "listing-42", "Suspend listing", "note", meta={"bulk": True}
        )

        assert ok is True
        row = durable_backend.rows[0]
        assert set(row) == {
            "queue_id", "entity_type", "entity_id", "action",
            "note", "meta", "created_by", "created_at",
        }
        assert row["entity_type"] == "listing"
        assert row["entity_id"] == "42"
        assert row["meta"] == {"bulk": True}
        assert row["created_by"] == "admin-7"
        assert CACHE_KEY not in audit_cache.documents

    async def test_entries_are_prepended(self, audit_store) -> None:
        await audit_store.append("report-1", "Approve report", "first")
        await audit_store.append("report-1", "Dismiss report", "second")
        assert [e.note for e in audit_store.entries] == ["second", "first"]


class TestDegradation:
    """Tests for the durable-to-degraded transition."""

    async def test_write_failure_downgrades_and_keeps_the_entry(
        self, audit_store, durable_backend, audit_cache
    ) -> None:
        await audit_store.load()
        durable_backend.fail_writes = True

        ok = await audit_store.append("user-3", "Suspend user", "n")

        assert ok is False
        assert audit_store.persistence_mode is PersistenceMode.DEGRADED
        assert [e["queueId"] for e in _local_log(audit_cache)] == ["user-3"]

    async def test_degraded_is_absorbing(self, audit_store, durable_backend) -> None:
        await audit_store.load()
        durable_backend.fail_writes = True
        await audit_store.append("user-3", "Suspend user", "n")

        durable_backend.fail_writes = False
        ok = await audit_store.append("user-3", "Reactivate user", "n")

        assert ok is False
        assert durable_backend.write_attempts == 1
        assert audit_store.persistence_mode is PersistenceMode.DEGRADED

    async def test_first_degraded_write_contains_earlier_durable_entries(
        self, audit_store, durable_backend, audit_cache
    ) -> None:
        await audit_store.load()
        await audit_store.append("report-1", "Approve report", "n")
        durable_backend.fail_writes = True
        await audit_store.append("report-2", "Dismiss report", "n")
        assert [e["queueId"] for e in _local_log(audit_cache)] == ["report-2", "report-1"]

    async def test_degraded_gauge(self, audit_store, durable_backend, registry) -> None:
        durable_backend.fail_reads = True
        await audit_store.load()
        assert _sample(registry, "audit_persistence_degraded") == 1.0

    async def test_local_write_failure_is_not_fatal(self, durable_backend) -> None:
        durable_backend.fail_reads = True
        cache = InMemoryAuditCacheStub()
        cache.fail_writes = True
        store = AuditTrailStore(cache, durable_backend, cache_key=CACHE_KEY)

        ok = await store.append("listing-1", "Suspend listing", "n")

        assert ok is False
        assert [e.queue_id for e in store.entries] == ["listing-1"]


class TestBoundsAndHistory:
    """Tests for the bounded log and per-item history."""

    async def test_log_is_capped(self, audit_cache) -> None:
        store = AuditTrailStore(audit_cache, None, cache_key=CACHE_KEY, log_cap=3)
        for n in range(5):
            await store.append(f"report-{n}", "Approve report", str(n))

        assert [e.note for e in store.entries] == ["4", "3", "2"]
        assert len(_local_log(audit_cache)) == 3

    async def test_history_is_most_recent_first_and_limited(self, audit_store) -> None:
        for n in range(7):
            await audit_store.append("listing-1", "Suspend listing", str(n))
        await audit_store.append("listing-2", "Suspend listing", "other")

        history = audit_store.history("listing-1")

        assert [e.note for e in history] == ["6", "5", "4", "3", "2"]
        assert audit_store.history("listing-1", limit=2)[0].note == "6"
        assert audit_store.history("user-404") == []

    async def test_entries_property_is_a_copy(self, audit_store) -> None:
        await audit_store.append("report-1", "Approve report", "n")
        audit_store.entries.clear()
        assert len(audit_store.entries) == 1


class TestDurableErrors:
    """Tests that backend exceptions never reach the caller."""

    async def test_mocked_insert_error(self, audit_cache) -> None:
        durable = AsyncMock()
        durable.fetch_recent.return_value = []
        durable.insert.side_effect = DurableAuditStoreError("write", "timeout")
        store = AuditTrailStore(audit_cache, durable, cache_key=CACHE_KEY)

        assert await store.append("report-1", "Approve report", "n") is False
        assert store.persistence_mode is PersistenceMode.DEGRADED

    async def test_unexpected_insert_error_downgrades(self, audit_cache) -> None:
        durable = AsyncMock()
        durable.fetch_recent.return_value = []
        durable.insert.side_effect = RuntimeError("encoder crashed")
        store = AuditTrailStore(audit_cache, durable, cache_key=CACHE_KEY)

        assert await store.append("listing-1", "Suspend listing", "n") is False
        assert store.persistence_mode is PersistenceMode.DEGRADED
        assert [e["queueId"] for e in _local_log(audit_cache)] == ["listing-1"]

    async def test_unexpected_read_error_falls_back_to_local(self, audit_cache) -> None:
        durable = AsyncMock()
        durable.fetch_recent.side_effect = TypeError("bad row payload")
        store = AuditTrailStore(audit_cache, durable, cache_key=CACHE_KEY)

        assert await store.load() == []
        assert store.persistence_mode is PersistenceMode.DEGRADED
