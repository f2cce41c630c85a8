"""Unit tests for the moderation queue routes."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from modqueue.api.dependencies.moderation import (
    get_moderation_controller,
    get_moderation_metrics,
)
from modqueue.api.main import app


@pytest.fixture
def client(controller, metrics):
    app.dependency_overrides[get_moderation_controller] = lambda: controller
    app.dependency_overrides[get_moderation_metrics] = lambda: metrics
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestGetQueue:
    """Tests for GET /v1/moderation/queue."""

    def test_returns_items_counts_and_state(self, client) -> None:
        response = client.get("/v1/moderation/queue")

        assert response.status_code == 200
        body = response.json()
        assert [i["queue_id"] for i in body["items"]][:2] == ["report-r3", "report-r1"]
        assert body["counts"] == {"total": 7, "report": 2, "listing": 3, "user": 2}
        assert body["persistence_mode"] == "durable"
        assert body["degraded"] is False
        assert body["selection"] == []

    def test_filters(self, client) -> None:
        response = client.get(
            "/v1/moderation/queue", params={"kind": "listing", "status": "suspended"}
        )
        assert [i["queue_id"] for i in response.json()["items"]] == ["listing-l3", "listing-l4"]

    def test_suspended_items_carry_a_notice(self, client) -> None:
        items = {
            i["queue_id"]: i
            for i in client.get("/v1/moderation/queue").json()["items"]
        }
        assert items["listing-l3"]["suspension"]["contact_support"] is True
        assert items["listing-l4"]["suspension"]["can_reactivate"] is True
        assert items["report-r1"]["suspension"] is None

    def test_timestamps_use_z_suffix(self, client) -> None:
        item = client.get("/v1/moderation/queue").json()["items"][0]
        assert item["created_at"] == "2026-03-12T08:00:00Z"


class TestApplyAction:
    """Tests for POST /v1/moderation/queue/{queue_id}/actions."""

    def test_applies_the_action(self, client) -> None:
        response = client.post(
            "/v1/moderation/queue/user-u1/actions",
            json={"action": "suspend", "duration_days": 14, "reason": "Fraud"},
        )

        assert response.status_code == 200
        assert response.json() == {"queue_id": "user-u1", "action": "suspend", "ok": True}
        history = client.get("/v1/moderation/queue/user-u1/history").json()
        assert [e["action"] for e in history["entries"]] == ["Suspend user"]

    def test_unknown_queue_id_is_404(self, client) -> None:
        response = client.post(
            "/v1/moderation/queue/user-missing/actions", json={"action": "suspend"}
        )
        assert response.status_code == 404
        assert response.json()["detail"]["title"] == "Queue Item Not Found"

    def test_illegal_action_is_422(self, client) -> None:
        response = client.post(
            "/v1/moderation/queue/report-r1/actions", json={"action": "suspend"}
        )
        assert response.status_code == 422
        assert response.json()["detail"]["type"] == "urn:modqueue:action:unsupported"

    def test_collaborator_failure_is_not_an_http_error(self, client, reports) -> None:
        reports.fail_ids.add("r1")
        response = client.post(
            "/v1/moderation/queue/report-r1/actions", json={"action": "approve"}
        )
        assert response.status_code == 200
        assert response.json()["ok"] is False


class TestSelectionAndBulk:
    """Tests for selection and bulk endpoints."""

    def test_toggle_and_clear(self, client) -> None:
        toggled = client.post("/v1/moderation/selection/toggle", json={"queue_id": "report-r1"})
        assert toggled.json() == {"selection": ["report-r1"], "selected": True}

        cleared = client.post("/v1/moderation/selection/clear")
        assert cleared.json()["selection"] == []

    def test_toggle_unknown_id(self, client) -> None:
        response = client.post("/v1/moderation/selection/toggle", json={"queue_id": "report-x"})
        assert response.status_code == 404

    def test_toggle_all_uses_filter(self, client) -> None:
        response = client.post("/v1/moderation/selection/toggle-all", json={"kind": "user"})
        assert response.json()["selection"] == ["user-u1", "user-u2"]

    def test_bulk_suspend(self, client) -> None:
        client.post("/v1/moderation/selection/toggle", json={"queue_id": "listing-l2"})
        client.post("/v1/moderation/selection/toggle", json={"queue_id": "report-r1"})

        response = client.post("/v1/moderation/bulk", json={"mode": "suspend"})

        body = response.json()
        assert response.status_code == 200
        assert [(i["queue_id"], i["ok"], i["skipped"]) for i in body["items"]] == [
            ("report-r1", False, True),
            ("listing-l2", True, False),
        ]
        assert body["succeeded"] == 1
        assert body["skipped"] == 1
        assert client.get("/v1/moderation/queue").json()["selection"] == []

    def test_bulk_rejects_unknown_mode(self, client) -> None:
        response = client.post("/v1/moderation/bulk", json={"mode": "delete"})
        assert response.status_code == 422


class TestPersistence:
    def test_banner_state(self, client) -> None:
        assert client.get("/v1/moderation/persistence").json() == {
            "persistence_mode": "durable",
            "degraded": False,
        }

    def test_degraded_after_write_failure(self, client, durable_backend) -> None:
        durable_backend.fail_writes = True
        client.post("/v1/moderation/queue/report-r1/actions", json={"action": "approve"})
        assert client.get("/v1/moderation/persistence").json()["degraded"] is True

    def test_history_is_capped_at_five(self, client) -> None:
        for _ in range(3):
            client.post("/v1/moderation/queue/listing-l2/actions", json={"action": "suspend_listing"})
            client.post("/v1/moderation/queue/listing-l2/actions", json={"action": "unsuspend"})

        entries = client.get("/v1/moderation/queue/listing-l2/history").json()["entries"]

        assert len(entries) == 5
        assert entries[0]["action"] == "Reactivate listing"
