"""
Pytest configuration and shared fixtures for the moderation queue tests.

Testing Standards:
- All async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Collaborators and audit backends are the in-memory stubs from
  modqueue.infrastructure.stubs, switched to fail on demand
"""

from __future__ import annotations

from typing import Any

import pytest
from prometheus_client import CollectorRegistry

from modqueue.application.services.audit_trail_service import AuditTrailStore
from modqueue.application.services.moderation_queue_service import (
    ModerationQueueController,
)
from modqueue.config import ModerationConfig
from modqueue.domain.models.queue_item import QueueKind
from modqueue.infrastructure.monitoring.metrics import ModerationMetricsCollector
from modqueue.infrastructure.stubs import (
    DurableAuditBackendStub,
    InMemoryAuditCacheStub,
    ListingCollaboratorStub,
    ReportCollaboratorStub,
    UserCollaboratorStub,
)

CACHE_KEY = ModerationConfig().cache_key


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    from modqueue import __version__

    return __version__


@pytest.fixture
def report_records() -> list[dict[str, Any]]:
    """Two open reports and one resolved report."""
    return [
        {
            "id": "r1",
            "status": "pending",
            "reason": "Fraud suspected",
            "description": "Seller asked for prepayment by mobile money",
            "listing_title": "iPhone 13",
            "created_at": "2026-03-10T10:00:00Z",
        },
        {
            "id": "r2",
            "status": "resolved",
            "reason": "Spam",
            "created_at": "2026-03-11T10:00:00Z",
        },
        {
            "id": "r3",
            "status": "in_review",
            "reason": "Spam",
            "reported_user_name": "Awa Traore",
            "created_at": "2026-03-12T08:00:00Z",
        },
    ]


@pytest.fixture
def listing_records() -> list[dict[str, Any]]:
    """One healthy listing, one needing review and two suspended ones."""
    return [
        {
            "id": "l1",
            "status": "active",
            "title": "Toyota Corolla 2015",
            "merchant_name": "Garage Central",
            "price": 4_500_000,
            "images": ["a.jpg", "b.jpg", "c.jpg", "d.jpg"],
            "description": "x" * 150,
            "contact_phone": "+22670000000",
            "views_count": 200,
            "created_at": "2026-03-09T09:00:00Z",
        },
        {
            "id": "l2",
            "status": "active",
            "title": "iPhone 14 Pro",
            "merchant_name": "Phone Shop",
            "price": 5_000,
            "images": [],
            "created_at": "2026-03-08T12:00:00Z",
        },
        {
            "id": "l3",
            "status": "suspended",
            "title": "Designer handbag",
            "merchant_name": "Boutique K",
            "price": 20_000,
            "images": ["bag.jpg"],
            "suspension_type": "admin",
            "suspended_by": "moderator-1",
            "suspension_reason": "Counterfeit",
            "created_at": "2026-03-07T12:00:00Z",
        },
        {
            "id": "l4",
            "status": "suspended",
            "title": "Sofa",
            "merchant_name": "Maison Plus",
            "price": 80_000,
            "images": ["sofa.jpg"],
            "suspension_type": "user",
            "created_at": "2026-03-06T12:00:00Z",
        },
    ]


@pytest.fixture
def user_records() -> list[dict[str, Any]]:
    """One high-risk user, one suspended user and one healthy user."""
    return [
        {
            "id": "u1",
            "status": "active",
            "full_name": "Issa Ouedraogo",
            "email": "issa@example.com",
            "reports_received": 3,
            "trust_score": 80,
            "created_at": "2026-03-05T12:00:00Z",
        },
        {
            "id": "u2",
            "status": "suspended",
            "full_name": "Mariam Kone",
            "email": "mariam@example.com",
            "suspension_type": "admin",
            "suspended_until": "2026-12-01T00:00:00Z",
            "trust_score": 40,
            "created_at": "2026-03-04T12:00:00Z",
        },
        {
            "id": "u3",
            "status": "active",
            "full_name": "Paul Sawadogo",
            "email": "paul@example.com",
            "reports_received": 0,
            "trust_score": 95,
            "created_at": "2026-03-03T12:00:00Z",
        },
    ]


@pytest.fixture
def reports(report_records) -> ReportCollaboratorStub:
    return ReportCollaboratorStub(report_records)


@pytest.fixture
def listings(listing_records) -> ListingCollaboratorStub:
    return ListingCollaboratorStub(listing_records, actor_id="admin-7")


@pytest.fixture
def users(user_records) -> UserCollaboratorStub:
    return UserCollaboratorStub(user_records, actor_id="admin-7")


@pytest.fixture
def collaborators(reports, listings, users) -> dict[QueueKind, Any]:
    return {
        QueueKind.REPORT: reports,
        QueueKind.LISTING: listings,
        QueueKind.USER: users,
    }


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def metrics(registry) -> ModerationMetricsCollector:
    """Metrics collector on an isolated registry."""
    return ModerationMetricsCollector(registry=registry)


@pytest.fixture
def durable_backend() -> DurableAuditBackendStub:
    return DurableAuditBackendStub()


@pytest.fixture
def audit_cache() -> InMemoryAuditCacheStub:
    return InMemoryAuditCacheStub()


@pytest.fixture
def audit_store(audit_cache, durable_backend, metrics) -> AuditTrailStore:
    return AuditTrailStore(
        audit_cache,
        durable_backend,
        cache_key=CACHE_KEY,
        actor_id="admin-7",
        metrics=metrics,
    )


@pytest.fixture
async def controller(collaborators, audit_store, metrics) -> ModerationQueueController:
    """Started controller over the stub collaborators."""
    controller = ModerationQueueController(collaborators, audit_store, metrics=metrics)
    await controller.start()
    return controller
