"""Unit tests for owner pause/resume of listings."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from modqueue.application.services.self_service_suspension_service import (
    OWNER_PAUSE_REASON,
    SelfServiceSuspensionService,
)
from modqueue.domain.errors import SuspensionNotReversibleError


@pytest.fixture
def service(listings) -> SelfServiceSuspensionService:
    return SelfServiceSuspensionService(listings)


class TestPause:
    """Tests for pause()."""

    async def test_pause_tags_the_suspension_as_user(self, service, listings) -> None:
        listing = listings.get("l1")

        assert await service.pause(listing) is True

        paused = listings.get("l1")
        assert paused["status"] == "suspended"
        assert paused["suspension_type"] == "user"
        assert paused["suspension_reason"] == OWNER_PAUSE_REASON

    async def test_pause_ignores_inactive_listings(self) -> None:
        port = AsyncMock()
        service = SelfServiceSuspensionService(port)
        assert await service.pause({"id": "l9", "status": "suspended"}) is False
        port.set_paused.assert_not_awaited()


class TestResume:
    """Tests for resume()."""

    async def test_owner_resumes_own_pause(self, service, listings) -> None:
        assert await service.resume(listings.get("l4")) is True
        resumed = listings.get("l4")
        assert resumed["status"] == "active"
        assert resumed["suspension_type"] is None

    async def test_pause_then_resume_round_trip(self, service, listings) -> None:
        await service.pause(listings.get("l1"))
        assert await service.resume(listings.get("l1")) is True
        assert listings.get("l1")["status"] == "active"

    async def test_admin_suspension_routes_to_support(self, service, listings) -> None:
        with pytest.raises(SuspensionNotReversibleError) as exc_info:
            await service.resume(listings.get("l3"))

        assert exc_info.value.contact_support is True
        assert "moderator-1" in exc_info.value.explanation
        assert listings.get("l3")["status"] == "suspended"

    async def test_system_suspension_routes_to_support(self) -> None:
        port = AsyncMock()
        service = SelfServiceSuspensionService(port)
        listing = {"id": "l8", "status": "suspended", "suspension_type": "system"}

        with pytest.raises(SuspensionNotReversibleError):
            await service.resume(listing)
        port.set_paused.assert_not_awaited()

    async def test_resume_ignores_active_listings(self, service, listings) -> None:
        assert await service.resume(listings.get("l1")) is False

    def test_notice_passthrough(self, service, listings) -> None:
        notice = service.notice(listings.get("l4"))
        assert notice.can_reactivate is True
