"""Self-service suspension service.

Lets a listing owner pause and resume their own listing. Resuming is
gated by the suspension authorization resolver: suspensions imposed by an
administrator or by the system cannot be lifted here, and the owner is
routed to support instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from structlog import get_logger

from modqueue.domain.errors import SuspensionNotReversibleError
from modqueue.domain.services.suspension_authorization import (
    SuspensionNotice,
    can_reverse,
    suspension_notice,
)

if TYPE_CHECKING:
    from modqueue.application.ports.listing_owner import ListingOwnerProtocol

logger = get_logger(__name__)

OWNER_PAUSE_REASON = "Paused by owner"


class SelfServiceSuspensionService:
    """Owner-facing pause/resume of listings."""

    def __init__(self, listings: ListingOwnerProtocol) -> None:
        """Initialize the service.

        Args:
            listings: Port applying owner lifecycle changes.
        """
        self._listings = listings

    def notice(self, listing: Mapping[str, Any]) -> SuspensionNotice:
        """Suspension notice to render for the owner."""
        return suspension_notice(listing)

    async def pause(self, listing: Mapping[str, Any], reason: str | None = None) -> bool:
        """Pause an active listing.

        Returns:
            True if the listing was paused; False if it is not active or
            the update failed.
        """
        log = logger.bind(listing_id=listing.get("id"))
        if listing.get("status") != "active":
            log.info("Pause ignored, listing not active", status=listing.get("status"))
            return False
        paused = await self._listings.set_paused(
            str(listing["id"]), True, reason or OWNER_PAUSE_REASON
        )
        log.info("Owner pause requested", applied=paused)
        return paused

    async def resume(self, listing: Mapping[str, Any]) -> bool:
        """Resume a paused listing.

        Returns:
            True if the listing was reactivated; False if it is not
            suspended or the update failed.

        Raises:
            SuspensionNotReversibleError: If an administrator or the system
                imposed the suspension.
        """
        log = logger.bind(listing_id=listing.get("id"))
        if listing.get("status") != "suspended":
            log.info("Resume ignored, listing not suspended")
            return False
        if not can_reverse(listing):
            notice = suspension_notice(listing)
            log.warning("Owner resume refused", suspension_type=listing.get("suspension_type"))
            raise SuspensionNotReversibleError(
                str(listing.get("id")),
                notice.message,
                contact_support=notice.contact_support,
            )
        resumed = await self._listings.set_paused(str(listing["id"]), False)
        log.info("Owner resume requested", applied=resumed)
        return resumed


__all__ = ["OWNER_PAUSE_REASON", "SelfServiceSuspensionService"]
