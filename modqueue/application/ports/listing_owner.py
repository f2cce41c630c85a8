"""Listing owner port.

Self-service pause/resume of a listing by its owner. Implementations
record suspension_type "user" on pause and clear all suspension
provenance fields on resume.
"""

from __future__ import annotations

from typing import Protocol


class ListingOwnerProtocol(Protocol):
    """Protocol for owner-initiated listing lifecycle changes."""

    async def set_paused(self, listing_id: str, paused: bool, reason: str | None = None) -> bool:
        """Pause or resume a listing on behalf of its owner.

        Args:
            listing_id: Listing identity.
            paused: True to pause, False to resume.
            reason: Optional owner-supplied reason.

        Returns:
            True if the listing was updated.
        """
        ...


__all__ = ["ListingOwnerProtocol"]
