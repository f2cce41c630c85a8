"""Risk classification domain service.

Collaborators use these functions to pre-classify their records before
handing them to the normalizer. The normalizer only reads the resulting
flags (priority, risk_level, needs_review).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from modqueue.domain.models.queue_item import parse_timestamp

# Matched against the lower-cased report reason; the marketplace receives
# reports in French and English.
HIGH_PRIORITY_KEYWORDS: tuple[str, ...] = (
    "fraude",
    "arnaque",
    "violence",
    "menace",
    "inapproprié",
    "fraud",
    "scam",
    "threat",
    "inappropriate",
)
LOW_PRIORITY_KEYWORDS: tuple[str, ...] = (
    "spam",
    "doublon",
    "prix",
    "duplicate",
    "price",
)

BASE_QUALITY_SCORE = 50
SUSPICIOUS_PHONE_PRICE = 10_000
LOW_PRICE = 5_000


def report_priority(reason: str | None) -> str:
    """Classify a report's priority from its reason text.

    Returns:
        "high", "medium" or "low".
    """
    text = (reason or "").lower()
    if any(keyword in text for keyword in HIGH_PRIORITY_KEYWORDS):
        return "high"
    if any(keyword in text for keyword in LOW_PRIORITY_KEYWORDS):
        return "low"
    return "medium"


def classify_user(reports_received: int, trust_score: float) -> str:
    """Classify a user account's risk level.

    Args:
        reports_received: Reports filed against the user.
        trust_score: Trust score in percent (0-100).

    Returns:
        "high", "medium" or "low".
    """
    if reports_received > 2 or trust_score < 30:
        return "high"
    if reports_received > 0 or trust_score < 60:
        return "medium"
    return "low"


@dataclass(frozen=True)
class ListingRiskAssessment:
    """Classification attached to a listing record.

    Attributes:
        quality_score: 0-100 quality estimate
        risk_level: "high", "medium" or "low"
        needs_review: Whether the listing is flagged for review
        has_inconsistency: Active listing owned by a suspended user
    """

    quality_score: int
    risk_level: str
    needs_review: bool
    has_inconsistency: bool

    def as_fields(self) -> dict[str, Any]:
        return {
            "quality_score": self.quality_score,
            "risk_level": self.risk_level,
            "needs_review": self.needs_review,
            "has_inconsistency": self.has_inconsistency,
        }


def listing_quality_score(
    listing: Mapping[str, Any],
    *,
    reports_count: int = 0,
    favorites_count: int = 0,
    now: datetime | None = None,
) -> int:
    """Estimate listing quality; an explicit quality_score on the record wins."""
    explicit = listing.get("quality_score")
    if explicit:
        return int(explicit)

    now = now or datetime.now(timezone.utc)
    images = listing.get("images") or []
    description = listing.get("description") or ""
    views = int(listing.get("views_count") or 0)

    score: float = BASE_QUALITY_SCORE
    score += min(len(images) * 8, 30)
    if len(description) > 100:
        score += 15
    if listing.get("contact_phone"):
        score += 8
    if listing.get("contact_whatsapp"):
        score += 4
    if listing.get("contact_email"):
        score += 3
    score -= reports_count * 15
    score += min(favorites_count * 2, 10)
    score += min(views * 0.05, 5)

    created_at = parse_timestamp(listing.get("created_at"))
    if created_at is not None and (now - created_at).days > 60 and views < 10:
        score -= 10

    return max(0, min(100, round(score)))


def assess_listing(
    listing: Mapping[str, Any],
    *,
    reports_count: int = 0,
    favorites_count: int = 0,
    owner_suspended: bool = False,
    now: datetime | None = None,
) -> ListingRiskAssessment:
    """Classify a listing's risk and review flag.

    Args:
        listing: The listing record.
        reports_count: Reports filed against the listing.
        favorites_count: Times the listing was favorited.
        owner_suspended: Whether the owning account is suspended or banned.
        now: Reference time (defaults to current UTC time).

    Returns:
        ListingRiskAssessment for the record.
    """
    quality = listing_quality_score(
        listing,
        reports_count=reports_count,
        favorites_count=favorites_count,
        now=now,
    )
    has_inconsistency = owner_suspended and listing.get("status") == "active"
    price = float(listing.get("price") or 0)

    if reports_count >= 3 or quality < 30 or has_inconsistency:
        risk_level = "high"
    elif reports_count >= 1 or quality < 60 or price < LOW_PRICE:
        risk_level = "medium"
    else:
        risk_level = "low"

    title = str(listing.get("title") or "").lower()
    needs_review = (
        risk_level == "high"
        or not listing.get("images")
        or reports_count > 0
        or (price < SUSPICIOUS_PHONE_PRICE and "iphone" in title)
        or quality < 40
        or has_inconsistency
    )

    return ListingRiskAssessment(
        quality_score=quality,
        risk_level=risk_level,
        needs_review=needs_review,
        has_inconsistency=has_inconsistency,
    )


__all__ = [
    "HIGH_PRIORITY_KEYWORDS",
    "LOW_PRIORITY_KEYWORDS",
    "ListingRiskAssessment",
    "assess_listing",
    "classify_user",
    "listing_quality_score",
    "report_priority",
]
