"""Entity normalizer domain service.

Maps the three source record shapes (report, listing, user) into the
QueueItem variant. The inclusion predicates read risk flags that the
owning collaborator has already classified; nothing is re-scored here.

Inclusion:
- Reports: status in {pending, in_review}
- Listings: needs_review, risk_level == "high", or status == "suspended"
- Users: risk_level == "high" or status == "suspended"

Ordering: created_at descending, ties broken by queue_id so render order
is stable across re-normalizations with identical timestamps.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from structlog import get_logger

from modqueue.domain.models.queue_item import (
    QueueItem,
    QueueKind,
    make_queue_id,
    parse_timestamp,
)
from modqueue.domain.services.display_format import format_date

logger = get_logger(__name__)

Record = Mapping[str, Any]

OPEN_REPORT_STATUSES: frozenset[str] = frozenset({"pending", "in_review"})
LOW_TRUST_THRESHOLD = 60


def is_queued_report(report: Record) -> bool:
    return report.get("status") in OPEN_REPORT_STATUSES


def is_queued_listing(listing: Record) -> bool:
    return bool(
        listing.get("needs_review")
        or listing.get("risk_level") == "high"
        or listing.get("status") == "suspended"
    )


def is_queued_user(user: Record) -> bool:
    return user.get("risk_level") == "high" or user.get("status") == "suspended"


def user_moderation_reason(user: Record) -> str:
    """Explain why a user account is in the queue."""
    suspended_until = parse_timestamp(user.get("suspended_until"))
    if user.get("status") == "suspended" and suspended_until is not None:
        return f"Account suspended until {format_date(suspended_until)}"
    reports_received = int(user.get("reports_received") or 0)
    if reports_received > 0:
        return f"{reports_received} report(s) received"
    trust_score = user.get("trust_score")
    if isinstance(trust_score, (int, float)) and trust_score < LOW_TRUST_THRESHOLD:
        return f"Low trust score: {trust_score}%"
    return "Administrator account review"


def _item(
    kind: QueueKind,
    record: Record,
    *,
    title: Any,
    subject: Any,
    reason: Any,
) -> QueueItem:
    # Collaborators may hand back non-string display values
    item_id = str(record["id"])
    return QueueItem(
        queue_id=make_queue_id(kind, item_id),
        kind=kind,
        item_id=item_id,
        title=str(title),
        subject=str(subject),
        status=str(record.get("status") or ""),
        created_at=parse_timestamp(record.get("created_at")),
        reason=str(reason),
        raw=MappingProxyType(record) if isinstance(record, dict) else record,
    )


def report_to_item(report: Record) -> QueueItem:
    return _item(
        QueueKind.REPORT,
        report,
        title=report.get("reason") or "Report",
        subject=(
            report.get("listing_title")
            or report.get("reported_user_name")
            or "Unknown target"
        ),
        reason=report.get("description") or report.get("reason") or "No details",
    )


def listing_to_item(listing: Record) -> QueueItem:
    return _item(
        QueueKind.LISTING,
        listing,
        title=listing.get("title") or "Untitled listing",
        subject=listing.get("merchant_name") or "Unknown merchant",
        reason=(
            listing.get("moderation_notes")
            or listing.get("suspension_reason")
            or "Quality/moderation review"
        ),
    )


def user_to_item(user: Record) -> QueueItem:
    email = user.get("email") or ""
    return _item(
        QueueKind.USER,
        user,
        title=user.get("full_name") or email or "Unknown user",
        subject=email,
        reason=user_moderation_reason(user),
    )


def _collect(
    records: Iterable[Record],
    kind: QueueKind,
    include,
    convert,
) -> list[QueueItem]:
    items: list[QueueItem] = []
    for record in records:
        if not record.get("id"):
            logger.warning("Skipping source record without id", kind=kind.value)
            continue
        if include(record):
            items.append(convert(record))
    return items


def normalize(
    reports: Iterable[Record],
    listings: Iterable[Record],
    users: Iterable[Record],
) -> list[QueueItem]:
    """Merge the three record kinds into one ordered queue.

    Args:
        reports: Report records (already priority-classified).
        listings: Listing records (already risk-classified/flagged).
        users: User records (already risk-classified).

    Returns:
        Exactly one QueueItem per qualifying record, newest first.
    """
    items = [
        *_collect(reports, QueueKind.REPORT, is_queued_report, report_to_item),
        *_collect(listings, QueueKind.LISTING, is_queued_listing, listing_to_item),
        *_collect(users, QueueKind.USER, is_queued_user, user_to_item),
    ]
    items.sort(key=QueueItem.sort_key)
    return items


__all__ = [
    "OPEN_REPORT_STATUSES",
    "is_queued_listing",
    "is_queued_report",
    "is_queued_user",
    "listing_to_item",
    "normalize",
    "report_to_item",
    "user_moderation_reason",
    "user_to_item",
]
