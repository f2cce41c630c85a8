"""Display formatting helpers.

Pure helpers shared by the normalizer, the suspension resolver and the
HTTP surface. Colour values are utility-class strings consumed as-is by
the front end.
"""

from __future__ import annotations

from datetime import datetime, timezone

_LEVEL_COLORS: dict[str, str] = {
    "high": "text-red-600 bg-red-50 border-red-200",
    "medium": "text-yellow-600 bg-yellow-50 border-yellow-200",
    "low": "text-green-600 bg-green-50 border-green-200",
}

_STATUS_LABELS: dict[str, str] = {
    "pending": "Pending",
    "in_review": "In review",
    "active": "Active",
    "suspended": "Suspended",
    "resolved": "Resolved",
    "dismissed": "Dismissed",
    "pending_verification": "Pending verification",
}


def priority_color(priority: str) -> str:
    """Map a report priority to its display colour (unknown -> medium)."""
    return _LEVEL_COLORS.get(priority, _LEVEL_COLORS["medium"])


def risk_level_color(risk_level: str) -> str:
    """Map a risk level to its display colour (unknown -> medium)."""
    return _LEVEL_COLORS.get(risk_level, _LEVEL_COLORS["medium"])


def status_label(status: str) -> str:
    """Human-readable label for a lifecycle status; unknown values pass through."""
    return _STATUS_LABELS.get(status, status)


def format_date(value: datetime) -> str:
    """Absolute date, e.g. "2026-03-14"."""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d")


def format_response_time(hours: float) -> str:
    """Compact elapsed time: hours below a day, days below a week, then weeks."""
    if hours < 24:
        return f"{round(hours)}h"
    if hours < 24 * 7:
        return f"{round(hours / 24)}d"
    return f"{round(hours / (24 * 7))}w"


def format_relative_date(value: datetime, now: datetime | None = None) -> str:
    """Relative date such as "just now", "5 minutes ago" or "3 days ago".

    Dates older than 30 days fall back to the absolute format.
    """
    now = now or datetime.now(timezone.utc)
    seconds = (now - value).total_seconds()
    if seconds < 60:
        return "just now"
    minutes = int(seconds // 60)
    if minutes < 60:
        return f"{minutes} minute{'s' if minutes != 1 else ''} ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    days = hours // 24
    if days <= 30:
        return f"{days} day{'s' if days != 1 else ''} ago"
    return format_date(value)


__all__ = [
    "format_date",
    "format_relative_date",
    "format_response_time",
    "priority_color",
    "risk_level_color",
    "status_label",
]
