"""Suspension authorization domain service.

Decides whether a suspension may be reversed and explains who imposed it.

Rules:
- Only a suspended entity can be reactivated.
- The owner-facing reactivation action may lift a suspension iff its
  suspension_type is absent, "none" or "user".
- "admin" and "system" suspensions are immutable to that action. The
  actor is routed to support contact instead of an action button.
- Records without a suspension_type predate provenance tagging and are
  treated as "user".
- A present but unrecognised suspension_type is never owner-reversible.

This module MUST be consulted before a reactivation action is exposed or
executed. It has no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from modqueue.domain.models.suspension import ActorRole, SuspensionState, SuspensionType
from modqueue.domain.services.display_format import format_date

# Provenance tags the owner-facing reactivation may lift
OWNER_REVERSIBLE_TYPES: frozenset[SuspensionType | None] = frozenset(
    {None, SuspensionType.NONE, SuspensionType.USER}
)


@dataclass(frozen=True)
class SuspensionNotice:
    """Actor-facing explanation of a suspension.

    Attributes:
        message: Provenance statement (who, until when, why)
        can_reactivate: Whether the owner may reactivate it
        is_admin_action: Whether an administrator imposed it
        contact_support: Whether to show the support-contact affordance
    """

    message: str
    can_reactivate: bool
    is_admin_action: bool
    contact_support: bool


def can_reverse(entity: Any) -> bool:
    """Check whether the owner-facing reactivation may lift a suspension.

    Args:
        entity: Mapping, object or SuspensionState with status and
            suspension_type.

    Returns:
        False unless the entity is suspended; otherwise True iff the
        suspension_type is absent, "none" or "user". Unrecognised types
        are not reversible.
    """
    state = SuspensionState.from_record(entity)
    if not state.is_suspended:
        return False
    return state.suspension_type in OWNER_REVERSIBLE_TYPES


def may_reactivate(entity: Any, actor_role: ActorRole) -> bool:
    """Check whether an actor may execute a reactivation on an entity.

    Administrators acting from the moderation queue may lift any
    suspension; owners are bound by can_reverse.

    Args:
        entity: Entity with suspension attributes.
        actor_role: Role of the acting principal.

    Returns:
        True if the reactivation may be executed.
    """
    state = SuspensionState.from_record(entity)
    if not state.is_suspended:
        return False
    if actor_role is ActorRole.ADMINISTRATOR:
        return True
    return can_reverse(state)


def explain(entity: Any) -> str:
    """Produce a human-readable provenance statement for a suspension.

    Args:
        entity: Entity with suspension attributes.

    Returns:
        Statement naming who suspended it, until when, and why.
    """
    return suspension_notice(entity).message


def suspension_notice(entity: Any) -> SuspensionNotice:
    """Build the actor-facing suspension notice.

    Args:
        entity: Entity with suspension attributes.

    Returns:
        SuspensionNotice; non-reversible cases set contact_support.
    """
    state = SuspensionState.from_record(entity)
    if not state.is_suspended:
        return SuspensionNotice(
            message="Not suspended.",
            can_reactivate=False,
            is_admin_action=False,
            contact_support=False,
        )

    reason = f" Reason: {state.suspension_reason}." if state.suspension_reason else ""

    if state.suspension_type is SuspensionType.ADMIN:
        until = (
            f"until {format_date(state.suspended_until)}"
            if state.suspended_until
            else "for an indefinite period"
        )
        by = f" ({state.suspended_by})" if state.suspended_by else ""
        return SuspensionNotice(
            message=f"Suspended by an administrator{by} {until}.{reason}",
            can_reactivate=False,
            is_admin_action=True,
            contact_support=True,
        )

    if state.suspension_type is SuspensionType.UNKNOWN:
        return SuspensionNotice(
            message=f"Suspended.{reason} Contact support to request a review.",
            can_reactivate=False,
            is_admin_action=False,
            contact_support=True,
        )

    if state.suspension_type is SuspensionType.SYSTEM:
        return SuspensionNotice(
            message=(
                "Suspended automatically by the system."
                f"{reason} Contact support to request a review."
            ),
            can_reactivate=False,
            is_admin_action=False,
            contact_support=True,
        )

    return SuspensionNotice(
        message="Paused by its owner. It can be reactivated at any time.",
        can_reactivate=True,
        is_admin_action=False,
        contact_support=False,
    )


__all__ = [
    "OWNER_REVERSIBLE_TYPES",
    "SuspensionNotice",
    "can_reverse",
    "explain",
    "may_reactivate",
    "suspension_notice",
]
