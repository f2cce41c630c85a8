"""Port interfaces for the moderation queue."""

from modqueue.application.ports.audit_backend import (
    DurableAuditBackendProtocol,
    LocalAuditCacheProtocol,
)
from modqueue.application.ports.listing_owner import ListingOwnerProtocol
from modqueue.application.ports.moderation_collaborator import (
    ModerationCollaboratorProtocol,
)

__all__ = [
    "DurableAuditBackendProtocol",
    "ListingOwnerProtocol",
    "LocalAuditCacheProtocol",
    "ModerationCollaboratorProtocol",
]
