"""In-memory implementations of the application ports.

Used by the unit tests and by the bootstrap when no collaborators are
provided (demo mode).
"""

from modqueue.infrastructure.stubs.audit_backend_stub import (
    DurableAuditBackendStub,
    InMemoryAuditCacheStub,
)
from modqueue.infrastructure.stubs.moderation_collaborator_stub import (
    CollaboratorStubError,
    InMemoryCollaboratorStub,
    ListingCollaboratorStub,
    ReportCollaboratorStub,
    UserCollaboratorStub,
)

__all__ = [
    "CollaboratorStubError",
    "DurableAuditBackendStub",
    "InMemoryAuditCacheStub",
    "InMemoryCollaboratorStub",
    "ListingCollaboratorStub",
    "ReportCollaboratorStub",
    "UserCollaboratorStub",
]
