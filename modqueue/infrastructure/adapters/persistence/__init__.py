"""Audit trail persistence adapters."""

from modqueue.infrastructure.adapters.persistence.http_audit_backend import (
    HttpDurableAuditBackend,
)
from modqueue.infrastructure.adapters.persistence.json_file_audit_cache import (
    JsonFileAuditCache,
)

__all__ = ["HttpDurableAuditBackend", "JsonFileAuditCache"]
