"""Bootstrap wiring for the moderation queue."""

from modqueue.bootstrap.moderation import (
    build_audit_store,
    build_moderation_controller,
    get_moderation_controller,
    reset_moderation,
    set_moderation_controller,
)

__all__ = [
    "build_audit_store",
    "build_moderation_controller",
    "get_moderation_controller",
    "reset_moderation",
    "set_moderation_controller",
]
