"""Configuration for the moderation queue."""

from modqueue.config.moderation_config import ModerationConfig

__all__ = ["ModerationConfig"]
