"""HTTP surface of the moderation queue."""
