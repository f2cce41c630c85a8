"""Domain layer: moderation models, pure services and errors."""
