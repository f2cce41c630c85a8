"""
modqueue - Unified marketplace moderation queue

Merges user reports, listings and user accounts into a single prioritized
work queue, applies authorization-gated moderation actions to them
(individually or in bulk), and records every decision into an audit trail
that survives the loss of its durable store.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
