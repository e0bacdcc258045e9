"""Building blocks for secret operations: in-memory providers, rotation, HMAC signing, rate limits, redaction, snapshots and webhooks."""

__version__ = "0.1.0"