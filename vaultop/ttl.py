"""Expiry tracking for secrets.

A TTLMap stores an expiry time per key, reports whether a key has
expired, and lists every expired key. It is not thread-safe; callers
sharing one across threads must synchronise access themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


class ExpiredError(Exception):
    """Raised when a secret has passed its expiry time."""

    def __init__(self, key: str) -> None:
        super().__init__("secret has expired")
        self.key = key


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TTLEntry:
    """Expiry metadata for one secret key."""

    key: str
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True if ``now`` is after the expiry time."""
        return (now or _utcnow()) > self.expires_at

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "expires_at": self.expires_at.isoformat()}


class TTLMap:
    """Expiry entries keyed by secret name."""

    def __init__(self) -> None:
        self._entries: dict[str, TTLEntry] = {}

    def set(self, key: str, ttl: timedelta, now: datetime | None = None) -> TTLEntry:
        """Make ``key`` expire ``ttl`` after ``now`` and return the entry."""
        entry = TTLEntry(key=key, expires_at=(now or _utcnow()) + ttl)
        self._entries[key] = entry
        return entry

    def get(self, key: str) -> TTLEntry | None:
        """Return the entry for ``key``, or None if there is none."""
        return self._entries.get(key)

    def delete(self, key: str) -> None:
        """Remove the entry for ``key`` if present."""
        self._entries.pop(key, None)

    def expired(self, now: datetime | None = None) -> list[str]:
        """Return every key that has expired as of ``now``."""
        now = now or _utcnow()
        return [key for key, entry in self._entries.items() if entry.is_expired(now)]

    def check(self, key: str, now: datetime | None = None) -> None:
        """Raise ExpiredError if ``key`` is tracked and has expired."""
        entry = self._entries.get(key)
        if entry is not None and entry.is_expired(now):
            raise ExpiredError(key)