"""Numbered version history of secret values.

Each ``record`` call appends a new entry for a key, numbered from 1.
``get`` returns a specific version, ``latest`` the most recent one and
``list`` the full history. The store is safe for concurrent use.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone


class VersionNotFoundError(LookupError):
    """Raised when a key or a version of it does not exist."""

    def __init__(self, key: str, version: int | None = None) -> None:
        detail = f"key={key}" if version is None else f"key={key} version={version}"
        super().__init__(f"version: not found: {detail}")
        self.key = key
        self.version = version


@dataclass(frozen=True)
class VersionEntry:
    """One recorded value of a secret."""

    version: int
    value: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class VersionStore:
    """In-memory versioned history of secrets."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, list[VersionEntry]] = {}

    def record(self, key: str, value: str) -> VersionEntry:
        """Append ``value`` as the next version of ``key`` and return the entry."""
        with self._lock:
            history = self._records.setdefault(key, [])
            entry = VersionEntry(version=len(history) + 1, value=value)
            history.append(entry)
            return entry

    def get(self, key: str, version: int) -> VersionEntry:
        """Return version ``version`` of ``key``."""
        with self._lock:
            history = self._records.get(key, [])
            if not 1 <= version <= len(history):
                raise VersionNotFoundError(key, version)
            return history[version - 1]

    def latest(self, key: str) -> VersionEntry:
        """Return the most recent entry for ``key``."""
        with self._lock:
            history = self._records.get(key)
            if not history:
                raise VersionNotFoundError(key)
            return history[-1]

    def list(self, key: str) -> list[VersionEntry]:
        """Return a copy of every entry for ``key`` in ascending version order."""
        with self._lock:
            return [*self._records.get(key, [])]

    def count(self, key: str) -> int:
        """Return the number of versions stored for ``key``."""
        with self._lock:
            return len(self._records.get(key, []))