"""Point-in-time capture and restoration of secrets.

A snapshot records the values of a set of secret keys at one moment. It
can be saved to disk as JSON and loaded later to put secrets back as they
were, for example after a failed rotation.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from os import PathLike
from typing import Any

from vaultop.provider import Provider


class SnapshotError(Exception):
    """Raised when a snapshot cannot be taken, saved, loaded or restored."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(text: str | None) -> datetime | None:
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass
class Snapshot:
    """Secret values captured from a provider at ``created_at``."""

    secrets: dict[str, str] = field(default_factory=dict)
    provider: str = ""
    created_at: datetime | None = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "provider": self.provider,
            "secrets": dict(self.secrets),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        return cls(
            secrets=dict(data.get("secrets") or {}),
            provider=str(data.get("provider") or ""),
            created_at=_parse_time(data.get("created_at")),
        )


def take(provider: Provider, keys: Sequence[str]) -> Snapshot:
    """Capture the current values of ``keys`` from ``provider``."""
    secrets: dict[str, str] = {}
    for key in keys:
        try:
            secrets[key] = provider.get_secret(key)
        except Exception as exc:
            raise SnapshotError(f'snapshot: get "{key}": {exc}') from exc
    return Snapshot(secrets=secrets, provider=str(getattr(provider, "kind", "")))


def save(snapshot: Snapshot, path: str | PathLike[str]) -> None:
    """Write ``snapshot`` to ``path`` as indented JSON."""
    try:
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(snapshot.to_dict(), handle, indent=2)
            handle.write("\n")
    except OSError as exc:
        raise SnapshotError(f"snapshot: create file: {exc}") from exc


def load(path: str | PathLike[str]) -> Snapshot:
    """Read a snapshot from the JSON file at ``path``."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise SnapshotError(f"snapshot: open file: {exc}") from exc
    try:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return Snapshot.from_dict(data)
    except (ValueError, TypeError, AttributeError) as exc:
        raise SnapshotError(f"snapshot: decode: {exc}") from exc


def restore(provider: Provider, snapshot: Snapshot) -> None:
    """Write every secret of ``snapshot`` back into ``provider``."""
    for key, value in snapshot.secrets.items():
        try:
            provider.set_secret(key, value)
        except Exception as exc:
            raise SnapshotError(f'snapshot: restore "{key}": {exc}') from exc