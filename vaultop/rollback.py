"""Restoring provider secrets to a previously captured snapshot.

::

    snap = snapshot.load("backup.json")
    results = run_rollback(provider, snap)
    if any_failed(results):
        ...

Dry-run mode previews which keys would be restored without writing any
changes to the provider.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TextIO

from vaultop.provider import Provider
from vaultop.snapshot import Snapshot

_audit = logging.getLogger("vaultop.audit")


@dataclass(frozen=True)
class RollbackResult:
    """Outcome of restoring one key."""

    key: str
    old_value: str = ""
    new_value: str = ""
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def run_rollback(
    provider: Provider,
    snapshot: Snapshot | Mapping[str, str],
    dry_run: bool = False,
) -> list[RollbackResult]:
    """Write every value of ``snapshot`` back into ``provider``.

    Each key is restored independently; failures are recorded in the
    results rather than raised.
    """
    secrets = snapshot.secrets if isinstance(snapshot, Snapshot) else snapshot
    results: list[RollbackResult] = []
    for key, value in secrets.items():
        try:
            old_value = provider.get_secret(key)
        except Exception:
            old_value = ""

        error: Exception | None = None
        if not dry_run:
            try:
                provider.set_secret(key, value)
            except Exception as exc:
                error = exc
                _audit.warning(
                    "rollback key=%s success=false error=rollback set %s: %s",
                    key, _quote(key), exc,
                )
            else:
                _audit.info("rollback key=%s success=true", key)

        results.append(
            RollbackResult(key=key, old_value=old_value, new_value=value, error=error)
        )
    return results


def any_failed(results: Iterable[RollbackResult]) -> bool:
    """Return True if any result carries an error."""
    return any(result.error is not None for result in results)


def write_summary(
    stream: TextIO, results: Iterable[RollbackResult], dry_run: bool = False
) -> None:
    """Write a human-readable rollback summary to ``stream``."""
    rows = list(results)
    mode = "dry-run" if dry_run else "applied"
    stream.write(f"Rollback summary [{mode}]\n")
    stream.write(f"{'KEY':<30} {'STATUS':<10} DETAIL\n")
    for row in rows:
        if row.error is not None:
            status = "FAILED"
            detail = f"rollback set {_quote(row.key)}: {row.error}"
        elif dry_run:
            status = "would restore"
            detail = f"{_quote(row.old_value)} -> {_quote(row.new_value)}"
        else:
            status = "ok"
            detail = ""
        stream.write(f"{row.key:<30} {status:<10} {detail}\n")
    failed = sum(1 for row in rows if row.error is not None)
    stream.write(f"\nTotal: {len(rows)}  Failed: {failed}\n")