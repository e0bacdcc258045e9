"""Rotation scheduling policies for secrets.

A SchedulePolicy says how many days may pass between rotations and when
the secret was last rotated. ``check_all`` evaluates a list of
SecretSchedule entries and ``filter_due`` keeps those needing rotation.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


class ScheduleError(ValueError):
    """Raised when a rotation policy is misconfigured."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class SchedulePolicy:
    """How often a secret is rotated and when it last was."""

    interval_days: int = 0
    last_rotated: datetime | None = None

    def is_due(self) -> bool:
        """Return True if a rotation is due now."""
        return self.is_due_at(_utcnow())

    def is_due_at(self, t: datetime) -> bool:
        """Return True if a rotation is due at ``t``."""
        if self.interval_days <= 0:
            return False
        if self.last_rotated is None:
            return True
        upcoming = _aware(self.last_rotated) + timedelta(days=self.interval_days)
        return _aware(t) >= upcoming

    def next_rotation(self) -> datetime:
        """Return when the next rotation is due."""
        if self.interval_days <= 0:
            raise ScheduleError("schedule: interval_days must be greater than 0")
        if self.last_rotated is None:
            return _utcnow()
        return _aware(self.last_rotated) + timedelta(days=self.interval_days)

    def validate(self) -> None:
        """Raise ScheduleError if the policy is misconfigured."""
        if self.interval_days < 0:
            raise ScheduleError("schedule: interval_days cannot be negative")


@dataclass(frozen=True)
class SecretSchedule:
    """A secret key paired with its rotation policy."""

    key: str
    policy: SchedulePolicy


@dataclass(frozen=True)
class DueResult:
    """Whether one secret is due, and when it next will be."""

    key: str
    due: bool
    next_rotation: datetime | None = None


def check_all(schedules: Iterable[SecretSchedule]) -> list[DueResult]:
    """Evaluate each schedule; raise ScheduleError on the first invalid policy."""
    results: list[DueResult] = []
    for schedule in schedules:
        try:
            schedule.policy.validate()
        except ScheduleError as exc:
            raise ScheduleError(f'schedule: key "{schedule.key}": {exc}') from exc
        try:
            upcoming: datetime | None = schedule.policy.next_rotation()
        except ScheduleError:
            upcoming = None
        results.append(
            DueResult(key=schedule.key, due=schedule.policy.is_due(), next_rotation=upcoming)
        )
    return results


def filter_due(results: Iterable[DueResult]) -> list[DueResult]:
    """Return only the results that are due."""
    return [result for result in results if result.due]