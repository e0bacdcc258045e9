"""Secret rotation.

A Rotator is built from a provider and RotationOptions; ``rotate`` is then
called with a list of secret IDs. Each ID gets a new value from a value
generator (by default a random base64 string made from 32 bytes), which is
written back through the provider unless ``dry_run`` is set::

    rotator = Rotator(new_provider(ProviderType.AWS), RotationOptions())
    for result in rotator.rotate(["db/password", "api/key"]):
        if result.error is not None:
            ...
"""

from __future__ import annotations

import base64
import secrets
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from vaultop.provider import Provider

DEFAULT_SECRET_LENGTH = 32

ValueGenerator = Callable[[str], str]


class GenerationError(Exception):
    """Raised when a new secret value cannot be produced."""


class PolicyError(ValueError):
    """Raised when a rotation policy is not usable."""


def _random_base64(n: int) -> str:
    return base64.urlsafe_b64encode(secrets.token_bytes(n)).decode("ascii")


def default_generator(secret_id: str) -> str:
    """Return a random base64url string made from 32 random bytes."""
    return _random_base64(DEFAULT_SECRET_LENGTH)


def fixed_generator(value: str) -> ValueGenerator:
    """Return a generator that always produces ``value``."""

    def generate(secret_id: str) -> str:
        return value

    return generate


def error_generator(message: str) -> ValueGenerator:
    """Return a generator that always raises GenerationError with ``message``."""

    def generate(secret_id: str) -> str:
        raise GenerationError(message)

    return generate


def random_bytes_generator(n: int) -> ValueGenerator:
    """Return a generator of random base64url strings made from ``n`` bytes."""
    if n <= 0:
        raise ValueError(f"rotation: random_bytes_generator requires n > 0, got {n}")

    def generate(secret_id: str) -> str:
        return _random_base64(n)

    return generate


@dataclass(frozen=True)
class RotationPolicy:
    """Rotation behaviour for one secret.

    A zero ``interval`` disables automatic rotation; a zero ``length``
    means DEFAULT_SECRET_LENGTH.
    """

    key: str = ""
    interval: timedelta = timedelta(0)
    length: int = 0

    def validate(self) -> None:
        """Raise PolicyError if the policy is not usable."""
        if not self.key:
            raise PolicyError("rotation policy: key must not be empty")
        if self.length < 0:
            raise PolicyError("rotation policy: length must be non-negative")

    def effective_length(self) -> int:
        """Return the secret length to use, falling back to the default."""
        return self.length or DEFAULT_SECRET_LENGTH


@dataclass(frozen=True)
class RotationResult:
    """Outcome of rotating one secret."""

    secret_id: str
    provider: str
    rotated_at: datetime
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RotationOptions:
    """Rotation settings; ``generator`` defaults to ``default_generator``."""

    dry_run: bool = False
    generator: ValueGenerator | None = field(default=None)


class Rotator:
    """Replaces secret values with freshly generated ones."""

    def __init__(self, provider: Provider, options: RotationOptions | None = None) -> None:
        self.provider = provider
        self.options = options or RotationOptions()
        self.generator: ValueGenerator = self.options.generator or default_generator

    def rotate(self, secret_ids: Iterable[str]) -> list[RotationResult]:
        """Rotate each secret and return one result per ID, in order."""
        kind = str(getattr(self.provider, "kind", ""))
        results: list[RotationResult] = []
        for secret_id in secret_ids:
            rotated_at = datetime.now(timezone.utc)
            error: Exception | None = None
            try:
                new_value = self.generator(secret_id)
            except Exception as exc:
                error = GenerationError(f"generate: {exc}")
                error.__cause__ = exc
            else:
                if not self.options.dry_run:
                    try:
                        self.provider.set_secret(secret_id, new_value)
                    except Exception as exc:
                        error = exc
            results.append(
                RotationResult(
                    secret_id=secret_id, provider=kind, rotated_at=rotated_at, error=error
                )
            )
        return results