"""Secret key resolution with aliases and ordered fallbacks."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol


class NotResolvedError(LookupError):
    """Raised when no alias or fallback of a key yields a secret."""

    def __init__(self, key: str) -> None:
        super().__init__(f"resolver: key could not be resolved: {key}")
        self.key = key


class SecretGetter(Protocol):
    def get(self, key: str) -> str: ...


class Resolver:
    """Resolves logical keys through aliases, then tries fallbacks in order."""

    def __init__(
        self,
        provider: SecretGetter,
        aliases: Mapping[str, str] | None = None,
        fallbacks: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self.provider = provider
        self.aliases = dict(aliases or {})
        self.fallbacks = {key: list(keys) for key, keys in (fallbacks or {}).items()}

    def candidates(self, key: str) -> list[str]:
        """Return the keys to try for ``key``, in order."""
        return [self.aliases.get(key, key), *self.fallbacks.get(key, [])]

    def resolve(self, key: str) -> str:
        """Return the first value found among the candidates of ``key``."""
        for candidate in self.candidates(key):
            try:
                return self.provider.get(candidate)
            except Exception:
                continue
        raise NotResolvedError(key)