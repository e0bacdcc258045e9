"""Secret provider interface and the built-in in-memory implementation."""

from __future__ import annotations

import abc
from collections.abc import Mapping
from enum import Enum


class ProviderType(str, Enum):
    """A supported secret-management backend."""

    AWS = "aws"
    GCP = "gcp"
    AZURE = "azure"
    VAULT = "vault"

    def __str__(self) -> str:
        return self.value


class SecretNotFoundError(KeyError):
    """Raised when a requested secret does not exist."""

    def __init__(self, kind: ProviderType, name: str) -> None:
        super().__init__(name)
        self.kind = kind
        self.name = name

    def __str__(self) -> str:
        return f'{self.kind}: secret "{self.name}" not found'


class UnsupportedProviderError(ValueError):
    """Raised when asked for a provider type that is not supported."""


class Provider(abc.ABC):
    """Interface for secret management across cloud providers."""

    @abc.abstractmethod
    def get_secret(self, name: str) -> str:
        """Return the value of secret ``name``."""

    @abc.abstractmethod
    def set_secret(self, name: str, value: str) -> None:
        """Store ``value`` under ``name``."""

    @abc.abstractmethod
    def delete_secret(self, name: str) -> None:
        """Remove secret ``name``."""

    @abc.abstractmethod
    def list_secrets(self, prefix: str) -> list[str]:
        """Return the names of all secrets starting with ``prefix``."""


class InMemoryProvider(Provider):
    """A provider that keeps its secrets in a dictionary."""

    def __init__(self, kind: ProviderType | str, opts: Mapping[str, str] | None = None) -> None:
        self.kind = ProviderType(kind)
        self.opts = dict(opts or {})
        self._store: dict[str, str] = {}

    def get_secret(self, name: str) -> str:
        try:
            return self._store[name]
        except KeyError:
            raise SecretNotFoundError(self.kind, name) from None

    def set_secret(self, name: str, value: str) -> None:
        self._store[name] = value

    def delete_secret(self, name: str) -> None:
        if name not in self._store:
            raise SecretNotFoundError(self.kind, name)
        del self._store[name]

    def list_secrets(self, prefix: str = "") -> list[str]:
        return [key for key in self._store if key.startswith(prefix)]


def is_valid_type(kind: ProviderType | str) -> bool:
    """Return True if ``kind`` names a supported provider."""
    try:
        ProviderType(kind)
    except ValueError:
        return False
    return True


def new_provider(kind: ProviderType | str, opts: Mapping[str, str] | None = None) -> Provider:
    """Return a provider implementation for ``kind`` configured with ``opts``."""
    if not is_valid_type(kind):
        raise UnsupportedProviderError(f'unsupported provider: "{kind}"')
    return InMemoryProvider(kind, opts)