"""Lookup and filtering of secrets held by a provider.

Secrets can be filtered by key prefix, key substring and value substring,
so operators can find secrets without knowing their exact names.
"""

from __future__ import annotations

from dataclasses import dataclass

from vaultop.provider import Provider


@dataclass(frozen=True)
class SearchResult:
    """One matched secret; ``value`` is filled only for value searches."""

    key: str
    value: str = ""


@dataclass(frozen=True)
class SearchOptions:
    """Search filters; empty strings are not applied."""

    prefix: str = ""
    contains: str = ""
    value_contains: str = ""


def find(provider: Provider, options: SearchOptions | None = None) -> list[SearchResult]:
    """Return the secrets of ``provider`` that match every filter in ``options``."""
    options = options or SearchOptions()
    results: list[SearchResult] = []
    for key in provider.list_secrets(""):
        if options.prefix and not key.startswith(options.prefix):
            continue
        if options.contains and options.contains not in key:
            continue
        if not options.value_contains:
            results.append(SearchResult(key=key))
            continue
        value = provider.get_secret(key)
        if options.value_contains in value:
            results.append(SearchResult(key=key, value=value))
    return results