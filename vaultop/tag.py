"""Metadata tags on secrets, stored alongside them in the provider.

The tags of a secret are kept under ``__tags__/<secret>`` as sorted
``name=value`` lines. Names and values must not contain ``=`` or newlines.
"""

from __future__ import annotations

from collections.abc import Mapping

from vaultop.provider import Provider

TAG_PREFIX = "__tags__/"


class TagFormatError(ValueError):
    """Raised when stored tag data is malformed."""


def _tag_key(secret: str) -> str:
    return f"{TAG_PREFIX}{secret}"


def encode_tags(tags: Mapping[str, str]) -> str:
    """Serialise ``tags`` as sorted ``name=value`` lines."""
    return "\n".join(f"{name}={tags[name]}" for name in sorted(tags))


def parse_tags(raw: str) -> dict[str, str]:
    """Parse the output of ``encode_tags`` back into a dict."""
    tags: dict[str, str] = {}
    for line in raw.split("\n"):
        if not line:
            continue
        name, sep, value = line.partition("=")
        if not sep:
            raise TagFormatError(f'tag: malformed entry "{line}"')
        tags[name] = value
    return tags


def get_all_tags(provider: Provider, secret: str) -> dict[str, str]:
    """Return every tag of ``secret``; an empty dict if none are stored."""
    try:
        raw = provider.get_secret(_tag_key(secret))
    except Exception:
        # No tags stored yet.
        return {}
    return parse_tags(raw)


def _persist(provider: Provider, secret: str, tags: Mapping[str, str]) -> None:
    provider.set_secret(_tag_key(secret), encode_tags(tags))


def set_tag(provider: Provider, secret: str, name: str, value: str) -> None:
    """Set tag ``name`` of ``secret`` to ``value``."""
    tags = get_all_tags(provider, secret)
    tags[name] = value
    _persist(provider, secret, tags)


def get_tag(provider: Provider, secret: str, name: str) -> str | None:
    """Return tag ``name`` of ``secret``, or None if it is not set."""
    return get_all_tags(provider, secret).get(name)


def delete_tag(provider: Provider, secret: str, name: str) -> None:
    """Remove tag ``name`` from ``secret``."""
    tags = get_all_tags(provider, secret)
    tags.pop(name, None)
    _persist(provider, secret, tags)


def list_tagged(provider: Provider) -> list[str]:
    """Return, sorted, every secret key that has tags stored."""
    return sorted(
        key[len(TAG_PREFIX):]
        for key in provider.list_secrets("")
        if len(key) > len(TAG_PREFIX) and key.startswith(TAG_PREFIX)
    )