"""Cleaning of secret values and normalisation of secret keys.

``apply`` and ``apply_map`` clean values: the default options trim
surrounding whitespace, strip control characters and reject empty
results. ``normalise_key`` turns a key into a lowercase,
underscore-separated canonical form.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Mapping
from dataclasses import dataclass


class EmptyValueError(ValueError):
    """Raised when a value is empty after sanitisation."""

    def __init__(self, message: str = "sanitize: value is empty after sanitisation") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Options:
    """Which sanitisation steps are applied."""

    trim_space: bool = False
    strip_control: bool = False
    max_length: int = 0
    reject_empty: bool = False


def default_options() -> Options:
    """Return the usual configuration: trim, strip controls, reject empty."""
    return Options(trim_space=True, strip_control=True, max_length=0, reject_empty=True)


def _strip_control(text: str) -> str:
    return "".join(
        ch for ch in text if ch in "\t\n" or unicodedata.category(ch) != "Cc"
    )


def apply(value: str, opts: Options | None = None) -> str:
    """Return ``value`` sanitised according to ``opts``."""
    opts = opts if opts is not None else default_options()
    if opts.trim_space:
        value = value.strip()
    if opts.strip_control:
        value = _strip_control(value)
    if opts.max_length > 0:
        value = value[: opts.max_length]
    if opts.reject_empty and not value:
        raise EmptyValueError()
    return value


def apply_map(
    mapping: Mapping[str, str], opts: Options | None = None
) -> tuple[dict[str, str], dict[str, Exception]]:
    """Sanitise every value; return the clean values and the errors by key."""
    clean: dict[str, str] = {}
    errors: dict[str, Exception] = {}
    for key, value in mapping.items():
        try:
            clean[key] = apply(value, opts)
        except EmptyValueError as exc:
            errors[key] = exc
    return clean, errors


def normalise_key(key: str) -> str:
    """Lowercase ``key``, collapse non-alphanumeric runs to ``_`` and trim ``_``."""
    parts: list[str] = []
    prev_underscore = False
    for ch in key.strip().lower():
        if ch.isalpha() or ch.isdecimal():
            parts.append(ch)
            prev_underscore = False
        elif not prev_underscore:
            parts.append("_")
            prev_underscore = True
    return "".join(parts).strip("_")


def normalise_map(mapping: Mapping[str, str]) -> dict[str, str]:
    """Return a new dict with every key normalised; later keys win on clashes."""
    return {normalise_key(key): value for key, value in mapping.items()}