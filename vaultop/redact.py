"""Masking of sensitive secret values before they reach logs or output.

Three modes are supported: FULL replaces the whole value with a mask,
PARTIAL keeps a short suffix so a secret can be identified, and HASH
replaces every character with ``*`` so only the length is visible.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

DEFAULT_MASK = "***"
DEFAULT_SUFFIX = 4


class Mode(str, Enum):
    """How a value is redacted."""

    FULL = "full"
    PARTIAL = "partial"
    HASH = "hash"


@dataclass(frozen=True)
class Options:
    """Redaction settings."""

    mode: Mode = Mode.FULL
    show_suffix: int = 0
    mask: str = ""

    @property
    def effective_mask(self) -> str:
        return self.mask or DEFAULT_MASK


def redact(value: str, opts: Options | None = None) -> str:
    """Return a redacted representation of ``value``."""
    opts = opts or Options()
    if opts.mode == Mode.PARTIAL:
        n = opts.show_suffix if opts.show_suffix > 0 else DEFAULT_SUFFIX
        if len(value) <= n:
            return opts.effective_mask
        return opts.effective_mask + value[-n:]
    if opts.mode == Mode.HASH:
        return "*" * len(value)
    return opts.effective_mask


def redact_map(mapping: Mapping[str, str], opts: Options | None = None) -> dict[str, str]:
    """Return a new dict with every value of ``mapping`` redacted."""
    return {key: redact(value, opts) for key, value in mapping.items()}