"""Tamper-evident markers embedded in secret values.

A marked value carries an HMAC tag of its key and content, so changes made
outside the tool are detected when the secret is next read.
"""

from __future__ import annotations

import base64
import hashlib
import hmac

SEPARATOR = "."
MIN_SECRET_LENGTH = 16


class InvalidWatermarkError(ValueError):
    """Raised when a value's marker is missing or does not match."""

    def __init__(self, message: str = "watermark: invalid or missing marker") -> None:
        super().__init__(message)


class WatermarkManager:
    """Signs and verifies watermarked secret values."""

    def __init__(self, secret: bytes) -> None:
        if len(secret) < MIN_SECRET_LENGTH:
            raise ValueError(
                f"watermark: secret must be at least {MIN_SECRET_LENGTH} bytes"
            )
        self._secret = bytes(secret)

    def _sign(self, key: str, value: str) -> str:
        message = f"{key}:{value}".encode("utf-8")
        digest = hmac.new(self._secret, message, hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")

    def apply(self, key: str, value: str) -> str:
        """Return ``value`` with a signature tag for ``key`` appended."""
        return value + SEPARATOR + self._sign(key, value)

    def verify(self, key: str, marked: str) -> str:
        """Return the plain value of ``marked`` if its tag is valid for ``key``."""
        value, sep, tag = marked.rpartition(SEPARATOR)
        if not sep:
            raise InvalidWatermarkError()
        expected = self._sign(key, value)
        if not hmac.compare_digest(tag.encode("utf-8"), expected.encode("ascii")):
            raise InvalidWatermarkError()
        return value


def is_marked(marked: str) -> bool:
    """Return True if ``marked`` appears to carry a watermark tag."""
    return SEPARATOR in marked