"""Time-limited, signed references to a single secret key.

A presigned reference carries the target key, an expiry timestamp and an
HMAC-SHA256 signature made with a shared secret. The recipient can check
that it is authentic and still fresh before acting on it.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import math
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

MIN_SECRET_LENGTH = 16

_B64_ALPHABET = re.compile(r"^[A-Za-z0-9_-]*$")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class PresignExpiredError(Exception):
    """Raised when a presigned token has passed its expiry time."""

    def __init__(self, message: str = "presign: token has expired") -> None:
        super().__init__(message)


class PresignInvalidError(Exception):
    """Raised when a presigned token is malformed or its signature is wrong."""

    def __init__(self, message: str = "presign: token is invalid") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class PresignToken:
    """A verified, time-limited grant of access to one secret key."""

    key: str
    expires_at: datetime
    signature: str = field(default="", repr=False, compare=False)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    if not _B64_ALPHABET.match(text) or len(text) % 4 == 1:
        raise ValueError("invalid base64url data")
    try:
        return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    except binascii.Error as exc:
        raise ValueError("invalid base64url data") from exc


def _payload(key: bytes, expiry: int) -> bytes:
    return key + b":" + str(expiry).encode("ascii")


class Signer:
    """Issues and verifies presigned tokens with a shared HMAC secret."""

    def __init__(
        self, secret: bytes, clock: Callable[[], datetime] = _utcnow
    ) -> None:
        if len(secret) < MIN_SECRET_LENGTH:
            raise ValueError(
                f"presign: secret must be at least {MIN_SECRET_LENGTH} bytes"
            )
        self._secret = bytes(secret)
        self._clock = clock

    def _sign(self, payload: bytes) -> str:
        digest = hmac.new(self._secret, payload, hashlib.sha256).digest()
        return _b64encode(digest)

    def issue(self, key: str, ttl: timedelta) -> str:
        """Return a signed token granting access to ``key`` for ``ttl``."""
        if not key:
            raise ValueError("presign: key must not be empty")
        if ttl <= timedelta(0):
            raise ValueError("presign: ttl must be positive")
        expiry = math.floor((self._clock() + ttl).timestamp())
        key_bytes = key.encode("utf-8")
        signature = self._sign(_payload(key_bytes, expiry))
        return f"{_b64encode(key_bytes)}.{expiry}.{signature}"

    def verify(self, raw: str) -> PresignToken:
        """Check ``raw`` and return its token.

        Raises PresignInvalidError for a malformed or forged token and
        PresignExpiredError for one that has expired.
        """
        parts = raw.split(".", 2)
        if len(parts) != 3:
            raise PresignInvalidError()
        encoded_key, expiry_text, signature = parts
        try:
            key_bytes = _b64decode(encoded_key)
        except ValueError:
            raise PresignInvalidError() from None
        match = _LEADING_INT.match(expiry_text)
        if match is None:
            raise PresignInvalidError()
        expiry = int(match.group(1))

        expected = self._sign(_payload(key_bytes, expiry))
        if not hmac.compare_digest(signature.encode("utf-8"), expected.encode("ascii")):
            raise PresignInvalidError()

        try:
            expires_at = datetime.fromtimestamp(expiry, timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise PresignInvalidError() from None
        if self._clock() > expires_at:
            raise PresignExpiredError()

        return PresignToken(
            key=key_bytes.decode("utf-8", errors="replace"),
            expires_at=expires_at,
            signature=signature,
        )