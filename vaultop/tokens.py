"""Short-lived HMAC-signed tokens for service-to-service authentication.

A TokenManager issues tokens for a named subject and validates them later.
Each token embeds an expiry timestamp and a random nonce, so tampered or
expired values are rejected. A TokenStore tracks issued tokens, supports
revocation before natural expiry, and can purge expired entries.

Tokens should travel over TLS only: the HMAC prevents forgery but does
not encrypt the payload.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import math
import re
import secrets
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

MIN_SECRET_LENGTH = 16

_B64_ALPHABET = re.compile(r"^[A-Za-z0-9_-]*$")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class TokenExpiredError(Exception):
    """Raised when a token has passed its expiry time."""

    def __init__(self, message: str = "token: expired") -> None:
        super().__init__(message)


class TokenInvalidError(Exception):
    """Raised when a token is malformed or its signature does not match."""

    def __init__(self, message: str = "token: invalid signature") -> None:
        super().__init__(message)


class TokenRevokedError(Exception):
    """Raised when a token has been explicitly revoked."""

    def __init__(self, message: str = "token: revoked") -> None:
        super().__init__(message)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Token:
    """An opaque credential and the time it expires."""

    value: str
    expires_at: datetime

    def is_expired(self) -> bool:
        """Return True if the current time is past the expiry time."""
        return _utcnow() > self.expires_at


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    if not _B64_ALPHABET.match(text) or len(text) % 4 == 1:
        raise ValueError("invalid base64url data")
    try:
        return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    except binascii.Error as exc:
        raise ValueError("invalid base64url data") from exc


class TokenManager:
    """Issues and validates HMAC-signed tokens with a fixed lifetime."""

    def __init__(
        self,
        secret: bytes,
        ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if len(secret) < MIN_SECRET_LENGTH:
            raise ValueError(f"token: secret must be at least {MIN_SECRET_LENGTH} bytes")
        if ttl <= timedelta(0):
            raise ValueError("token: ttl must be positive")
        self._secret = bytes(secret)
        self.ttl = ttl
        self._clock = clock

    def _sign(self, payload: bytes) -> bytes:
        return hmac.new(self._secret, payload, hashlib.sha256).hexdigest().encode("ascii")

    def issue(self, subject: str) -> Token:
        """Return a new signed token for ``subject``."""
        nonce = secrets.token_bytes(8).hex()
        expiry = math.floor((self._clock() + self.ttl).timestamp())
        payload = f"{subject}|{expiry}|{nonce}".encode("utf-8")
        value = _b64encode(payload + b"|" + self._sign(payload))
        return Token(value=value, expires_at=datetime.fromtimestamp(expiry, timezone.utc))

    def validate(self, value: str) -> str:
        """Check the signature and expiry of ``value`` and return its subject."""
        try:
            raw = _b64decode(value)
        except ValueError:
            raise TokenInvalidError() from None
        payload, sep, signature = raw.rpartition(b"|")
        if not sep:
            raise TokenInvalidError()
        if not hmac.compare_digest(self._sign(payload), signature):
            raise TokenInvalidError()

        text = payload.decode("utf-8", errors="replace")
        subject, sep, rest = text.partition("|")
        if not sep:
            raise TokenInvalidError()
        match = _LEADING_INT.match(rest)
        if match is None:
            raise TokenInvalidError()
        expiry = int(match.group(1))

        if math.floor(self._clock().timestamp()) > expiry:
            raise TokenExpiredError()
        return subject


class TokenStore:
    """Tracks issued tokens and supports revoking them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._revoked: set[str] = set()
        self._issued: dict[str, datetime] = {}

    def track(self, token: Token) -> None:
        """Record an issued token so it can later be revoked or purged."""
        with self._lock:
            self._issued[token.value] = token.expires_at

    def revoke(self, value: str) -> None:
        """Mark a token as invalid regardless of its expiry."""
        with self._lock:
            self._revoked.add(value)

    def is_revoked(self, value: str) -> bool:
        """Return True if the token has been revoked."""
        with self._lock:
            return value in self._revoked

    def purge(self, now: datetime | None = None) -> int:
        """Drop tokens that expired before ``now``; return how many were dropped."""
        now = now or _utcnow()
        with self._lock:
            expired = [value for value, exp in self._issued.items() if now > exp]
            for value in expired:
                del self._issued[value]
                self._revoked.discard(value)
            return len(expired)

    def count(self) -> int:
        """Return the number of tracked tokens."""
        with self._lock:
            return len(self._issued)