"""HTTP webhook delivery of events.

A WebhookSender posts events as JSON to a remote endpoint. NoopNotifier
discards events, for tests or when delivery is disabled, and a Dispatcher
fans one event out to several notifiers::

    sender = WebhookSender("https://hooks.example.com/hook", 5.0)
    sender.send(WebhookEvent(kind="rotated", key="db/password"))
"""

from __future__ import annotations

import abc
import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

DEFAULT_TIMEOUT = 10.0


class WebhookError(Exception):
    """Raised when an event cannot be delivered."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.isoformat()
    return text[:-6] + "Z" if text.endswith("+00:00") else text


@dataclass(frozen=True)
class WebhookEvent:
    """A webhook payload."""

    kind: str
    key: str
    timestamp: datetime | None = None
    meta: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "kind": self.kind,
            "key": self.key,
            "timestamp": _format_time(self.timestamp) if self.timestamp else None,
        }
        if self.meta:
            data["meta"] = dict(self.meta)
        return data


class Notifier(abc.ABC):
    """Something that accepts webhook events."""

    @abc.abstractmethod
    def send(self, event: WebhookEvent) -> None:
        """Deliver ``event``; raise on failure."""


class WebhookSender(Notifier):
    """Posts events as JSON to a configured URL."""

    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.url = url
        self.timeout = timeout if timeout > 0 else DEFAULT_TIMEOUT

    def send(self, event: WebhookEvent) -> None:
        """POST ``event``, stamping it with the current time if it has none."""
        if event.timestamp is None:
            event = replace(event, timestamp=datetime.now(timezone.utc))
        body = json.dumps(event.to_dict()).encode("utf-8")
        try:
            request = urllib.request.Request(
                self.url,
                data=body,
                method="POST",
                headers={"Content-Type": "application/json"},
            )
        except ValueError as exc:
            raise WebhookError(f"webhook: build request: {exc}") from exc
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                status = response.status
        except urllib.error.HTTPError as exc:
            status = exc.code
            exc.close()
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise WebhookError(f"webhook: send: {exc}") from exc
        if not 200 <= status < 300:
            raise WebhookError(f"webhook: unexpected status {status}", status=status)


class NoopNotifier(Notifier):
    """Discards every event."""

    def send(self, event: WebhookEvent) -> None:
        return None


class Dispatcher(Notifier):
    """Delivers one event to several notifiers."""

    def __init__(self, *args: Notifier, logger: logging.Logger | None = None) -> None:
        self.targets = list(args)
        self.logger = logger

    def send(self, event: WebhookEvent) -> None:
        """Deliver to every target; re-raise the last failure after trying all."""
        last: Exception | None = None
        for target in self.targets:
            try:
                target.send(event)
            except Exception as exc:
                if self.logger is not None:
                    self.logger.error("webhook dispatcher: %s", exc)
                last = exc
        if last is not None:
            raise last