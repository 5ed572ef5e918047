"""Notification sinks for schedule and absence events.

Sinks are fire-and-forget from the engine's point of view: the engine calls
them after a change is stored and only logs their failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, Sequence

import requests

from ..core.constants import DEFAULT_NOTIFY_TIMEOUT_SECONDS
from ..core.enums import EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationEvent:
    event_type: EventType
    staff_id: str
    dates: Sequence[str]
    subject_id: str
    occurred_at: datetime

    def to_payload(self) -> dict:
        return {
            "eventType": self.event_type.value,
            "staffId": self.staff_id,
            "dates": list(self.dates),
            "requestOrScheduleId": self.subject_id,
            "occurredAt": self.occurred_at.isoformat(),
        }


class NotificationSink(Protocol):
    def notify(self, event: NotificationEvent) -> None:
        raise NotImplementedError


class LoggingNotificationSink:
    def notify(self, event: NotificationEvent) -> None:
        logger.info(
            "notify %s staff=%s subject=%s dates=%s",
            event.event_type.value,
            event.staff_id,
            event.subject_id,
            ",".join(event.dates),
        )


class WebhookNotificationSink:
    """POST each event as JSON to a push gateway.

    The POST runs synchronously on the caller's thread, so a slow gateway
    holds the triggering request for up to ``timeout`` seconds. Errors
    still never reach the caller: the engine logs and drops them.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._url = url
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def notify(self, event: NotificationEvent) -> None:
        resp = self._session.post(self._url, json=event.to_payload(), timeout=self._timeout)
        resp.raise_for_status()


def build_notification_sink(webhook_url: Optional[str], *, timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS) -> NotificationSink:
    if webhook_url:
        return WebhookNotificationSink(webhook_url, timeout=timeout)
    return LoggingNotificationSink()
