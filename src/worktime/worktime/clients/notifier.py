from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from ..core.constants import DEFAULT_NOTIFICATION_MESSAGE, HTTP_TIMEOUT_SECONDS
from ..core.exceptions import NotificationError

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, url: str, message: str) -> None:
        raise NotImplementedError


class NtfyWebhookNotifier(Notifier):
    """Posts an urgent plain-text alarm to an ntfy topic URL."""

    def __init__(self, *, timeout: float = HTTP_TIMEOUT_SECONDS, session: Optional[requests.Session] = None):
        self._timeout = timeout
        self._http = session or requests.Session()

    def send(self, url: str, message: str) -> None:
        if not url:
            raise NotificationError("webhook URL is empty")

        body = message or DEFAULT_NOTIFICATION_MESSAGE
        logger.info("Sending notification to %s", url)
        try:
            resp = self._http.post(
                url,
                data=body.encode("utf-8"),
                headers={
                    "Title": "Work Time Reminder",
                    "Priority": "urgent",
                    "Tags": "warning,alarm_clock",
                    "Content-Type": "text/plain; charset=utf-8",
                },
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise NotificationError(f"request failed: {e}") from e

        if resp.status_code < 200 or resp.status_code >= 300:
            raise NotificationError(f"webhook returned non-2xx status: {resp.status_code}")
        logger.info("Notification delivered to %s (status %s)", url, resp.status_code)
