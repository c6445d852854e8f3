from __future__ import annotations

from enum import Enum


class SessionState(str, Enum):
    """Lifecycle of the single work session for a date."""

    NO_SESSION = "NO_SESSION"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


class ReminderOutcome(str, Enum):
    """What a reminder tick decided to do."""

    SKIPPED_NO_CONFIG = "SKIPPED_NO_CONFIG"
    SKIPPED_NO_WEBHOOK = "SKIPPED_NO_WEBHOOK"
    SKIPPED_HOLIDAY = "SKIPPED_HOLIDAY"
    SKIPPED_DONE = "SKIPPED_DONE"
    SENT = "SENT"
    SEND_FAILED = "SEND_FAILED"
