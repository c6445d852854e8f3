"""Time arithmetic for a work session.

The two thresholds are independent: the session's configured
``work_minutes`` only drives the expected checkout, while overtime is always
measured against the fixed ``OVERTIME_THRESHOLD_MINUTES`` mark.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from ..core.constants import OVERTIME_THRESHOLD_MINUTES
from .model import WorkSession


def expected_checkout(check_in: datetime, work_minutes: int) -> datetime:
    return check_in + timedelta(minutes=work_minutes)


def actual_worked_minutes(session: WorkSession) -> int:
    """Whole minutes between check-in and check-out, truncated toward zero."""
    if session.check_out is None:
        return 0
    return int((session.check_out - session.check_in).total_seconds() / 60)


def overtime(session: WorkSession) -> int:
    """Positive when over the threshold, negative when under, 0 until checked out."""
    if session.check_out is None:
        return 0
    return actual_worked_minutes(session) - OVERTIME_THRESHOLD_MINUTES
