from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, tzinfo
from typing import Optional

from ..clients.attendance import AttendanceProvider, AttendanceStatus
from ..clients.holiday import HolidayProvider
from ..clients.notifier import Notifier
from ..common.datetime_utils import format_date, now_in
from ..core.constants import CHECK_IN_REMINDER_MESSAGE, CHECK_OUT_REMINDER_MESSAGE
from ..core.enums import ReminderOutcome
from ..core.exceptions import AttendanceProviderError, HolidayProviderError, NotificationError
from ..sessions.calculator import expected_checkout
from ..sessions.repository import SessionRepository
from ..workconfig.model import WorkConfig
from ..workconfig.repository import WorkConfigRepository

logger = logging.getLogger(__name__)


class ReminderService:
    """Decides, once per tick, whether a check-in/check-out nudge is warranted.

    Provider failures never block a reminder: a holiday lookup error counts as
    a working day and an attendance lookup error counts as "not done yet".
    Nothing here raises; every outcome is logged and returned.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        configs: WorkConfigRepository,
        attendance: AttendanceProvider,
        holidays: HolidayProvider,
        notifier: Notifier,
        *,
        tz: Optional[tzinfo] = None,
    ):
        self._sessions = sessions
        self._configs = configs
        self._attendance = attendance
        self._holidays = holidays
        self._notifier = notifier
        self._tz = tz

    def check_in_reminder(self, *, now: datetime | None = None) -> ReminderOutcome:
        logger.info("Running check-in reminder")
        config = self._load_config()
        if config is None:
            return ReminderOutcome.SKIPPED_NO_CONFIG
        if not config.check_in_webhook_url:
            logger.info("Check-in webhook URL not configured, skipping")
            return ReminderOutcome.SKIPPED_NO_WEBHOOK
        if self._is_holiday():
            logger.info("Today is a holiday, skipping check-in reminder")
            return ReminderOutcome.SKIPPED_HOLIDAY

        today = format_date(now or now_in(self._tz))
        check_in, _ = self._fetch_attendance(config, today)
        if check_in is not None:
            logger.info("Already checked in at %s, skipping", check_in)
            return ReminderOutcome.SKIPPED_DONE

        return self._notify(config.check_in_webhook_url, CHECK_IN_REMINDER_MESSAGE)

    def check_out_reminder(self, *, now: datetime | None = None) -> ReminderOutcome:
        logger.info("Running check-out reminder")
        config = self._load_config()
        if config is None:
            return ReminderOutcome.SKIPPED_NO_CONFIG
        if not config.check_out_webhook_url:
            logger.info("Check-out webhook URL not configured, skipping")
            return ReminderOutcome.SKIPPED_NO_WEBHOOK
        if self._is_holiday():
            logger.info("Today is a holiday, skipping check-out reminder")
            return ReminderOutcome.SKIPPED_HOLIDAY

        today = format_date(now or now_in(self._tz))
        check_in, check_out = self._fetch_attendance(config, today)
        if check_in is None or check_out is None:
            return self._notify(config.check_out_webhook_url, CHECK_OUT_REMINDER_MESSAGE)

        self._backfill_check_out(today, check_out)

        # Recomputed from the fetched check-in and the configured default,
        # not from the stored session's snapshot.
        expected = expected_checkout(check_in, config.default_work_minutes)
        if check_out > expected:
            logger.info("Checked out at %s (expected %s), skipping", check_out, expected)
            return ReminderOutcome.SKIPPED_DONE

        return self._notify(config.check_out_webhook_url, CHECK_OUT_REMINDER_MESSAGE)

    def _load_config(self) -> Optional[WorkConfig]:
        try:
            return self._configs.get_config()
        except Exception as e:
            logger.error("Failed to get config: %s", e)
            return None

    def _is_holiday(self) -> bool:
        try:
            return self._holidays.is_holiday()
        except HolidayProviderError as e:
            logger.warning("Failed to check holiday status, assuming working day: %s", e)
            return False

    def _fetch_attendance(self, config: WorkConfig, date: str) -> AttendanceStatus:
        if not config.has_api_config:
            return None, None
        try:
            return self._attendance.fetch_attendance_status(config, date)
        except AttendanceProviderError as e:
            logger.warning("Failed to check HR attendance status, assuming not done: %s", e)
            return None, None

    def _backfill_check_out(self, date: str, check_out: datetime) -> None:
        try:
            session = self._sessions.get_today_session(date)
            if session and session.check_out is None:
                self._sessions.save_session(replace(session, check_out=check_out))
                logger.info("Backfilled check-out %s for %s", check_out, date)
        except Exception as e:
            logger.warning("Failed to backfill check-out for %s: %s", date, e)

    def _notify(self, url: str, message: str) -> ReminderOutcome:
        logger.info("Sending reminder to %s", url)
        try:
            self._notifier.send(url, message)
        except NotificationError as e:
            logger.error("Failed to send reminder: %s", e)
            return ReminderOutcome.SEND_FAILED
        logger.info("Reminder sent")
        return ReminderOutcome.SENT
