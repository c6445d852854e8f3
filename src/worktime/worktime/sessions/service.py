from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..clients.attendance import AttendanceProvider
from ..common.datetime_utils import format_date, now_local
from ..core.enums import SessionState
from ..core.exceptions import AttendanceProviderError, NoCheckInError, PersistenceError
from ..workconfig.model import WorkConfig
from ..workconfig.repository import WorkConfigRepository
from ..workconfig.service import load_config
from .calculator import expected_checkout, overtime
from .model import WorkSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    session_id: str
    check_in_time: datetime
    expected_check_out_time: datetime
    work_minutes: int


@dataclass(frozen=True)
class CheckOutResult:
    session_id: str
    check_in_time: datetime
    check_out_time: datetime
    overtime_minutes: int


@dataclass(frozen=True)
class StatusReport:
    has_checked_in: bool
    current_time: datetime
    work_minutes: int
    state: SessionState = SessionState.NO_SESSION
    is_check_out_time: bool = False
    overtime_minutes: int = 0
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    expected_check_out_time: Optional[datetime] = None


@dataclass(frozen=True)
class TodayCheckIn:
    """Always renderable: provider and storage problems travel in ``api_error``."""

    has_checked_in: bool
    check_in_time: Optional[datetime] = None
    can_auto_fetch: bool = False
    auto_fetch_enabled: bool = False
    api_error: Optional[str] = None


class WorkSessionService:
    """Use cases for the one-session-per-date check-in/check-out lifecycle."""

    def __init__(
        self,
        sessions: SessionRepository,
        configs: WorkConfigRepository,
        attendance: AttendanceProvider,
    ):
        self._sessions = sessions
        self._configs = configs
        self._attendance = attendance

    def _save(self, session: WorkSession, what: str) -> None:
        try:
            self._sessions.save_session(session)
        except Exception as e:
            raise PersistenceError(f"failed to save {what}: {e}") from e

    def check_in(self, check_in_time: datetime) -> CheckInResult:
        today = format_date(check_in_time)
        config = load_config(self._configs)

        existing = self._sessions.get_today_session(today)
        if existing:
            # Re-check-in resets checkout and re-snapshots the configured duration.
            session = replace(
                existing,
                check_in=check_in_time,
                check_out=None,
                work_minutes=config.default_work_minutes,
            )
            logger.info("Re-checking in for %s at %s", today, check_in_time)
        else:
            session = WorkSession(
                session_id=str(uuid.uuid4()),
                date=today,
                check_in=check_in_time,
                check_out=None,
                work_minutes=config.default_work_minutes,
            )
            logger.info("New check-in for %s at %s", today, check_in_time)

        self._save(session, "session")
        return CheckInResult(
            session_id=session.session_id,
            check_in_time=session.check_in,
            expected_check_out_time=expected_checkout(session.check_in, session.work_minutes),
            work_minutes=session.work_minutes,
        )

    def check_out(self, check_out_time: datetime) -> CheckOutResult:
        today = format_date(check_out_time)

        session = self._sessions.get_today_session(today)
        if not session:
            raise NoCheckInError(f"no check-in found for {today}")

        session = replace(session, check_out=check_out_time)
        self._save(session, "check-out")

        minutes = overtime(session)
        logger.info("Checked out at %s, overtime_minutes=%s", check_out_time, minutes)
        return CheckOutResult(
            session_id=session.session_id,
            check_in_time=session.check_in,
            check_out_time=check_out_time,
            overtime_minutes=minutes,
        )

    def get_status(self, *, now: datetime | None = None) -> StatusReport:
        now = now or now_local()
        session = self._sessions.get_today_session(format_date(now))
        config = load_config(self._configs)

        if not session:
            return StatusReport(
                has_checked_in=False,
                current_time=now,
                work_minutes=config.default_work_minutes,
            )

        expected = expected_checkout(session.check_in, session.work_minutes)
        return StatusReport(
            has_checked_in=True,
            current_time=now,
            work_minutes=session.work_minutes,
            state=session.state,
            is_check_out_time=now > expected,
            overtime_minutes=overtime(session),
            check_in_time=session.check_in,
            check_out_time=session.check_out,
            expected_check_out_time=expected,
        )

    def get_today_check_in(self, date: str, *, force_refetch: bool = False) -> TodayCheckIn:
        session = self._sessions.get_today_session(date)
        if session and not force_refetch:
            return TodayCheckIn(has_checked_in=True, check_in_time=session.check_in)

        config = load_config(self._configs)
        if config.should_auto_fetch:
            return self._auto_fetch_check_in(date, session, config)

        return TodayCheckIn(
            has_checked_in=False,
            can_auto_fetch=config.has_api_config,
            auto_fetch_enabled=config.auto_fetch_enabled,
        )

    def _auto_fetch_check_in(
        self,
        date: str,
        existing: Optional[WorkSession],
        config: WorkConfig,
    ) -> TodayCheckIn:
        try:
            check_in_time, _ = self._attendance.fetch_attendance_status(config, date)
        except AttendanceProviderError as e:
            logger.warning("Auto-fetch of check-in time failed: %s", e)
            return TodayCheckIn(has_checked_in=False, can_auto_fetch=True, auto_fetch_enabled=True, api_error=str(e))

        if check_in_time is None:
            logger.info("Auto-fetch found no check-in for %s", date)
            return TodayCheckIn(
                has_checked_in=False,
                can_auto_fetch=True,
                auto_fetch_enabled=True,
                api_error=f"no check-in found for date {date}",
            )

        logger.info("Auto-fetched check-in time %s", check_in_time)
        session = WorkSession(
            session_id=existing.session_id if existing else str(uuid.uuid4()),
            date=date,
            check_in=check_in_time,
            check_out=None,
            work_minutes=config.default_work_minutes,
        )

        try:
            self._save(session, "session")
        except PersistenceError as e:
            logger.warning("Auto-fetched check-in could not be stored: %s", e)
            return TodayCheckIn(
                has_checked_in=False,
                check_in_time=check_in_time,
                can_auto_fetch=True,
                auto_fetch_enabled=True,
                api_error=str(e),
            )

        return TodayCheckIn(
            has_checked_in=True,
            check_in_time=check_in_time,
            can_auto_fetch=True,
            auto_fetch_enabled=True,
        )
