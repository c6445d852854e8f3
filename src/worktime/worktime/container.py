from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from .clients.attendance import HRAttendanceClient
from .clients.holiday import HolidayAPIClient
from .clients.notifier import NtfyWebhookNotifier
from .common.datetime_utils import load_timezone
from .core.constants import HOLIDAY_API_URL, HTTP_TIMEOUT_SECONDS, REMINDER_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .reminders.scheduler import ReminderScheduler, build_reminder_jobs
from .reminders.service import ReminderService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.service import WorkSessionService
from .stats.service import MonthlyStatsService
from .workconfig.mysql_config_repository import MySQLWorkConfigRepository
from .workconfig.service import WorkConfigService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    reminder_tz: Optional[tzinfo]

    sessions_repo: MySQLSessionRepository
    config_repo: MySQLWorkConfigRepository

    attendance_client: HRAttendanceClient
    holiday_client: HolidayAPIClient
    notifier: NtfyWebhookNotifier

    session_service: WorkSessionService
    config_service: WorkConfigService
    stats_service: MonthlyStatsService
    reminder_service: ReminderService
    scheduler: ReminderScheduler


def build_container(
    *,
    db_config: dict,
    reminder_timezone: str = REMINDER_TIMEZONE,
    holiday_api_url: str = HOLIDAY_API_URL,
    http_timeout: float = HTTP_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    tz = load_timezone(reminder_timezone)

    sessions_repo = MySQLSessionRepository(conn)
    config_repo = MySQLWorkConfigRepository(conn)

    attendance_client = HRAttendanceClient(timeout=http_timeout)
    holiday_client = HolidayAPIClient(api_url=holiday_api_url, timeout=http_timeout)
    notifier = NtfyWebhookNotifier(timeout=http_timeout)

    session_service = WorkSessionService(sessions_repo, config_repo, attendance_client)
    config_service = WorkConfigService(config_repo, sessions_repo)
    stats_service = MonthlyStatsService(sessions_repo)
    reminder_service = ReminderService(
        sessions_repo,
        config_repo,
        attendance_client,
        holiday_client,
        notifier,
        tz=tz,
    )
    scheduler = ReminderScheduler(build_reminder_jobs(reminder_service), tz=tz)

    return Container(
        conn=conn,
        reminder_tz=tz,
        sessions_repo=sessions_repo,
        config_repo=config_repo,
        attendance_client=attendance_client,
        holiday_client=holiday_client,
        notifier=notifier,
        session_service=session_service,
        config_service=config_service,
        stats_service=stats_service,
        reminder_service=reminder_service,
        scheduler=scheduler,
    )
