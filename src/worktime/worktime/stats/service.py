from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import format_year_month, now_local, previous_year_month
from ..core.exceptions import PersistenceError
from ..sessions.repository import SessionRepository
from .aggregator import MonthlyStats, aggregate_month


@dataclass(frozen=True)
class MonthlyStatsReport:
    current_month: MonthlyStats
    last_month: MonthlyStats


class MonthlyStatsService:
    def __init__(self, sessions: SessionRepository):
        self._sessions = sessions

    def stats_for(self, year_month: str) -> MonthlyStats:
        try:
            sessions = self._sessions.get_sessions_by_month(year_month)
        except Exception as e:
            raise PersistenceError(f"failed to get sessions for {year_month}: {e}") from e
        return aggregate_month(sessions, year_month)

    def get_monthly_stats(self, *, now: datetime | None = None) -> MonthlyStatsReport:
        now = now or now_local()
        return MonthlyStatsReport(
            current_month=self.stats_for(format_year_month(now)),
            last_month=self.stats_for(previous_year_month(now)),
        )
