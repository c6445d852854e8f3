from __future__ import annotations

from datetime import datetime

import pytest

from src.worktime.worktime.common.datetime_utils import previous_year_month
from src.worktime.worktime.core.exceptions import PersistenceError
from src.worktime.worktime.sessions.model import WorkSession
from src.worktime.worktime.stats.aggregator import aggregate_month
from src.worktime.worktime.stats.service import MonthlyStatsService


class FakeSessionRepo:
    def __init__(self, sessions, fail: bool = False):
        self._sessions = sessions
        self.fail = fail
        self.months: list[str] = []

    def get_sessions_by_month(self, year_month: str):
        self.months.append(year_month)
        if self.fail:
            raise RuntimeError("boom")
        return [s for s in self._sessions if s.date.startswith(year_month)]


def _s(date: str, check_in: str, check_out: str | None) -> WorkSession:
    day = datetime.strptime(date, "%Y-%m-%d")
    ci = datetime.strptime(f"{date} {check_in}", "%Y-%m-%d %H:%M")
    co = datetime.strptime(f"{date} {check_out}", "%Y-%m-%d %H:%M") if check_out else None
    return WorkSession(session_id=day.strftime("%d"), date=date, check_in=ci, check_out=co, work_minutes=480)


OCTOBER = [
    _s("2025-10-01", "09:00", "19:20"),
    _s("2025-10-02", "09:00", "18:00"),
    _s("2025-10-03", "09:00", None),
]


def test_aggregate_month_counts_and_sums_positive_overtime():
    stats = aggregate_month(OCTOBER, "2025-10")

    assert stats.year_month == "2025-10"
    assert stats.total_days == 3
    assert stats.checked_out_days == 2
    assert stats.overtime_minutes == 20


def test_aggregate_empty_month():
    stats = aggregate_month([], "2025-11")

    assert (stats.total_days, stats.checked_out_days, stats.overtime_minutes) == (0, 0, 0)


def test_monthly_stats_covers_current_and_previous_month():
    repo = FakeSessionRepo(OCTOBER + [_s("2025-09-30", "08:00", "19:00")])
    svc = MonthlyStatsService(repo)

    report = svc.get_monthly_stats(now=datetime(2025, 10, 15, 12, 0))

    assert report.current_month.total_days == 3
    assert report.last_month.year_month == "2025-09"
    assert report.last_month.overtime_minutes == 60
    assert repo.months == ["2025-10", "2025-09"]


def test_previous_month_rolls_over_year():
    assert previous_year_month(datetime(2026, 1, 10)) == "2025-12"
    assert previous_year_month(datetime(2025, 3, 31)) == "2025-02"


def test_storage_failure_is_wrapped():
    svc = MonthlyStatsService(FakeSessionRepo([], fail=True))

    with pytest.raises(PersistenceError):
        svc.stats_for("2025-10")
