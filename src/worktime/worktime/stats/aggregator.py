from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..sessions.calculator import overtime
from ..sessions.model import WorkSession


@dataclass(frozen=True)
class MonthlyStats:
    year_month: str
    total_days: int
    checked_out_days: int
    overtime_minutes: int


def aggregate_month(sessions: Iterable[WorkSession], year_month: str) -> MonthlyStats:
    """Fold a month's sessions; under-time days contribute 0, never a negative offset."""
    total = 0
    checked_out = 0
    overtime_minutes = 0

    for s in sessions:
        total += 1
        if not s.has_checked_out:
            continue
        checked_out += 1
        overtime_minutes += max(overtime(s), 0)

    return MonthlyStats(
        year_month=year_month,
        total_days=total,
        checked_out_days=checked_out,
        overtime_minutes=overtime_minutes,
    )
