from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, time, timedelta, tzinfo
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_in
from ..core.constants import CHECK_IN_REMINDER_AT, CHECK_OUT_REMINDER_TIMES
from .service import ReminderService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyJob:
    name: str
    at: time
    action: Callable[[], object]


def next_run_after(now: datetime, at: time) -> datetime:
    """First wall-clock occurrence of ``at`` strictly after ``now``."""
    candidate = now.replace(hour=at.hour, minute=at.minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def build_reminder_jobs(reminders: ReminderService) -> list[DailyJob]:
    # Both evening slots re-check HR attendance before sending.
    jobs = [DailyJob("check-in reminder", CHECK_IN_REMINDER_AT, reminders.check_in_reminder)]
    for at in CHECK_OUT_REMINDER_TIMES:
        jobs.append(DailyJob("check-out reminder", at, reminders.check_out_reminder))
    return jobs


class ReminderScheduler:
    """Background thread that fires daily jobs at fixed local times in ``tz``."""

    def __init__(
        self,
        jobs: Sequence[DailyJob],
        *,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._jobs = list(jobs)
        self._tz = tz
        self._clock = clock or (lambda: now_in(self._tz))
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_due: Optional[datetime] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return

        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="reminder-scheduler", daemon=True)
        self._thread.start()
        for job in self._jobs:
            logger.info("Scheduled %s at %s daily", job.name, job.at.strftime("%H:%M"))
        logger.info("Reminder scheduler started")

    def stop(self, timeout: float | None = 5) -> None:
        if not self.running:
            return

        self._stop.set()
        self._thread.join(timeout)
        self._thread = None
        logger.info("Reminder scheduler stopped")

    def due_jobs(self, now: datetime) -> tuple[datetime, list[DailyJob]]:
        """Next fire instant after ``now`` and every job scheduled for it."""
        runs = [(next_run_after(now, job.at), job) for job in self._jobs]
        due_at = min(run for run, _ in runs)
        return due_at, [job for run, job in runs if run == due_at]

    def run_job(self, job: DailyJob) -> None:
        try:
            job.action()
        except Exception:
            logger.exception("Error in %s", job.name)

    def _loop(self) -> None:
        while not self._stop.is_set():
            now = self._clock()
            if self._last_due is not None and now < self._last_due:
                now = self._last_due

            due_at, jobs = self.due_jobs(now)
            wait = (due_at - now).total_seconds()
            if self._stop.wait(timeout=max(wait, 0)):
                break

            self._last_due = due_at
            for job in jobs:
                self.run_job(job)
