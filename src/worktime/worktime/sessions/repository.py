from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkSession


class SessionRepository(Protocol):
    def get_today_session(self, date: str) -> Optional[WorkSession]:
        raise NotImplementedError

    def get_sessions_by_month(self, year_month: str) -> Sequence[WorkSession]:
        """Sessions whose date starts with ``YYYY-MM``, oldest first."""

        raise NotImplementedError

    def save_session(self, session: WorkSession) -> None:
        """Upsert by id; the date is unique, so a date holds one session."""

        raise NotImplementedError
