from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import WorkSession
from .repository import SessionRepository


def _to_session(r: dict) -> WorkSession:
    return WorkSession(
        session_id=str(r["id"]),
        date=str(r["work_date"]),
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        work_minutes=int(r["work_minutes"]),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_today_session(self, date: str) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT id, work_date, check_in, check_out, work_minutes
                FROM work_sessions
                WHERE work_date=%s
                """,
                (date,),
            )
            r = cur.fetchone()
            if not r:
                return None
            return _to_session(r)

    def get_sessions_by_month(self, year_month: str) -> Sequence[WorkSession]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT id, work_date, check_in, check_out, work_minutes
                FROM work_sessions
                WHERE work_date LIKE %s
                ORDER BY work_date ASC
                """,
                (f"{year_month}%",),
            )
            return [_to_session(r) for r in cur.fetchall()]

    def save_session(self, session: WorkSession) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO work_sessions(id, work_date, check_in, check_out, work_minutes)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    work_date=VALUES(work_date),
                    check_in=VALUES(check_in),
                    check_out=VALUES(check_out),
                    work_minutes=VALUES(work_minutes)
                """,
                (
                    session.session_id,
                    session.date,
                    session.check_in,
                    session.check_out,
                    int(session.work_minutes),
                ),
            )
