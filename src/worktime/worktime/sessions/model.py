from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SessionState


@dataclass(frozen=True)
class WorkSession:
    """Domain entity: the single work session of a calendar date."""

    session_id: str
    date: str
    check_in: datetime
    check_out: Optional[datetime]
    work_minutes: int

    @property
    def has_checked_out(self) -> bool:
        return self.check_out is not None

    @property
    def state(self) -> SessionState:
        return SessionState.CHECKED_OUT if self.has_checked_out else SessionState.CHECKED_IN
