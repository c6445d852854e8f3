from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Any]:
    """Cursor on a short-lived connection: commit on success, rollback on error."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield cur
        conn.commit()
    except Exception:
        logger.warning("Rolling back transaction on %s", conn_factory.config.database)
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()
