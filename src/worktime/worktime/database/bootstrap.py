"""Schema bootstrap for local/dev databases (also used by scripts/init_db.py)."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Mapping

from ..core.constants import DEFAULT_CONFIG_ID, STANDARD_WORK_MINUTES
from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

# schema.sql pins a database name for manual use; the configured one wins here.
_DATABASE_SWITCH = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def schema_statements(sql: str) -> list[str]:
    """Split a schema file into executable statements.

    Line comments and ``CREATE DATABASE`` / ``USE`` statements are dropped.
    The schema carries no ``;`` inside literals, so a plain split is enough.
    """
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    statements = []
    for chunk in body.split(";"):
        stmt = chunk.strip()
        if stmt and not _DATABASE_SWITCH.match(stmt):
            statements.append(stmt)
    return statements


def _factory(db_config: Mapping[str, Any]) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_mapping(db_config))


def ensure_database_exists(db_config: Mapping[str, Any]) -> None:
    factory = _factory(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping[str, Any], *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    factory = _factory(db_config)

    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))
    with db_cursor(factory, dictionary=False) as cur:
        for stmt in statements:
            cur.execute(stmt)
    logger.info("Applied %s schema statements to %s", len(statements), factory.config.describe())


def ensure_default_config(db_config: Mapping[str, Any]) -> None:
    """Seed the singleton config row; an existing row is left untouched."""
    with db_cursor(_factory(db_config), dictionary=False) as cur:
        cur.execute(
            """
            INSERT IGNORE INTO work_config (
                id, default_work_minutes, check_in_api_url, auto_fetch_enabled,
                p_auth, p_rtoken, check_in_webhook_url, check_out_webhook_url
            ) VALUES (%s, %s, '', 0, '', '', '', '')
            """,
            (DEFAULT_CONFIG_ID, STANDARD_WORK_MINUTES),
        )


def list_tables(db_config: Mapping[str, Any]) -> list[str]:
    with db_cursor(_factory(db_config), dictionary=False) as cur:
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
