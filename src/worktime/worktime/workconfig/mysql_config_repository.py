from __future__ import annotations

from ..core.constants import DEFAULT_CONFIG_ID
from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import WorkConfig
from .repository import WorkConfigRepository


class MySQLWorkConfigRepository(WorkConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_config(self) -> WorkConfig:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT id, default_work_minutes, check_in_api_url, auto_fetch_enabled,
                       p_auth, p_rtoken, check_in_webhook_url, check_out_webhook_url
                FROM work_config
                WHERE id=%s
                """,
                (DEFAULT_CONFIG_ID,),
            )
            r = cur.fetchone()
            if not r:
                raise PersistenceError("work config row is missing; run scripts/init_db.py")
            return WorkConfig(
                config_id=str(r["id"]),
                default_work_minutes=int(r["default_work_minutes"]),
                check_in_api_url=r.get("check_in_api_url") or "",
                auto_fetch_enabled=bool(r.get("auto_fetch_enabled")),
                p_auth=r.get("p_auth") or "",
                p_rtoken=r.get("p_rtoken") or "",
                check_in_webhook_url=r.get("check_in_webhook_url") or "",
                check_out_webhook_url=r.get("check_out_webhook_url") or "",
            )

    def save_config(self, config: WorkConfig) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO work_config(
                    id, default_work_minutes, check_in_api_url, auto_fetch_enabled,
                    p_auth, p_rtoken, check_in_webhook_url, check_out_webhook_url
                ) VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    default_work_minutes=VALUES(default_work_minutes),
                    check_in_api_url=VALUES(check_in_api_url),
                    auto_fetch_enabled=VALUES(auto_fetch_enabled),
                    p_auth=VALUES(p_auth),
                    p_rtoken=VALUES(p_rtoken),
                    check_in_webhook_url=VALUES(check_in_webhook_url),
                    check_out_webhook_url=VALUES(check_out_webhook_url)
                """,
                (
                    config.config_id,
                    int(config.default_work_minutes),
                    config.check_in_api_url,
                    1 if config.auto_fetch_enabled else 0,
                    config.p_auth,
                    config.p_rtoken,
                    config.check_in_webhook_url,
                    config.check_out_webhook_url,
                ),
            )
