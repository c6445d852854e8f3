from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from ..common.datetime_utils import format_date, now_local
from ..common.validators import require_work_minutes
from ..core.exceptions import PersistenceError
from ..sessions.repository import SessionRepository
from .model import ConfigUpdate, WorkConfig
from .repository import WorkConfigRepository

logger = logging.getLogger(__name__)


def load_config(configs: WorkConfigRepository) -> WorkConfig:
    try:
        return configs.get_config()
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError(f"failed to get config: {e}") from e


class WorkConfigService:
    def __init__(self, configs: WorkConfigRepository, sessions: SessionRepository):
        self._configs = configs
        self._sessions = sessions

    def get(self) -> WorkConfig:
        return load_config(self._configs)

    def update(self, req: ConfigUpdate, *, now: datetime | None = None) -> WorkConfig:
        config = load_config(self._configs)

        work_minutes = int(req.work_minutes or 0)
        if work_minutes > 0:
            require_work_minutes(work_minutes)
            config = replace(config, default_work_minutes=work_minutes)

        config = replace(
            config,
            check_in_api_url=req.check_in_api_url,
            auto_fetch_enabled=bool(req.auto_fetch_enabled),
            p_auth=req.p_auth,
            p_rtoken=req.p_rtoken,
            check_in_webhook_url=req.check_in_webhook_url,
            check_out_webhook_url=req.check_out_webhook_url,
        )

        # Keep today's expected checkout in sync with the newly configured duration.
        if work_minutes > 0:
            today = format_date(now or now_local())
            session = self._sessions.get_today_session(today)
            if session:
                try:
                    self._sessions.save_session(replace(session, work_minutes=work_minutes))
                except Exception as e:
                    raise PersistenceError(f"failed to update session work hours: {e}") from e
                logger.info("Updated today's session work minutes to %s", work_minutes)

        try:
            self._configs.save_config(config)
        except Exception as e:
            raise PersistenceError(f"failed to save config: {e}") from e

        logger.info("Configuration updated")
        return config
