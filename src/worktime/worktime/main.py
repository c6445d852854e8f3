from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .core.constants import HOLIDAY_API_URL, HTTP_TIMEOUT_SECONDS, REMINDER_TIMEZONE
from .database.bootstrap import apply_schema, ensure_default_config, list_tables
from .database.connection import DBConfig

from .container import Container, build_container
from .sessions.controller import register as register_sessions
from .stats.controller import register as register_stats
from .workconfig.controller import register as register_config

logger = logging.getLogger(__name__)


def _add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("settings=%s db=%s", settings_module, DBConfig.from_mapping(db_config).describe())

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            ensure_default_config(db_config)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            reminder_timezone=getattr(settings, "REMINDER_TIMEZONE", REMINDER_TIMEZONE),
            holiday_api_url=getattr(settings, "HOLIDAY_API_URL", HOLIDAY_API_URL),
            http_timeout=float(getattr(settings, "HTTP_TIMEOUT_SECONDS", HTTP_TIMEOUT_SECONDS)),
        )

    app.after_request(_add_cors_headers)
    register_sessions(app, container)
    register_config(app, container)
    register_stats(app, container)
    app.extensions["worktime.container"] = container

    if bool(getattr(settings, "ENABLE_SCHEDULER", False)):
        container.scheduler.start()
        atexit.register(container.scheduler.stop)

    return app
