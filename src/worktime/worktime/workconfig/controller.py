from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.validators import parse_bool
from ..core.exceptions import ValidationError
from ..container import Container
from .model import ConfigUpdate, WorkConfig

logger = logging.getLogger(__name__)


def _to_response(config: WorkConfig) -> dict:
    return {
        "work_hours": config.default_work_minutes,
        "check_in_api_url": config.check_in_api_url,
        "auto_fetch_enabled": config.auto_fetch_enabled,
        "p_auth": config.p_auth,
        "p_rtoken": config.p_rtoken,
        "check_in_webhook_url": config.check_in_webhook_url,
        "check_out_webhook_url": config.check_out_webhook_url,
    }


def _parse_update(data: dict) -> ConfigUpdate:
    try:
        work_minutes = int(data.get("work_hours") or 0)
    except (TypeError, ValueError):
        raise ValidationError("work_hours must be an integer number of minutes")

    return ConfigUpdate(
        work_minutes=work_minutes,
        check_in_api_url=str(data.get("check_in_api_url") or ""),
        auto_fetch_enabled=parse_bool(data.get("auto_fetch_enabled"), "auto_fetch_enabled"),
        p_auth=str(data.get("p_auth") or ""),
        p_rtoken=str(data.get("p_rtoken") or ""),
        check_in_webhook_url=str(data.get("check_in_webhook_url") or ""),
        check_out_webhook_url=str(data.get("check_out_webhook_url") or ""),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/config", methods=["GET", "POST"], endpoint="api_config")
    def api_config():
        if request.method == "GET":
            try:
                return jsonify(_to_response(container.config_service.get())), 200
            except Exception:
                logger.exception("Failed to get config")
                return jsonify({"error": "Internal server error"}), 500

        try:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ValidationError("Invalid request body")
            container.config_service.update(_parse_update(data))
            return jsonify({"status": "success"}), 200
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Failed to update config")
            return jsonify({"error": "Internal server error"}), 500
