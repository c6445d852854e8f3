from __future__ import annotations

import logging
from datetime import datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_date, now_local, parse_iso_date, parse_iso_datetime
from ..common.json_utils import to_jsonable
from ..common.validators import parse_bool, require_non_empty
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _json_body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Invalid request body")
        return data

    def _parse_instant(data: dict, field: str) -> datetime:
        raw = require_non_empty(str(data.get(field) or ""), field)
        try:
            return parse_iso_datetime(raw)
        except ValueError:
            raise ValidationError(f"{field} must be an ISO-8601 datetime")

    @app.route("/api/checkin", methods=["POST"], endpoint="api_checkin")
    def api_checkin():
        try:
            check_in_time = _parse_instant(_json_body(), "check_in_time")
            result = container.session_service.check_in(check_in_time)
            return jsonify(to_jsonable(result)), 200
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Check-in failed")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/checkout", methods=["POST"], endpoint="api_checkout")
    def api_checkout():
        try:
            check_out_time = _parse_instant(_json_body(), "check_out_time")
            result = container.session_service.check_out(check_out_time)
            return jsonify(to_jsonable(result)), 200
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Check-out failed")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/status", methods=["GET"], endpoint="api_status")
    def api_status():
        try:
            return jsonify(to_jsonable(container.session_service.get_status())), 200
        except Exception:
            logger.exception("Failed to get status")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/today-checkin", methods=["POST"], endpoint="api_today_checkin")
    def api_today_checkin():
        """Return today's check-in, auto-fetching it from the HR API when allowed."""
        try:
            data = _json_body()
            day = str(data.get("date") or format_date(now_local()))
            try:
                parse_iso_date(day)
            except ValueError:
                raise ValidationError("date must be YYYY-MM-DD")

            result = container.session_service.get_today_check_in(
                day,
                force_refetch=parse_bool(data.get("re_check_in"), "re_check_in"),
            )
            return jsonify(to_jsonable(result)), 200
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Failed to get today check-in")
            return jsonify({"error": "Internal server error"}), 500
