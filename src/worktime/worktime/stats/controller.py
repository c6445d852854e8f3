from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.json_utils import to_jsonable
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/monthly-stats", methods=["GET"], endpoint="api_monthly_stats")
    def api_monthly_stats():
        try:
            return jsonify(to_jsonable(container.stats_service.get_monthly_stats())), 200
        except Exception:
            logger.exception("Failed to get monthly stats")
            return jsonify({"error": "Internal server error"}), 500
