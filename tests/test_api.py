from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

import pytest

from src.worktime.worktime.main import create_app
from src.worktime.worktime.sessions.model import WorkSession
from src.worktime.worktime.sessions.service import WorkSessionService
from src.worktime.worktime.stats.service import MonthlyStatsService
from src.worktime.worktime.workconfig.model import WorkConfig
from src.worktime.worktime.workconfig.service import WorkConfigService


class InMemorySessions:
    def __init__(self):
        self.by_date: dict[str, WorkSession] = {}

    def get_today_session(self, date: str) -> Optional[WorkSession]:
        return self.by_date.get(date)

    def get_sessions_by_month(self, year_month: str):
        return sorted((s for s in self.by_date.values() if s.date.startswith(year_month)), key=lambda s: s.date)

    def save_session(self, session: WorkSession) -> None:
        self.by_date[session.date] = session


class InMemoryConfigs:
    def __init__(self):
        self.config = WorkConfig()

    def get_config(self) -> WorkConfig:
        return self.config

    def save_config(self, config: WorkConfig) -> None:
        self.config = config


class NoAttendance:
    def fetch_attendance_status(self, config, date):
        return None, None


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    sessions = InMemorySessions()
    configs = InMemoryConfigs()
    container = SimpleNamespace(
        session_service=WorkSessionService(sessions, configs, NoAttendance()),
        config_service=WorkConfigService(configs, sessions),
        stats_service=MonthlyStatsService(sessions),
    )
    app = create_app(container)
    return app.test_client()


def test_check_in_then_check_out(client):
    resp = client.post("/api/checkin", json={"check_in_time": "2025-10-01T09:00:00"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["expected_check_out_time"] == "2025-10-01T17:00:00"
    assert body["work_minutes"] == 480

    resp = client.post("/api/checkout", json={"check_out_time": "2025-10-01T19:30:00"})
    assert resp.status_code == 200
    assert resp.get_json()["overtime_minutes"] == 30


def test_check_out_without_check_in_is_client_error(client):
    resp = client.post("/api/checkout", json={"check_out_time": "2025-10-01T19:30:00"})

    assert resp.status_code == 400
    assert "no check-in" in resp.get_json()["error"]


def test_malformed_body_is_rejected(client):
    assert client.post("/api/checkin", data="not json", content_type="text/plain").status_code == 400
    assert client.post("/api/checkin", json={"check_in_time": "yesterday"}).status_code == 400


def test_status_without_session(client):
    resp = client.get("/api/status")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["has_checked_in"] is False
    assert body["work_minutes"] == 480
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_config_round_trip(client):
    resp = client.post("/api/config", json={"work_hours": 450, "check_in_webhook_url": "https://ntfy.sh/in"})
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "success"}

    body = client.get("/api/config").get_json()
    assert body["work_hours"] == 450
    assert body["check_in_webhook_url"] == "https://ntfy.sh/in"


def test_config_rejects_more_than_a_day(client):
    resp = client.post("/api/config", json={"work_hours": 1500})

    assert resp.status_code == 400
    assert client.get("/api/config").get_json()["work_hours"] == 480


def test_today_checkin_reports_capabilities(client):
    resp = client.post("/api/today-checkin", json={"date": "2025-10-01"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["has_checked_in"] is False
    assert body["can_auto_fetch"] is False


def test_today_checkin_rejects_bad_date(client):
    assert client.post("/api/today-checkin", json={"date": "01/10/2025"}).status_code == 400


def test_monthly_stats_shape(client):
    resp = client.get("/api/monthly-stats")

    assert resp.status_code == 200
    body = resp.get_json()
    assert set(body) == {"current_month", "last_month"}
    assert body["current_month"]["total_days"] == 0


def test_status_includes_state(client):
    assert client.get("/api/status").get_json()["state"] == "NO_SESSION"


def test_config_string_false_disables_auto_fetch(client):
    resp = client.post("/api/config", json={"work_hours": 0, "auto_fetch_enabled": "false"})
    assert resp.status_code == 200
    assert client.get("/api/config").get_json()["auto_fetch_enabled"] is False

    client.post("/api/config", json={"auto_fetch_enabled": True})
    assert client.get("/api/config").get_json()["auto_fetch_enabled"] is True


def test_config_rejects_non_boolean_flag(client):
    resp = client.post("/api/config", json={"auto_fetch_enabled": "maybe"})

    assert resp.status_code == 400


def test_today_checkin_rejects_non_boolean_re_check_in(client):
    resp = client.post("/api/today-checkin", json={"date": "2025-10-01", "re_check_in": "sometimes"})

    assert resp.status_code == 400
