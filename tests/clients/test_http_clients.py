from __future__ import annotations

from datetime import datetime

import pytest
import requests

from src.worktime.worktime.clients.attendance import HRAttendanceClient, build_api_url
from src.worktime.worktime.clients.holiday import HolidayAPIClient
from src.worktime.worktime.clients.notifier import NtfyWebhookNotifier
from src.worktime.worktime.core.exceptions import (
    AttendanceProviderError,
    HolidayProviderError,
    NotificationError,
)
from src.worktime.worktime.workconfig.model import WorkConfig


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeHTTP:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[tuple[str, str, dict]] = []

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        if self.error:
            raise self.error
        return self.response

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        if self.error:
            raise self.error
        return self.response


CONFIG = WorkConfig(
    check_in_api_url="https://hr.example.com/attendance",
    p_auth="auth-token",
    p_rtoken="refresh-token",
)


def _hr_payload(*records, code="200", success=True):
    return {"code": code, "success": success, "message": "ok", "data": list(records)}


def test_build_api_url_appends_month():
    assert build_api_url("https://hr/a", "2025-10-01") == "https://hr/a?monthly=2025-10"
    assert build_api_url("https://hr/a?x=1", "2025-10-01") == "https://hr/a?x=1&monthly=2025-10"
    assert build_api_url("https://hr/a?monthly=2025-09", "2025-10-01") == "https://hr/a?monthly=2025-09"


def test_hr_client_parses_matching_record():
    payload = _hr_payload(
        {"attendanceDate": "2025-09-30", "firstClockInTime": "08:00", "lastClockOutTime": "18:00"},
        {"attendanceDate": "2025-10-01", "firstClockInTime": "09:05", "lastClockOutTime": "19:10"},
    )
    http = FakeHTTP(FakeResponse(payload=payload))
    client = HRAttendanceClient(session=http)

    check_in, check_out = client.fetch_attendance_status(CONFIG, "2025-10-01")

    assert check_in == datetime(2025, 10, 1, 9, 5)
    assert check_out == datetime(2025, 10, 1, 19, 10)
    _, url, kwargs = http.calls[0]
    assert url == "https://hr.example.com/attendance?monthly=2025-10"
    assert kwargs["headers"]["P-Auth"] == "auth-token"
    assert kwargs["headers"]["P-Rtoken"] == "refresh-token"


def test_hr_client_missing_clock_out_is_none():
    payload = _hr_payload({"attendanceDate": "2025-10-01", "firstClockInTime": "09:05", "lastClockOutTime": ""})
    client = HRAttendanceClient(session=FakeHTTP(FakeResponse(payload=payload)))

    assert client.fetch_attendance_status(CONFIG, "2025-10-01") == (datetime(2025, 10, 1, 9, 5), None)


def test_hr_client_no_record_for_date():
    client = HRAttendanceClient(session=FakeHTTP(FakeResponse(payload=_hr_payload())))

    assert client.fetch_attendance_status(CONFIG, "2025-10-01") == (None, None)


def test_hr_client_requires_api_config():
    http = FakeHTTP(FakeResponse(payload=_hr_payload()))
    client = HRAttendanceClient(session=http)

    with pytest.raises(AttendanceProviderError):
        client.fetch_attendance_status(WorkConfig(check_in_api_url="https://hr"), "2025-10-01")
    assert http.calls == []


@pytest.mark.parametrize(
    "http",
    [
        FakeHTTP(error=requests.ConnectionError("refused")),
        FakeHTTP(FakeResponse(status_code=401, text="unauthorized")),
        FakeHTTP(FakeResponse(payload=None)),
        FakeHTTP(FakeResponse(payload=_hr_payload(code="500", success=False))),
    ],
)
def test_hr_client_failures_raise_provider_error(http):
    client = HRAttendanceClient(session=http)

    with pytest.raises(AttendanceProviderError):
        client.fetch_attendance_status(CONFIG, "2025-10-01")


def test_holiday_client_rest_day():
    client = HolidayAPIClient(api_url="http://holiday/today", session=FakeHTTP(FakeResponse(payload={"data": {"status": "休息"}})))

    assert client.is_holiday() is True


def test_holiday_client_working_day():
    client = HolidayAPIClient(api_url="http://holiday/today", session=FakeHTTP(FakeResponse(payload={"data": {"status": "工作"}})))

    assert client.is_holiday() is False


def test_holiday_client_errors():
    client = HolidayAPIClient(session=FakeHTTP(error=requests.Timeout("slow")))

    with pytest.raises(HolidayProviderError):
        client.is_holiday()


def test_notifier_posts_urgent_plain_text():
    http = FakeHTTP(FakeResponse(status_code=200))
    NtfyWebhookNotifier(session=http).send("https://ntfy.sh/topic", "hello")

    method, url, kwargs = http.calls[0]
    assert (method, url) == ("POST", "https://ntfy.sh/topic")
    assert kwargs["data"] == b"hello"
    assert kwargs["headers"]["Priority"] == "urgent"
    assert kwargs["headers"]["Title"] == "Work Time Reminder"


def test_notifier_uses_default_message_when_empty():
    http = FakeHTTP(FakeResponse(status_code=204))
    NtfyWebhookNotifier(session=http).send("https://ntfy.sh/topic", "")

    assert http.calls[0][2]["data"] == b"Work time notification"


def test_notifier_rejects_empty_url():
    http = FakeHTTP(FakeResponse(status_code=200))

    with pytest.raises(NotificationError, match="empty"):
        NtfyWebhookNotifier(session=http).send("", "hello")
    assert http.calls == []


def test_notifier_non_2xx_fails():
    with pytest.raises(NotificationError, match="500"):
        NtfyWebhookNotifier(session=FakeHTTP(FakeResponse(status_code=500))).send("https://ntfy.sh/t", "x")


@pytest.mark.parametrize(
    "payload",
    [
        ["oops"],
        "not an object",
        {"code": "200", "success": True, "data": "nope"},
        {"code": "200", "success": True, "data": ["2025-10-01"]},
        {"code": "200", "success": True, "data": [{"attendanceDate": "2025-10-01", "firstClockInTime": 905}]},
    ],
)
def test_hr_client_malformed_body_raises_provider_error(payload):
    client = HRAttendanceClient(session=FakeHTTP(FakeResponse(payload=payload)))

    with pytest.raises(AttendanceProviderError):
        client.fetch_attendance_status(CONFIG, "2025-10-01")


@pytest.mark.parametrize("payload", [["oops"], "holiday", {"data": None}, {"data": "休息"}])
def test_holiday_client_malformed_body_raises_provider_error(payload):
    client = HolidayAPIClient(session=FakeHTTP(FakeResponse(payload=payload)))

    with pytest.raises(HolidayProviderError):
        client.is_holiday()
