from __future__ import annotations

import json

import pytest
import requests

from src.org_console.org_console.attendance.gas_attendance_repository import GasAttendanceRepository
from src.org_console.org_console.gas.connection import GasClient, GasConfig
from src.org_console.org_console.gas.errors import (
    AlreadyTimedOutError,
    ExistingRecordError,
    GasAPIError,
    GasErrorCode,
    NoTimeInError,
)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self._text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._text is not None:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        result = self._responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _client(*responses, url="https://script.example/exec"):
    session = FakeSession(responses)
    return GasClient(GasConfig(api_url=url, timeout=15), session=session), session


def test_get_builds_query_and_skips_none():
    client, session = _client(FakeResponse({"success": True}))

    client.get("getEvents", {"status": None, "limit": 5, "active": True})

    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["timeout"] == 15
    assert call["params"] == {"action": "getEvents", "limit": "5", "active": "true"}


def test_post_sends_text_plain_json_with_action():
    client, session = _client(FakeResponse({"success": True}))

    client.post("createEvent", {"eventData": {"title": "Cleanup"}})

    call = session.calls[0]
    assert call["headers"] == {"Content-Type": "text/plain"}
    assert json.loads(call["data"]) == {"action": "createEvent", "eventData": {"title": "Cleanup"}}


def test_unconfigured_url_raises():
    client, session = _client(url="")
    with pytest.raises(GasAPIError) as exc:
        client.get("getEvents")
    assert exc.value.code == GasErrorCode.API_NOT_CONFIGURED
    assert session.calls == []


@pytest.mark.parametrize(
    "result, code",
    [
        (requests.Timeout("slow"), GasErrorCode.TIMEOUT),
        (requests.ConnectionError("down"), GasErrorCode.NETWORK_ERROR),
        (FakeResponse({}, status_code=500), GasErrorCode.SERVER_ERROR),
        (FakeResponse(text="<html>"), GasErrorCode.INVALID_RESPONSE),
        (FakeResponse([1, 2]), GasErrorCode.INVALID_RESPONSE),
    ],
)
def test_failures_map_to_error_codes(result, code):
    client, _ = _client(result)
    with pytest.raises(GasAPIError) as exc:
        client.get("getEvents")
    assert exc.value.code == code


def test_http_error_message_has_status():
    client, _ = _client(FakeResponse({}, status_code=503))
    with pytest.raises(GasAPIError, match="HTTP error! status: 503"):
        client.get("getEvents")


def test_health_never_raises():
    client, _ = _client(requests.ConnectionError("down"))
    assert client.health("getEventStats") is False
    assert GasClient(GasConfig(api_url="")).health("getEventStats") is False


def test_time_in_existing_record_carries_record():
    existing = {"attendanceId": "ATT-1", "timeIn": "8:00 AM"}
    client, _ = _client(
        FakeResponse({"success": False, "error": "EXISTING_RECORD", "message": "Already in", "existingRecord": existing})
    )
    repo = GasAttendanceRepository(client)

    with pytest.raises(ExistingRecordError) as exc:
        repo.record_time_in(
            event_id="EVT-1", member_id="M-1", member_name="Ana", status="Present", location=None, recorded_by="x"
        )
    assert exc.value.existing_record == existing
    assert exc.value.message == "Already in"


@pytest.mark.parametrize(
    "error, exc_type",
    [("NO_TIME_IN", NoTimeInError), ("ALREADY_TIMED_OUT", AlreadyTimedOutError)],
)
def test_time_out_errors_are_distinct(error, exc_type):
    client, _ = _client(FakeResponse({"success": False, "error": error}))
    repo = GasAttendanceRepository(client)
    with pytest.raises(exc_type):
        repo.record_time_out(event_id="EVT-1", member_id="M-1", location=None, recorded_by="x")


def test_unfiltered_members_are_cached_until_cleared():
    members = {"success": True, "members": [{"id": "M-1", "name": "Ana"}]}
    client, session = _client(FakeResponse(members), FakeResponse(members), FakeResponse(members))
    repo = GasAttendanceRepository(client, members_cache_seconds=300)

    repo.get_members(search="", limit=50)
    repo.get_members(search="", limit=50)
    assert len(session.calls) == 1

    repo.get_members(search="an", limit=50)
    assert len(session.calls) == 2

    repo.clear_members_cache()
    repo.get_members(search="", limit=50)
    assert len(session.calls) == 3


def test_geofence_valid_defaults_to_true():
    client, _ = _client(FakeResponse({"success": True, "message": "ok"}))
    check = GasAttendanceRepository(client).validate_geofence(event_id="EVT-1", lat=7.4, lng=125.8)
    assert check.valid is True


def test_member_cache_is_kept_per_limit():
    roster = [{"id": f"YSP-{n:03d}", "name": f"Member {n}"} for n in range(1, 81)]
    client, session = _client(
        FakeResponse({"success": True, "members": roster[:50]}),
        FakeResponse({"success": True, "members": roster}),
        FakeResponse({"success": True, "members": roster[:10]}),
    )
    repo = GasAttendanceRepository(client, members_cache_seconds=300)

    assert len(repo.get_members(search="", limit=50)) == 50
    full = repo.get_members(search="", limit=500)
    assert "YSP-060" in [m.id for m in full]
    assert len(repo.get_members(search="", limit=10)) == 10
    assert [c["params"]["limit"] for c in session.calls] == ["50", "500", "10"]

    assert len(repo.get_members(search="", limit=50)) == 50
    assert len(session.calls) == 3
