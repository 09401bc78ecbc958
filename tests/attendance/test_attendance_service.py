from __future__ import annotations

import pytest

from src.org_console.org_console.attendance.model import ExistingAttendance, GeofenceCheck, MemberForAttendance, RecordingResult
from src.org_console.org_console.attendance.qr import member_code_from_payload
from src.org_console.org_console.attendance.service import AttendanceService
from src.org_console.org_console.core.exceptions import NotFoundError, ValidationError


class FakeAttendanceRepo:
    def __init__(self, members=()):
        self.members = list(members)
        self.calls = []

    def record_time_in(self, **kwargs):
        self.calls.append(("in", kwargs))
        return RecordingResult(attendance_id="ATT-1", created=True)

    def record_time_out(self, **kwargs):
        self.calls.append(("out", kwargs))
        return RecordingResult(attendance_id="ATT-1", updated=True)

    def record_manual(self, **kwargs):
        self.calls.append(("manual", kwargs))
        return RecordingResult(attendance_id="ATT-2", created=True)

    def check_existing(self, *, event_id, member_id):
        return ExistingAttendance(exists=False)

    def get_event_records(self, event_id):
        return []

    def get_member_history(self, member_id, limit):
        self.calls.append(("history", {"member_id": member_id, "limit": limit}))
        return []

    def get_members(self, *, search, limit):
        return self.members

    def clear_members_cache(self):
        self.calls.append(("clear", {}))

    def validate_geofence(self, *, event_id, lat, lng):
        return GeofenceCheck(valid=True)

    def is_healthy(self):
        return True


MEMBERS = [MemberForAttendance(id="YSP-001", name="Juan Dela Cruz", committee="Finance and Treasury Committee")]


def _svc(prefix=""):
    repo = FakeAttendanceRepo(MEMBERS)
    return AttendanceService(repo, qr_prefix=prefix), repo


@pytest.mark.parametrize("status", ["Absent", "Excused"])
@pytest.mark.parametrize("time_type", ["out", "both"])
def test_manual_time_out_not_allowed_for_absent_or_excused(status, time_type):
    svc, repo = _svc()
    with pytest.raises(ValidationError, match=f"Cannot record Time Out for {status} status"):
        svc.record_manual(event_id="EVT-1", member_id="YSP-001", status=status, time_type=time_type)
    assert repo.calls == []


def test_manual_time_in_for_absent_is_allowed():
    svc, repo = _svc()
    svc.record_manual(event_id="EVT-1", member_id="YSP-001", status="Absent", time_type="in", recorded_by="Head")
    kind, kwargs = repo.calls[0]
    assert kind == "manual"
    assert kwargs["status"] == "Absent"
    assert kwargs["overwrite"] is False


def test_manual_requires_event_and_member():
    svc, _ = _svc()
    with pytest.raises(ValidationError, match="Please select an event"):
        svc.record_manual(event_id="", member_id="YSP-001", status="Present")
    with pytest.raises(ValidationError, match="Please select a member"):
        svc.record_manual(event_id="EVT-1", member_id="", status="Present")


def test_scan_always_records_present():
    svc, repo = _svc(prefix="YSP")
    member, _ = svc.record_scan(event_id="EVT-1", qr_payload="ysp:YSP-001", recorded_by="Officer")

    kind, kwargs = repo.calls[0]
    assert member.name == "Juan Dela Cruz"
    assert kind == "in"
    assert kwargs["status"] == "Present"
    assert kwargs["member_name"] == "Juan Dela Cruz"


def test_scan_overwrite_goes_through_manual_path():
    svc, repo = _svc()
    svc.record_scan(event_id="EVT-1", qr_payload="YSP-001", time_type="out", overwrite=True)

    kind, kwargs = repo.calls[0]
    assert kind == "manual"
    assert kwargs["overwrite"] is True
    assert kwargs["status"] == "Present"
    assert kwargs["time_type"] == "out"


def test_scan_time_out():
    svc, repo = _svc()
    svc.record_scan(event_id="EVT-1", qr_payload="YSP-001", time_type="out")
    assert repo.calls[0][0] == "out"


def test_scan_unknown_member_is_rejected():
    svc, repo = _svc()
    with pytest.raises(NotFoundError):
        svc.record_scan(event_id="EVT-1", qr_payload="NOPE-999")
    with pytest.raises(ValidationError):
        svc.record_scan(event_id="EVT-1", qr_payload="   ")
    assert repo.calls == []


def test_time_in_location_must_be_numeric():
    svc, repo = _svc()
    svc.record_time_in(event_id="EVT-1", member_id="YSP-001", lat="7.44", lng="125.8")
    assert repo.calls[0][1]["location"].to_dict() == {"lat": 7.44, "lng": 125.8}

    with pytest.raises(ValidationError):
        svc.record_time_in(event_id="EVT-1", member_id="YSP-001", lat="north", lng="125.8")


def test_time_in_rejects_unknown_status():
    svc, _ = _svc()
    with pytest.raises(ValidationError):
        svc.record_time_in(event_id="EVT-1", member_id="YSP-001", status="Sleeping")


def test_member_history_clamps_limit():
    svc, repo = _svc()
    svc.member_history("YSP-001", limit=0)
    assert repo.calls[-1] == ("history", {"member_id": "YSP-001", "limit": 1})


def test_geofence_needs_coordinates():
    svc, _ = _svc()
    with pytest.raises(ValidationError):
        svc.validate_geofence(event_id="EVT-1", lat=None, lng=None)
    assert svc.validate_geofence(event_id="EVT-1", lat=7.4, lng=125.8).valid is True


def test_member_code_prefix_is_optional():
    assert member_code_from_payload(" YSP:YSP-001 ", "YSP") == "YSP-001"
    assert member_code_from_payload("YSP-001", "YSP") == "YSP-001"
    assert member_code_from_payload("YSP:YSP-001", "") == "YSP:YSP-001"
