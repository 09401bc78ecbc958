from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from src.org_console.org_console.attendance.model import AttendanceRecord, MemberForAttendance
from src.org_console.org_console.core.exceptions import ValidationError
from src.org_console.org_console.events.model import Event
from src.org_console.org_console.reports.service import (
    DashboardService,
    committee_short_name,
    export_filename,
    matches_committee,
)

MEMBERS = [
    MemberForAttendance(id="M1", name="Ana Lopez", committee="Finance and Treasury Committee", position="Committee Head"),
    MemberForAttendance(id="M2", name="Pedro Garcia", committee="Finance and Treasury Committee", position="Member"),
    MemberForAttendance(id="M3", name="Sofia Martinez", committee="External Relations Committee", position="Volunteer"),
    MemberForAttendance(id="M4", name="Carlos Reyes", committee="", position="Vice President"),
]


def _record(member_id, status, name="", **extra):
    return AttendanceRecord(
        attendance_id=f"A-{member_id}", event_id="EVT-1", member_id=member_id, member_name=name, status=status, **extra
    )


RECORDS = [
    _record("M1", "CheckedOut"),
    _record("M2", "Late"),
    _record("M3", "Present"),
    _record("M4", "Excused"),
    _record("GHOST", "Absent", name="Walk-in"),
]


class FakeEventRepo:
    def __init__(self, events):
        self.events = {e.event_id: e for e in events}

    def list_events(self, *, status=None):
        return list(self.events.values())

    def get_event(self, event_id):
        return self.events.get(event_id)


class FakeAttendanceRepo:
    def __init__(self, records, members):
        self.records = records
        self.members = members

    def get_event_records(self, event_id):
        return list(self.records)

    def get_members(self, *, search, limit):
        return list(self.members)


def _svc(records=RECORDS, events=None):
    events = events or [Event(event_id="EVT-1", title="Tree Planting 2026!", start_date="2026-02-20", status="Active")]
    return DashboardService(
        FakeEventRepo(events),
        FakeAttendanceRepo(records, MEMBERS),
        org_name="Youth Service Philippines",
        org_chapter="Tagum Chapter",
        tz_name="Asia/Manila",
    )


def _members():
    return {m.id: m for m in MEMBERS}


@pytest.mark.parametrize(
    "committee, expected",
    [
        ("All", ["M1", "M2", "M3", "M4", "GHOST"]),
        ("Executive Board (only heads/Officers)", ["M1", "M4"]),
        ("Only Members", ["M2"]),
        ("Only Volunteers", ["M3"]),
        ("Finance and Treasury Committee", ["M1", "M2"]),
    ],
)
def test_committee_filter(committee, expected):
    filtered = DashboardService.filter_records(RECORDS, _members(), committee)
    assert [r.member_id for r in filtered] == expected


def test_unknown_member_only_matches_all():
    assert matches_committee(None, "All") is True
    assert matches_committee(None, "Only Members") is False


def test_status_buckets_and_chart_omit_zero():
    records = [_record("M1", "CheckedIn"), _record("M2", "Present"), _record("M3", "Late"), _record("M4", "Registered")]
    assert DashboardService.status_counts(records) == {"Present": 2, "Late": 1, "Excused": 0, "Absent": 0}

    chart = DashboardService.chart_data(records)
    assert [(s.name, s.value, s.color) for s in chart] == [("Present", 2, "#10b981"), ("Late", 1, "#f59e0b")]


def test_bar_data_uses_short_committee_names():
    bars = DashboardService.bar_data(RECORDS, _members())
    by_name = {b["committee"]: b for b in bars}

    assert by_name["Finance and"] == {"committee": "Finance and", "Present": 1, "Late": 1, "Excused": 0, "Absent": 0}
    assert by_name["Unknown"]["Absent"] == 1
    assert by_name["Unknown"]["Excused"] == 1


def test_committee_short_name_truncates():
    assert committee_short_name("Communications and Marketing Committee") == "Communications "
    assert committee_short_name("") == "Unknown"


def test_members_by_status_falls_back_to_record_name():
    members = DashboardService.members_by_status(RECORDS, _members(), "Absent")
    assert [(m.id, m.name) for m in members] == [("GHOST", "Walk-in")]

    present = DashboardService.members_by_status(RECORDS, _members(), "Present")
    assert [m.id for m in present] == ["M1", "M3"]


def test_dashboard_events_only_active_scheduled_completed():
    events = [
        Event(event_id=s, title=s, status=s) for s in ("Active", "Scheduled", "Completed", "Cancelled", "Draft", "Inactive")
    ]
    assert [e.event_id for e in _svc(events=events).dashboard_events()] == ["Active", "Scheduled", "Completed"]


def test_dashboard_filters_chart_but_bars_use_all_records():
    data = _svc().dashboard("EVT-1", "Only Volunteers")
    assert data.total == 1
    assert data.summary["Present"] == 1
    assert sum(b["Absent"] for b in data.bars) == 1


def test_export_rows_defaults():
    records = [
        _record("M1", "Present", name="Ana L.", time_in="1899-12-30T08:05:00.000Z", recorded_by_time_in="Head"),
        _record("GHOST", "Absent"),
    ]
    rows = DashboardService.export_rows(records, _members())

    assert rows[0]["index"] == 1
    assert rows[0]["name"] == "Ana L."
    assert rows[0]["time_in"] == "8:05 AM"
    assert rows[0]["time_out"] == "-"
    assert rows[0]["recorded_by_in"] == "Head"
    assert rows[0]["recorded_by_out"] == "-"
    assert rows[1]["name"] == "Unknown"
    assert rows[1]["committee"] == "-"


def test_build_report_refuses_empty_event():
    with pytest.raises(ValidationError, match="No attendance data to export"):
        _svc(records=[]).build_report("EVT-1")


def test_build_report_header_fields():
    events = [
        Event(
            event_id="EVT-1",
            title="Tree Planting",
            start_date="2026-02-20",
            start_time="1899-12-30T14:00:00.000Z",
            end_time="1899-12-30T17:00:00.000Z",
            status="Completed",
        )
    ]
    report = _svc(events=events).build_report("EVT-1", "All")

    assert report.event_date == "February 20, 2026"
    assert report.event_time == "2:00 PM - 5:00 PM"
    assert report.total == 5
    assert report.summary == {"Present": 2, "Late": 1, "Excused": 1, "Absent": 1}


def test_export_filename_sanitises_title():
    assert export_filename("Tree Planting 2026!", "pdf", date(2026, 2, 21)) == "Attendance_Tree_Planting_2026__2026-02-21.pdf"
    assert export_filename("", "xlsx", date(2026, 2, 21)) == "Attendance_Event_2026-02-21.xlsx"


def test_export_filename_uses_utc_day():
    svc = _svc()
    report = replace(
        svc.build_report("EVT-1", "All"), generated_at=datetime(2026, 2, 21, 6, 30, tzinfo=ZoneInfo("Asia/Manila"))
    )

    assert svc.filename(report, "pdf") == "Attendance_Tree_Planting_2026__2026-02-20.pdf"
