from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Iterable, Mapping, Optional, Sequence

from ..attendance.model import PRESENT_STATUSES, AttendanceRecord, MemberForAttendance
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_date_value, format_time_range, format_time_value, now_local
from ..common.validators import require_non_empty
from ..core.constants import (
    COMMITTEE_ALL,
    COMMITTEE_EXECUTIVE,
    COMMITTEE_MEMBERS,
    COMMITTEE_VOLUNTEERS,
    COMMITTEES,
    DASHBOARD_MEMBERS_LIMIT,
    EXECUTIVE_POSITION_KEYWORDS,
    STATUS_COLORS,
)
from ..core.enums import AttendanceStatus, EventStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..events.model import Event
from ..events.repository import EventRepository

log = get_logger(__name__)

STATUS_BUCKETS = ("Present", "Late", "Excused", "Absent")
DASHBOARD_EVENT_STATUSES = frozenset(
    {EventStatus.ACTIVE.value, EventStatus.SCHEDULED.value, EventStatus.COMPLETED.value}
)


@dataclass(frozen=True)
class StatusSlice:
    name: str
    value: int
    color: str

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value, "color": self.color}


@dataclass(frozen=True)
class ReportData:
    """Everything an exporter needs for one event/committee view."""

    org_name: str
    org_chapter: str
    event: Optional[Event]
    committee: str
    summary: dict[str, int]
    rows: list[dict]
    generated_at: datetime
    event_date: str = "-"
    event_time: str = "-"

    @property
    def total(self) -> int:
        return len(self.rows)

    @property
    def event_title(self) -> str:
        return self.event.title if self.event and self.event.title else ""

    @property
    def event_status(self) -> str:
        return self.event.status if self.event and self.event.status else "-"


@dataclass(frozen=True)
class DashboardData:
    event_id: str
    committee: str
    records: list[AttendanceRecord]
    chart: list[StatusSlice]
    bars: list[dict]
    summary: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.records)

    def to_dict(self) -> dict:
        return {
            "eventId": self.event_id,
            "committee": self.committee,
            "total": self.total,
            "summary": dict(self.summary),
            "chart": [s.to_dict() for s in self.chart],
            "bars": list(self.bars),
            "records": [r.to_dict() for r in self.records],
        }


def status_bucket(status: str) -> Optional[str]:
    if status in PRESENT_STATUSES:
        return "Present"
    if status in (AttendanceStatus.LATE.value, AttendanceStatus.EXCUSED.value, AttendanceStatus.ABSENT.value):
        return status
    return None


def matches_committee(member: Optional[MemberForAttendance], committee: str) -> bool:
    if committee == COMMITTEE_ALL:
        return True
    if member is None:
        return False

    position = (member.position or "").lower()
    if committee == COMMITTEE_EXECUTIVE:
        return any(word in position for word in EXECUTIVE_POSITION_KEYWORDS)
    if committee == COMMITTEE_MEMBERS:
        return "member" in position
    if committee == COMMITTEE_VOLUNTEERS:
        return "volunteer" in position
    return member.committee == committee


def committee_short_name(committee: str) -> str:
    """First two words, at most 15 characters; used as the bar chart label."""
    return " ".join((committee or "Unknown").split(" ")[:2])[:15]


def export_filename(title: str, extension: str, today: date) -> str:
    safe_title = re.sub(r"[^a-zA-Z0-9]", "_", title) if title else "Event"
    return f"Attendance_{safe_title}_{today.isoformat()}.{extension}"


class DashboardService:
    """Attendance analytics for a single event, plus export assembly."""

    def __init__(
        self,
        events: EventRepository,
        attendance: AttendanceRepository,
        *,
        org_name: str,
        org_chapter: str,
        tz_name: Optional[str] = None,
    ):
        self._events = events
        self._attendance = attendance
        self._org_name = org_name
        self._org_chapter = org_chapter
        self._tz_name = tz_name

    @staticmethod
    def committees() -> Sequence[str]:
        return COMMITTEES

    def dashboard_events(self) -> list[Event]:
        return [e for e in self._events.list_events(status=None) if e.status in DASHBOARD_EVENT_STATUSES]

    def members_by_id(self) -> dict[str, MemberForAttendance]:
        members = self._attendance.get_members(search="", limit=DASHBOARD_MEMBERS_LIMIT)
        return {m.id: m for m in members}

    # ---- pure helpers ------------------------------------------------

    @staticmethod
    def filter_records(
        records: Iterable[AttendanceRecord],
        members: Mapping[str, MemberForAttendance],
        committee: str,
    ) -> list[AttendanceRecord]:
        return [r for r in records if matches_committee(members.get(r.member_id), committee)]

    @staticmethod
    def status_counts(records: Iterable[AttendanceRecord]) -> dict[str, int]:
        counts = {name: 0 for name in STATUS_BUCKETS}
        for r in records:
            bucket = status_bucket(r.status)
            if bucket:
                counts[bucket] += 1
        return counts

    @classmethod
    def chart_data(cls, records: Iterable[AttendanceRecord]) -> list[StatusSlice]:
        counts = cls.status_counts(records)
        return [StatusSlice(name, counts[name], STATUS_COLORS[name]) for name in STATUS_BUCKETS if counts[name] > 0]

    @staticmethod
    def bar_data(
        records: Iterable[AttendanceRecord],
        members: Mapping[str, MemberForAttendance],
    ) -> list[dict]:
        by_committee: dict[str, dict[str, int]] = {}
        for r in records:
            member = members.get(r.member_id)
            name = committee_short_name(member.committee if member and member.committee else "Unknown")
            counts = by_committee.setdefault(name, {bucket: 0 for bucket in STATUS_BUCKETS})
            bucket = status_bucket(r.status)
            if bucket:
                counts[bucket] += 1
        return [{"committee": name, **counts} for name, counts in by_committee.items()]

    @staticmethod
    def members_by_status(
        records: Iterable[AttendanceRecord],
        members: Mapping[str, MemberForAttendance],
        status: str,
    ) -> list[MemberForAttendance]:
        out = []
        for r in records:
            if status_bucket(r.status) != status:
                continue
            out.append(members.get(r.member_id) or MemberForAttendance(id=r.member_id, name=r.member_name))
        return out

    @staticmethod
    def export_rows(
        records: Sequence[AttendanceRecord],
        members: Mapping[str, MemberForAttendance],
    ) -> list[dict]:
        rows = []
        for index, r in enumerate(records, start=1):
            member = members.get(r.member_id)
            rows.append(
                {
                    "index": index,
                    "name": r.member_name or (member.name if member else "") or "Unknown",
                    "committee": (member.committee if member else "") or "-",
                    "position": (member.position if member else "") or "-",
                    "status": r.status,
                    "time_in": format_time_value(r.time_in),
                    "time_out": format_time_value(r.time_out),
                    "recorded_by_in": r.recorded_by_time_in or "-",
                    "recorded_by_out": r.recorded_by_time_out or "-",
                    "notes": r.notes or "-",
                }
            )
        return rows

    # ---- use cases ---------------------------------------------------

    def _check_committee(self, committee: Optional[str]) -> str:
        committee = committee or COMMITTEE_ALL
        if committee not in COMMITTEES:
            raise ValidationError(f"Invalid committee: {committee!r}")
        return committee

    def dashboard(self, event_id: str, committee: Optional[str] = None) -> DashboardData:
        event_id = require_non_empty(event_id, "Event")
        committee = self._check_committee(committee)

        records = list(self._attendance.get_event_records(event_id))
        members = self.members_by_id()
        filtered = self.filter_records(records, members, committee)
        return DashboardData(
            event_id=event_id,
            committee=committee,
            records=filtered,
            chart=self.chart_data(filtered),
            bars=self.bar_data(records, members),
            summary=self.status_counts(filtered),
        )

    def status_members(self, event_id: str, status: str, committee: Optional[str] = None) -> list[MemberForAttendance]:
        if status not in STATUS_BUCKETS:
            raise ValidationError(f"Invalid status: {status!r}")
        committee = self._check_committee(committee)
        records = self._attendance.get_event_records(require_non_empty(event_id, "Event"))
        members = self.members_by_id()
        return self.members_by_status(self.filter_records(records, members, committee), members, status)

    def build_report(self, event_id: str, committee: Optional[str] = None) -> ReportData:
        event_id = require_non_empty(event_id, "Event")
        committee = self._check_committee(committee)

        records = list(self._attendance.get_event_records(event_id))
        if not records:
            raise ValidationError("No attendance data to export")

        event = self._events.get_event(event_id)
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")

        members = self.members_by_id()
        filtered = self.filter_records(records, members, committee)
        log.info("building report event=%s committee=%s rows=%d", event_id, committee, len(filtered))
        return ReportData(
            org_name=self._org_name,
            org_chapter=self._org_chapter,
            event=event,
            committee=committee,
            summary=self.status_counts(filtered),
            rows=self.export_rows(filtered, members),
            generated_at=now_local(self._tz_name),
            event_date=format_date_value(event.start_date, self._tz_name) if event.start_date else "-",
            event_time=format_time_range(event.start_time, event.end_time),
        )

    def filename(self, report: ReportData, extension: str) -> str:
        """Download name; dated by the UTC day the report was generated."""
        return export_filename(report.event_title, extension, report.generated_at.astimezone(timezone.utc).date())
