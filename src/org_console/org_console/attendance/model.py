from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import AttendanceStatus
from ..gas.base import to_bool, to_float, to_str

# Statuses counted as "Present" on the dashboard.
PRESENT_STATUSES = frozenset(
    {AttendanceStatus.PRESENT.value, AttendanceStatus.CHECKED_IN.value, AttendanceStatus.CHECKED_OUT.value}
)
# Statuses that cannot carry a Time Out.
NO_TIME_OUT_STATUSES = frozenset({AttendanceStatus.ABSENT, AttendanceStatus.EXCUSED})


@dataclass(frozen=True)
class AttendanceRecord:
    """A row of EventAttendance as served by the attendance actions."""

    attendance_id: str
    event_id: str
    member_id: str
    member_name: str
    status: str
    time_in: Any = ""
    time_out: Any = ""
    date: Any = ""
    location: str = ""
    geofence_status: str = ""
    notes: str = ""
    recorded_by: str = ""
    recorded_at: str = ""
    recorded_by_time_in: str = ""
    recorded_by_time_out: str = ""

    @classmethod
    def from_row(cls, row: dict) -> "AttendanceRecord":
        return cls(
            attendance_id=to_str(row.get("attendanceId")),
            event_id=to_str(row.get("eventId")),
            member_id=to_str(row.get("memberId")),
            member_name=to_str(row.get("memberName")),
            status=to_str(row.get("status")),
            time_in=row.get("timeIn") or "",
            time_out=row.get("timeOut") or "",
            date=row.get("date") or "",
            location=to_str(row.get("location")),
            geofence_status=to_str(row.get("geofenceStatus")),
            notes=to_str(row.get("notes")),
            recorded_by=to_str(row.get("recordedBy")),
            recorded_at=to_str(row.get("recordedAt")),
            recorded_by_time_in=to_str(row.get("recordedByTimeIn")),
            recorded_by_time_out=to_str(row.get("recordedByTimeOut")),
        )

    def to_dict(self) -> dict:
        return {
            "attendanceId": self.attendance_id,
            "eventId": self.event_id,
            "memberId": self.member_id,
            "memberName": self.member_name,
            "status": self.status,
            "timeIn": str(self.time_in),
            "timeOut": str(self.time_out),
            "date": str(self.date),
            "location": self.location,
            "geofenceStatus": self.geofence_status,
            "notes": self.notes,
            "recordedBy": self.recorded_by,
            "recordedAt": self.recorded_at,
            "recordedByTimeIn": self.recorded_by_time_in,
            "recordedByTimeOut": self.recorded_by_time_out,
        }


@dataclass(frozen=True)
class MemberForAttendance:
    id: str
    name: str
    committee: str = ""
    position: str = ""
    profile_picture: str = ""

    @classmethod
    def from_row(cls, row: dict) -> "MemberForAttendance":
        return cls(
            id=to_str(row.get("id")),
            name=to_str(row.get("name")),
            committee=to_str(row.get("committee")),
            position=to_str(row.get("position")),
            profile_picture=to_str(row.get("profilePicture")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "committee": self.committee,
            "position": self.position,
            "profilePicture": self.profile_picture,
        }


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class RecordingResult:
    """Outcome of a Time In / Time Out / manual write."""

    attendance_id: str
    message: str = ""
    time_in: str = ""
    time_out: str = ""
    date: str = ""
    created: bool = False
    updated: bool = False
    geofence_valid: Optional[bool] = None
    geofence_message: str = ""

    @classmethod
    def from_response(cls, data: dict) -> "RecordingResult":
        geofence_valid = data.get("geofenceValid")
        return cls(
            attendance_id=to_str(data.get("attendanceId")),
            message=to_str(data.get("message")),
            time_in=to_str(data.get("timeIn")),
            time_out=to_str(data.get("timeOut")),
            date=to_str(data.get("date")),
            created=to_bool(data.get("created")),
            updated=to_bool(data.get("updated")),
            geofence_valid=None if geofence_valid is None else to_bool(geofence_valid),
            geofence_message=to_str(data.get("geofenceMessage")),
        )


@dataclass(frozen=True)
class ExistingAttendance:
    exists: bool
    attendance_id: str = ""
    time_in: str = ""
    time_out: str = ""
    status: str = ""
    date: str = ""


@dataclass(frozen=True)
class GeofenceCheck:
    valid: bool
    message: str = ""
    distance: Optional[float] = None
    radius: Optional[float] = None

    @classmethod
    def from_response(cls, data: dict) -> "GeofenceCheck":
        valid = data.get("valid")
        return cls(
            valid=True if valid is None else to_bool(valid),
            message=to_str(data.get("message")),
            distance=to_float(data.get("distance")),
            radius=to_float(data.get("radius")),
        )
