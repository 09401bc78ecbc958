from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import coerce_date, format_date_value
from ..core.constants import DEFAULT_GEOFENCE_RADIUS
from ..core.enums import EventStatus
from ..gas.base import to_bool, to_float, to_int, to_str


@dataclass(frozen=True)
class Geofence:
    lat: float
    lng: float
    radius: float
    name: str = ""


@dataclass(frozen=True)
class Event:
    """A row of the Events sheet."""

    event_id: str
    title: str
    description: str = ""
    start_date: Any = ""
    end_date: Any = ""
    start_time: Any = ""
    end_time: Any = ""
    location_name: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[float] = None
    geofence_enabled: bool = True
    current_attendees: int = 0
    status: str = EventStatus.SCHEDULED.value
    created_by: str = ""
    created_at: str = ""
    updated_at: str = ""
    notes: str = ""

    @classmethod
    def from_row(cls, row: dict) -> "Event":
        return cls(
            event_id=to_str(row.get("EventID")),
            title=to_str(row.get("Title")),
            description=to_str(row.get("Description")),
            start_date=row.get("StartDate") or "",
            end_date=row.get("EndDate") or "",
            start_time=row.get("StartTime") or "",
            end_time=row.get("EndTime") or "",
            location_name=to_str(row.get("LocationName")),
            latitude=to_float(row.get("Latitude")),
            longitude=to_float(row.get("Longitude")),
            radius=to_float(row.get("Radius")),
            geofence_enabled=to_bool(row.get("GeofenceEnabled"), default=True),
            current_attendees=to_int(row.get("CurrentAttendees")),
            status=to_str(row.get("Status")) or EventStatus.SCHEDULED.value,
            created_by=to_str(row.get("CreatedBy")),
            created_at=to_str(row.get("CreatedAt")),
            updated_at=to_str(row.get("UpdatedAt")),
            notes=to_str(row.get("Notes")),
        )

    def to_dict(self) -> dict:
        return {
            "EventID": self.event_id,
            "Title": self.title,
            "Description": self.description,
            "StartDate": str(self.start_date),
            "EndDate": str(self.end_date),
            "StartTime": str(self.start_time),
            "EndTime": str(self.end_time),
            "LocationName": self.location_name,
            "Latitude": self.latitude,
            "Longitude": self.longitude,
            "Radius": self.radius,
            "GeofenceEnabled": self.geofence_enabled,
            "CurrentAttendees": self.current_attendees,
            "Status": self.status,
            "CreatedBy": self.created_by,
            "CreatedAt": self.created_at,
            "UpdatedAt": self.updated_at,
            "Notes": self.notes,
        }

    def geofence(self) -> Optional[Geofence]:
        """Geofence circle, or None when the event has no usable coordinates."""
        if not self.latitude or not self.longitude:
            return None
        return Geofence(
            lat=self.latitude,
            lng=self.longitude,
            radius=self.radius or DEFAULT_GEOFENCE_RADIUS,
            name=self.location_name,
        )

    def start_day(self, tz_name: Optional[str] = None) -> Optional[date]:
        return coerce_date(self.start_date, tz_name)

    def is_upcoming(self, today: date, tz_name: Optional[str] = None) -> bool:
        start = self.start_day(tz_name)
        return start is not None and start >= today and self.status != EventStatus.CANCELLED.value

    def is_past(self, today: date, tz_name: Optional[str] = None) -> bool:
        start = self.start_day(tz_name)
        return start is not None and start < today

    def format_event_date(self, tz_name: Optional[str] = None) -> str:
        start = format_date_value(self.start_date, tz_name)
        end = format_date_value(self.end_date, tz_name)
        if end in ("-", start):
            return start
        return f"{start} - {end}"


@dataclass(frozen=True)
class EventAttendanceEntry:
    """A row of EventAttendance as returned by ``getEventAttendance``."""

    attendance_id: str
    event_id: str
    member_id: str
    member_name: str
    status: str
    check_in_time: str = ""
    check_out_time: str = ""
    notes: str = ""
    recorded_by: str = ""
    recorded_at: str = ""

    @classmethod
    def from_row(cls, row: dict) -> "EventAttendanceEntry":
        return cls(
            attendance_id=to_str(row.get("AttendanceID")),
            event_id=to_str(row.get("EventID")),
            member_id=to_str(row.get("MemberID")),
            member_name=to_str(row.get("MemberName")),
            status=to_str(row.get("Status")),
            check_in_time=to_str(row.get("CheckInTime")),
            check_out_time=to_str(row.get("CheckOutTime")),
            notes=to_str(row.get("Notes")),
            recorded_by=to_str(row.get("RecordedBy")),
            recorded_at=to_str(row.get("RecordedAt")),
        )


@dataclass(frozen=True)
class EventStats:
    total_events: int = 0
    upcoming_events: int = 0
    past_events: int = 0
    cancelled_events: int = 0
    total_attendees: int = 0

    @classmethod
    def from_row(cls, row: Optional[dict]) -> "EventStats":
        row = row or {}
        return cls(
            total_events=to_int(row.get("totalEvents")),
            upcoming_events=to_int(row.get("upcomingEvents")),
            past_events=to_int(row.get("pastEvents")),
            cancelled_events=to_int(row.get("cancelledEvents")),
            total_attendees=to_int(row.get("totalAttendees")),
        )

