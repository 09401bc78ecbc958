from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date, now_local
from ..common.validators import (
    optional_float,
    require_choice,
    require_date_order,
    require_non_empty,
    require_range,
)
from ..core.constants import DEFAULT_EVENTS_LIMIT, DEFAULT_GEOFENCE_RADIUS
from ..core.enums import AttendanceStatus, EventStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..users.model import has_admin_access
from .model import Event, EventAttendanceEntry, EventStats, Geofence
from .repository import EventRepository

log = get_logger(__name__)

# snake_case service field -> backend eventData key
_FIELD_KEYS = {
    "title": "title",
    "description": "description",
    "start_date": "startDate",
    "end_date": "endDate",
    "start_time": "startTime",
    "end_time": "endTime",
    "location_name": "locationName",
    "latitude": "latitude",
    "longitude": "longitude",
    "radius": "radius",
    "geofence_enabled": "geofenceEnabled",
    "status": "status",
    "notes": "notes",
}


def _require_admin(current_role: Role, action: str) -> None:
    if not has_admin_access(current_role):
        raise AuthorizationError(f"Only admins can {action} events")


def _parse_day(value: Any, field_name: str) -> date:
    parsed = coerce_date(value)
    if parsed is None:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")
    return parsed


class EventService:
    """Use cases for the Manage Events page."""

    def __init__(self, events: EventRepository, *, tz_name: Optional[str] = None):
        self._events = events
        self._tz_name = tz_name

    # ---- queries -----------------------------------------------------

    def list_events(self, *, status: Optional[str] = None, query: str = "") -> list[Event]:
        if status:
            status = require_choice(status, EventStatus, "event status").value
        events = list(self._events.list_events(status=status))
        if query:
            events = self.search(events, query)
        return events

    @staticmethod
    def search(events: Iterable[Event], query: str) -> list[Event]:
        needle = (query or "").strip().lower()
        if not needle:
            return list(events)
        return [e for e in events if needle in e.title.lower() or needle in e.event_id.lower()]

    def get_event(self, event_id: str) -> Event:
        event = self._events.get_event(require_non_empty(event_id, "Event ID"))
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")
        return event

    def upcoming(self, limit: int = DEFAULT_EVENTS_LIMIT) -> Sequence[Event]:
        return self._events.list_upcoming(max(1, int(limit)))

    def past(self, limit: int = DEFAULT_EVENTS_LIMIT) -> Sequence[Event]:
        return self._events.list_past(max(1, int(limit)))

    def split_by_date(self, events: Iterable[Event], *, today: Optional[date] = None) -> dict:
        """Group already-fetched events into upcoming/past for the list view."""
        today = today or now_local(self._tz_name).date()
        events = list(events)
        return {
            "upcoming": [e for e in events if e.is_upcoming(today, self._tz_name)],
            "past": [e for e in events if e.is_past(today, self._tz_name)],
        }

    def display_date(self, event: Event) -> str:
        return event.format_event_date(self._tz_name)

    def stats(self) -> EventStats:
        return self._events.get_stats()

    def geofence(self, event_id: str) -> Optional[Geofence]:
        return self.get_event(event_id).geofence()

    def is_healthy(self) -> bool:
        return self._events.is_healthy()

    # ---- mutations ---------------------------------------------------

    def create_event(
        self,
        *,
        current_role: Role,
        title: str = "",
        start_date: Any = None,
        end_date: Any = None,
        description: str = "",
        start_time: str = "",
        end_time: str = "",
        location_name: str = "",
        latitude: Any = None,
        longitude: Any = None,
        radius: Any = None,
        geofence_enabled: Optional[bool] = None,
        status: Optional[str] = None,
        created_by: str = "",
        notes: str = "",
    ) -> tuple[str, Optional[Event]]:
        _require_admin(current_role, "create")

        title = require_non_empty(title, "Title")
        if not start_date:
            raise ValidationError("Start date is required")
        start = _parse_day(start_date, "Start date")
        end = _parse_day(end_date, "End date") if end_date else start
        require_date_order(start, end)

        lat = require_range(optional_float(latitude, "Latitude"), "Latitude", -90, 90)
        lng = require_range(optional_float(longitude, "Longitude"), "Longitude", -180, 180)
        rad = optional_float(radius, "Radius")
        if rad is not None and rad <= 0:
            raise ValidationError("Radius must be greater than zero")

        event_status = require_choice(status or EventStatus.SCHEDULED.value, EventStatus, "event status")

        event_data = {
            "title": title,
            "description": description or "",
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "startTime": start_time or "",
            "endTime": end_time or "",
            "locationName": location_name or "",
            "latitude": lat if lat is not None else "",
            "longitude": lng if lng is not None else "",
            "radius": rad or DEFAULT_GEOFENCE_RADIUS,
            "geofenceEnabled": geofence_enabled is not False,
            "status": event_status.value,
            "createdBy": created_by or "",
            "notes": notes or "",
        }
        event_id, event = self._events.create_event(event_data)
        log.info("created event %s (%s)", event_id, title)
        return event_id, event

    def update_event(self, *, current_role: Role, event_id: str, changes: Mapping[str, Any]) -> None:
        _require_admin(current_role, "edit")
        event_id = require_non_empty(event_id, "Event ID")

        unknown = set(changes) - set(_FIELD_KEYS)
        if unknown:
            raise ValidationError(f"Unknown event fields: {', '.join(sorted(unknown))}")

        payload: dict[str, Any] = {}
        for name, value in changes.items():
            if name == "title":
                value = require_non_empty(value, "Title")
            elif name in ("start_date", "end_date"):
                value = _parse_day(value, "Start date" if name == "start_date" else "End date").isoformat()
            elif name == "latitude":
                value = require_range(optional_float(value, "Latitude"), "Latitude", -90, 90)
            elif name == "longitude":
                value = require_range(optional_float(value, "Longitude"), "Longitude", -180, 180)
            elif name == "radius":
                value = optional_float(value, "Radius")
                if value is not None and value <= 0:
                    raise ValidationError("Radius must be greater than zero")
            elif name == "status":
                value = require_choice(value, EventStatus, "event status").value
            elif name == "geofence_enabled":
                value = bool(value)
            payload[_FIELD_KEYS[name]] = value

        if "startDate" in payload or "endDate" in payload:
            self._check_date_order(event_id, payload)

        if not payload:
            raise ValidationError("Nothing to update")
        self._events.update_event(event_id, payload)
        log.info("updated event %s fields=%s", event_id, sorted(payload))

    def _check_date_order(self, event_id: str, payload: Mapping[str, Any]) -> None:
        """Compare a partial date change against the stored side of the range."""
        start = date.fromisoformat(payload["startDate"]) if "startDate" in payload else None
        end = date.fromisoformat(payload["endDate"]) if "endDate" in payload else None
        if start is None or end is None:
            stored = self._events.get_event(event_id)
            if stored is None:
                return
            start = start or coerce_date(stored.start_date, self._tz_name)
            end = end or coerce_date(stored.end_date, self._tz_name)
        if start and end:
            require_date_order(start, end)

    def toggle_status(self, *, current_role: Role, event_id: str) -> str:
        """Flip an event between Active and Inactive; returns the new status."""
        _require_admin(current_role, "edit")
        event = self.get_event(event_id)
        new_status = EventStatus.INACTIVE if event.status == EventStatus.ACTIVE.value else EventStatus.ACTIVE
        self._events.update_event(event.event_id, {"status": new_status.value})
        return new_status.value

    def delete_event(self, *, current_role: Role, event_id: str) -> None:
        _require_admin(current_role, "delete")
        self._events.delete_event(require_non_empty(event_id, "Event ID"))
        log.info("deleted event %s", event_id)

    def cancel_event(self, *, current_role: Role, event_id: str, reason: str = "") -> None:
        _require_admin(current_role, "cancel")
        self._events.cancel_event(require_non_empty(event_id, "Event ID"), reason or "")
        log.info("cancelled event %s", event_id)

    def duplicate_event(self, *, current_role: Role, event_id: str) -> str:
        _require_admin(current_role, "duplicate")
        return self._events.duplicate_event(require_non_empty(event_id, "Event ID"))

    def initialize_sheets(self, *, current_role: Role) -> dict:
        _require_admin(current_role, "initialize")
        return self._events.initialize_sheets()

    # ---- per-event attendance ----------------------------------------

    def attendance(self, event_id: str) -> Sequence[EventAttendanceEntry]:
        return self._events.get_event_attendance(require_non_empty(event_id, "Event ID"))

    def record_attendance(self, *, event_id: str, member_id: str, status: str) -> str:
        event_id = require_non_empty(event_id, "Event ID")
        member_id = require_non_empty(member_id, "Member ID")
        status = require_choice(status, AttendanceStatus, "attendance status").value
        return self._events.record_attendance(event_id, member_id, status)

    def bulk_record_attendance(self, *, event_id: str, records: Iterable[Mapping[str, Any]]) -> int:
        event_id = require_non_empty(event_id, "Event ID")
        cleaned = []
        for r in records:
            cleaned.append(
                {
                    "memberId": require_non_empty(r.get("memberId"), "Member ID"),
                    "status": require_choice(r.get("status"), AttendanceStatus, "attendance status").value,
                }
            )
        if not cleaned:
            raise ValidationError("No attendance records to save")
        self._events.bulk_record_attendance(event_id, cleaned)
        return len(cleaned)
