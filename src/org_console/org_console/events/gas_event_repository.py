from __future__ import annotations

from typing import Optional, Sequence

from ..common.cache import TTLValue
from ..core.constants import DEFAULT_EVENTS_CACHE_SECONDS
from ..gas.base import require_success, row, rows
from ..gas.connection import GasClient
from .model import Event, EventAttendanceEntry, EventStats


class GasEventRepository:
    """Events + EventAttendance sheets through the events web app."""

    def __init__(self, client: GasClient, *, cache_seconds: float = DEFAULT_EVENTS_CACHE_SECONDS):
        self._client = client
        self._cache: TTLValue[list[Event]] = TTLValue(cache_seconds)

    def clear_cache(self) -> None:
        self._cache.clear()

    def list_events(self, *, status: Optional[str] = None) -> Sequence[Event]:
        cached = self._cache.get()
        if cached is None:
            data = require_success(self._client.get("getEvents"), "Failed to fetch events")
            cached = [Event.from_row(r) for r in rows(data, "events")]
            self._cache.set(cached)

        if status:
            return [e for e in cached if e.status == status]
        return list(cached)

    def get_event(self, event_id: str) -> Optional[Event]:
        data = self._client.get("getEvent", {"eventId": event_id})
        if not data.get("success"):
            if "not found" in str(data.get("error") or "").lower():
                return None
            require_success(data, "Failed to fetch event")
        found = row(data, "event")
        return Event.from_row(found) if found else None

    def list_upcoming(self, limit: int) -> Sequence[Event]:
        data = require_success(self._client.get("getUpcomingEvents", {"limit": limit}), "Failed to fetch upcoming events")
        return [Event.from_row(r) for r in rows(data, "events")]

    def list_past(self, limit: int) -> Sequence[Event]:
        data = require_success(self._client.get("getPastEvents", {"limit": limit}), "Failed to fetch past events")
        return [Event.from_row(r) for r in rows(data, "events")]

    def create_event(self, event_data: dict) -> tuple[str, Optional[Event]]:
        data = require_success(self._client.post("createEvent", {"eventData": event_data}), "Failed to create event")
        self.clear_cache()
        created = row(data, "event")
        return str(data.get("eventId") or ""), Event.from_row(created) if created else None

    def update_event(self, event_id: str, event_data: dict) -> None:
        require_success(
            self._client.post("updateEvent", {"eventId": event_id, "eventData": event_data}),
            "Failed to update event",
        )
        self.clear_cache()

    def delete_event(self, event_id: str) -> None:
        require_success(self._client.post("deleteEvent", {"eventId": event_id}), "Failed to delete event")
        self.clear_cache()

    def cancel_event(self, event_id: str, reason: str) -> None:
        require_success(
            self._client.post("cancelEvent", {"eventId": event_id, "reason": reason or ""}),
            "Failed to cancel event",
        )
        self.clear_cache()

    def duplicate_event(self, event_id: str) -> str:
        data = require_success(self._client.post("duplicateEvent", {"eventId": event_id}), "Failed to duplicate event")
        self.clear_cache()
        return str(data.get("eventId") or "")

    def get_event_attendance(self, event_id: str) -> Sequence[EventAttendanceEntry]:
        data = require_success(self._client.get("getEventAttendance", {"eventId": event_id}), "Failed to fetch attendance")
        return [EventAttendanceEntry.from_row(r) for r in rows(data, "attendance")]

    def record_attendance(self, event_id: str, member_id: str, status: str) -> str:
        data = require_success(
            self._client.post("recordAttendance", {"eventId": event_id, "memberId": member_id, "status": status}),
            "Failed to record attendance",
        )
        return str(data.get("attendanceId") or "")

    def bulk_record_attendance(self, event_id: str, records: Sequence[dict]) -> None:
        require_success(
            self._client.post("bulkRecordAttendance", {"eventId": event_id, "attendanceRecords": list(records)}),
            "Failed to record attendance",
        )

    def get_stats(self) -> EventStats:
        data = require_success(self._client.get("getEventStats"), "Failed to fetch stats")
        return EventStats.from_row(row(data, "stats"))

    def initialize_sheets(self) -> dict:
        data = require_success(self._client.get("initializeSheets"), "Failed to initialize sheets")
        return {
            "spreadsheetId": str(data.get("spreadsheetId") or ""),
            "spreadsheetUrl": str(data.get("spreadsheetUrl") or ""),
        }

    def is_healthy(self) -> bool:
        return self._client.health("getEventStats")
