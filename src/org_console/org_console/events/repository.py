from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Event, EventAttendanceEntry, EventStats


class EventRepository(Protocol):
    """Events sheet access.

    Services depend on this interface, not on the spreadsheet client.
    """

    def list_events(self, *, status: Optional[str] = None) -> Sequence[Event]:
        raise NotImplementedError

    def get_event(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def list_upcoming(self, limit: int) -> Sequence[Event]:
        raise NotImplementedError

    def list_past(self, limit: int) -> Sequence[Event]:
        raise NotImplementedError

    def create_event(self, event_data: dict) -> tuple[str, Optional[Event]]:
        raise NotImplementedError

    def update_event(self, event_id: str, event_data: dict) -> None:
        raise NotImplementedError

    def delete_event(self, event_id: str) -> None:
        raise NotImplementedError

    def cancel_event(self, event_id: str, reason: str) -> None:
        raise NotImplementedError

    def duplicate_event(self, event_id: str) -> str:
        raise NotImplementedError

    def get_event_attendance(self, event_id: str) -> Sequence[EventAttendanceEntry]:
        raise NotImplementedError

    def record_attendance(self, event_id: str, member_id: str, status: str) -> str:
        raise NotImplementedError

    def bulk_record_attendance(self, event_id: str, records: Sequence[dict]) -> None:
        raise NotImplementedError

    def get_stats(self) -> EventStats:
        raise NotImplementedError

    def initialize_sheets(self) -> dict:
        raise NotImplementedError

    def is_healthy(self) -> bool:
        raise NotImplementedError
