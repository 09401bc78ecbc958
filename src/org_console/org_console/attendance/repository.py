from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import (
    AttendanceRecord,
    ExistingAttendance,
    GeofenceCheck,
    Location,
    MemberForAttendance,
    RecordingResult,
)


class AttendanceRepository(Protocol):
    def record_time_in(
        self,
        *,
        event_id: str,
        member_id: str,
        member_name: str,
        status: str,
        location: Optional[Location],
        recorded_by: str,
    ) -> RecordingResult:
        raise NotImplementedError

    def record_time_out(
        self,
        *,
        event_id: str,
        member_id: str,
        location: Optional[Location],
        recorded_by: str,
    ) -> RecordingResult:
        raise NotImplementedError

    def record_manual(
        self,
        *,
        event_id: str,
        member_id: str,
        member_name: str,
        status: str,
        time_type: str,
        notes: str,
        recorded_by: str,
        overwrite: bool,
    ) -> RecordingResult:
        raise NotImplementedError

    def check_existing(self, *, event_id: str, member_id: str) -> ExistingAttendance:
        raise NotImplementedError

    def get_event_records(self, event_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_member_history(self, member_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_members(self, *, search: str, limit: int) -> Sequence[MemberForAttendance]:
        raise NotImplementedError

    def clear_members_cache(self) -> None:
        raise NotImplementedError

    def validate_geofence(self, *, event_id: str, lat: float, lng: float) -> GeofenceCheck:
        raise NotImplementedError

    def is_healthy(self) -> bool:
        raise NotImplementedError
