from __future__ import annotations

from typing import Optional, Sequence

from ..common.cache import TTLValue
from ..core.constants import DEFAULT_MEMBERS_CACHE_SECONDS
from ..gas.base import require_success, row, rows, to_bool, to_str
from ..gas.connection import GasClient
from ..gas.errors import (
    AlreadyTimedOutError,
    ExistingRecordError,
    GasErrorCode,
    NoTimeInError,
)
from .model import (
    AttendanceRecord,
    ExistingAttendance,
    GeofenceCheck,
    Location,
    MemberForAttendance,
    RecordingResult,
)


class GasAttendanceRepository:
    """Attendance actions; served by the same web app as the events."""

    def __init__(self, client: GasClient, *, members_cache_seconds: float = DEFAULT_MEMBERS_CACHE_SECONDS):
        self._client = client
        self._members_cache_seconds = members_cache_seconds
        # unfiltered member lists, one per requested limit
        self._members: dict[int, TTLValue[list[MemberForAttendance]]] = {}

    @staticmethod
    def _raise_existing(data: dict, fallback: str) -> None:
        if data.get("error") == GasErrorCode.EXISTING_RECORD:
            raise ExistingRecordError(data.get("message") or fallback, existing_record=row(data, "existingRecord"))

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
        data = self._client.post(
            "recordTimeIn",
            {
                "eventId": event_id,
                "memberId": member_id,
                "memberName": member_name or "",
                "status": status,
                "location": location.to_dict() if location else None,
                "recordedBy": recorded_by or "",
            },
        )
        if not data.get("success"):
            self._raise_existing(data, "Member already has a Time In record for this event today")
            require_success(data, "Failed to record Time In")
        return RecordingResult.from_response(data)

    def record_time_out(
        self,
        *,
        event_id: str,
        member_id: str,
        location: Optional[Location],
        recorded_by: str,
    ) -> RecordingResult:
        data = self._client.post(
            "recordTimeOut",
            {
                "eventId": event_id,
                "memberId": member_id,
                "location": location.to_dict() if location else None,
                "recordedBy": recorded_by or "",
            },
        )
        if not data.get("success"):
            if data.get("error") == GasErrorCode.NO_TIME_IN:
                raise NoTimeInError(
                    data.get("message")
                    or "No Time In record found for this member today. Please record Time In first."
                )
            if data.get("error") == GasErrorCode.ALREADY_TIMED_OUT:
                raise AlreadyTimedOutError(data.get("message") or "Member has already timed out for this event today")
            require_success(data, "Failed to record Time Out")
        return RecordingResult.from_response(data)

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
        data = self._client.post(
            "recordManualAttendance",
            {
                "eventId": event_id,
                "memberId": member_id,
                "memberName": member_name or "",
                "status": status,
                "timeType": time_type,
                "notes": notes or "",
                "recordedBy": recorded_by or "",
                "overwrite": bool(overwrite),
            },
        )
        if not data.get("success"):
            self._raise_existing(data, "Member already has an attendance record for this event today")
            require_success(data, "Failed to record attendance")
        return RecordingResult.from_response(data)

    def check_existing(self, *, event_id: str, member_id: str) -> ExistingAttendance:
        data = require_success(
            self._client.get("checkExistingAttendance", {"eventId": event_id, "memberId": member_id}),
            "Failed to check existing attendance",
        )
        record = row(data, "record") or {}
        return ExistingAttendance(
            exists=to_bool(data.get("exists")),
            attendance_id=to_str(record.get("attendanceId")),
            time_in=to_str(record.get("timeIn")),
            time_out=to_str(record.get("timeOut")),
            status=to_str(record.get("status")),
            date=to_str(record.get("date")),
        )

    def get_event_records(self, event_id: str) -> Sequence[AttendanceRecord]:
        data = require_success(
            self._client.get("getEventAttendanceRecords", {"eventId": event_id}),
            "Failed to fetch attendance records",
        )
        return [AttendanceRecord.from_row(r) for r in rows(data, "records")]

    def get_member_history(self, member_id: str, limit: int) -> Sequence[AttendanceRecord]:
        data = require_success(
            self._client.get("getMemberAttendanceHistory", {"memberId": member_id, "limit": limit}),
            "Failed to fetch attendance history",
        )
        return [AttendanceRecord.from_row(r) for r in rows(data, "records")]

    def get_members(self, *, search: str, limit: int) -> Sequence[MemberForAttendance]:
        cache = None
        if not search:
            cache = self._members.setdefault(limit, TTLValue(self._members_cache_seconds))
            cached = cache.get()
            if cached is not None:
                return list(cached)

        data = require_success(
            self._client.get("getMembersForAttendance", {"search": search or "", "limit": limit}),
            "Failed to fetch members",
        )
        members = [MemberForAttendance.from_row(r) for r in rows(data, "members")]
        if cache is not None:
            cache.set(members)
        return members

    def clear_members_cache(self) -> None:
        for cache in self._members.values():
            cache.clear()

    def validate_geofence(self, *, event_id: str, lat: float, lng: float) -> GeofenceCheck:
        data = require_success(
            self._client.get("validateGeofence", {"eventId": event_id, "lat": lat, "lng": lng}),
            "Failed to validate geofence",
        )
        return GeofenceCheck.from_response(data)

    def is_healthy(self) -> bool:
        return self._client.health("getMembersForAttendance", {"limit": 1})
