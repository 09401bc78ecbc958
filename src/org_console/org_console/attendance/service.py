from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_choice, require_non_empty
from ..core.constants import DASHBOARD_MEMBERS_LIMIT, DEFAULT_HISTORY_LIMIT, DEFAULT_MEMBERS_LIMIT
from ..core.enums import AttendanceStatus, TimeType
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging_config import get_logger
from .model import (
    NO_TIME_OUT_STATUSES,
    AttendanceRecord,
    ExistingAttendance,
    GeofenceCheck,
    Location,
    MemberForAttendance,
    RecordingResult,
)
from .qr import member_code_from_payload
from .repository import AttendanceRepository

log = get_logger(__name__)


def _location(lat, lng) -> Optional[Location]:
    if lat is None or lng is None or lat == "" or lng == "":
        return None
    try:
        return Location(float(lat), float(lng))
    except (TypeError, ValueError):
        raise ValidationError("Location must be numeric lat/lng") from None


class AttendanceService:
    """Time In / Time Out recording for the QR scanner and the manual form."""

    def __init__(self, attendance: AttendanceRepository, *, qr_prefix: str = ""):
        self._attendance = attendance
        self._qr_prefix = qr_prefix

    def record_time_in(
        self,
        *,
        event_id: str,
        member_id: str,
        member_name: str = "",
        status: str = AttendanceStatus.PRESENT.value,
        lat=None,
        lng=None,
        recorded_by: str = "",
    ) -> RecordingResult:
        event_id = require_non_empty(event_id, "Event")
        member_id = require_non_empty(member_id, "Member")
        status = require_choice(status, AttendanceStatus, "attendance status").value

        result = self._attendance.record_time_in(
            event_id=event_id,
            member_id=member_id,
            member_name=member_name,
            status=status,
            location=_location(lat, lng),
            recorded_by=recorded_by,
        )
        log.info("time in event=%s member=%s by=%s", event_id, member_id, recorded_by)
        return result

    def record_time_out(
        self,
        *,
        event_id: str,
        member_id: str,
        lat=None,
        lng=None,
        recorded_by: str = "",
    ) -> RecordingResult:
        event_id = require_non_empty(event_id, "Event")
        member_id = require_non_empty(member_id, "Member")

        result = self._attendance.record_time_out(
            event_id=event_id,
            member_id=member_id,
            location=_location(lat, lng),
            recorded_by=recorded_by,
        )
        log.info("time out event=%s member=%s by=%s", event_id, member_id, recorded_by)
        return result

    def record_manual(
        self,
        *,
        event_id: str,
        member_id: str,
        status: str,
        time_type: str = TimeType.IN.value,
        member_name: str = "",
        notes: str = "",
        recorded_by: str = "",
        overwrite: bool = False,
    ) -> RecordingResult:
        if not event_id:
            raise ValidationError("Please select an event")
        if not member_id:
            raise ValidationError("Please select a member")
        status_enum = require_choice(status, AttendanceStatus, "attendance status")
        time_enum = require_choice(time_type, TimeType, "time type")

        if time_enum in (TimeType.OUT, TimeType.BOTH) and status_enum in NO_TIME_OUT_STATUSES:
            raise ValidationError(f"Cannot record Time Out for {status_enum.value} status")

        result = self._attendance.record_manual(
            event_id=event_id,
            member_id=member_id,
            member_name=member_name,
            status=status_enum.value,
            time_type=time_enum.value,
            notes=notes,
            recorded_by=recorded_by,
            overwrite=overwrite,
        )
        log.info(
            "manual attendance event=%s member=%s status=%s type=%s overwrite=%s",
            event_id,
            member_id,
            status_enum.value,
            time_enum.value,
            overwrite,
        )
        return result

    def find_member(self, member_id: str) -> MemberForAttendance:
        wanted = (member_id or "").strip().lower()
        for member in self._attendance.get_members(search="", limit=DASHBOARD_MEMBERS_LIMIT):
            if member.id.strip().lower() == wanted:
                return member
        raise NotFoundError(f"Member {member_id} not found")

    def record_scan(
        self,
        *,
        event_id: str,
        qr_payload: str,
        time_type: str = TimeType.IN.value,
        recorded_by: str = "",
        overwrite: bool = False,
        lat=None,
        lng=None,
    ) -> tuple[MemberForAttendance, RecordingResult]:
        """Record attendance from a scanned member QR; always ``Present``."""
        event_id = require_non_empty(event_id, "Event")
        code = member_code_from_payload(qr_payload, self._qr_prefix)
        if not code:
            raise ValidationError("QR code is empty")
        member = self.find_member(code)
        time_enum = require_choice(time_type, TimeType, "time type")

        if overwrite or time_enum is TimeType.BOTH:
            result = self.record_manual(
                event_id=event_id,
                member_id=member.id,
                member_name=member.name,
                status=AttendanceStatus.PRESENT.value,
                time_type=time_enum.value,
                notes="Recorded via QR scan",
                recorded_by=recorded_by,
                overwrite=overwrite,
            )
        elif time_enum is TimeType.OUT:
            result = self.record_time_out(
                event_id=event_id, member_id=member.id, lat=lat, lng=lng, recorded_by=recorded_by
            )
        else:
            result = self.record_time_in(
                event_id=event_id,
                member_id=member.id,
                member_name=member.name,
                lat=lat,
                lng=lng,
                recorded_by=recorded_by,
            )
        return member, result

    def check_existing(self, *, event_id: str, member_id: str) -> ExistingAttendance:
        return self._attendance.check_existing(
            event_id=require_non_empty(event_id, "Event"),
            member_id=require_non_empty(member_id, "Member"),
        )

    def event_records(self, event_id: str) -> Sequence[AttendanceRecord]:
        return self._attendance.get_event_records(require_non_empty(event_id, "Event"))

    def member_history(self, member_id: str, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.get_member_history(require_non_empty(member_id, "Member"), max(1, int(limit)))

    def members(self, search: str = "", limit: int = DEFAULT_MEMBERS_LIMIT) -> Sequence[MemberForAttendance]:
        return self._attendance.get_members(search=(search or "").strip(), limit=max(1, int(limit)))

    def clear_members_cache(self) -> None:
        self._attendance.clear_members_cache()

    def validate_geofence(self, *, event_id: str, lat, lng) -> GeofenceCheck:
        location = _location(lat, lng)
        if location is None:
            raise ValidationError("Location (lat, lng) is required")
        return self._attendance.validate_geofence(
            event_id=require_non_empty(event_id, "Event"), lat=location.lat, lng=location.lng
        )

    def is_healthy(self) -> bool:
        return self._attendance.is_healthy()
