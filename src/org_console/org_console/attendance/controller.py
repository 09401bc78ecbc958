from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.decorators import current_user, handle_errors, json_error, leadership_required, login_required
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_MEMBERS_LIMIT
from ..core.enums import AttendanceStatus, TimeType
from ..core.exceptions import ValidationError
from .model import RecordingResult
from .qr import decode_qr_image, make_qr_png


def _result_payload(result: RecordingResult) -> dict:
    data = {
        "success": True,
        "attendanceId": result.attendance_id,
        "message": result.message,
        "timeIn": result.time_in,
        "timeOut": result.time_out,
        "date": result.date,
        "created": result.created,
        "updated": result.updated,
    }
    if result.geofence_valid is not None:
        data["geofenceValid"] = result.geofence_valid
        data["geofenceMessage"] = result.geofence_message
    return data


def _int_arg(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, default))
    except ValueError:
        raise ValidationError(f"{name} must be an integer") from None


def _recorder() -> str:
    user = current_user()
    return user.name or user.username


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/members", endpoint="attendance_members")
    @leadership_required
    @handle_errors
    def attendance_members():
        if request.args.get("refresh") == "true":
            service.clear_members_cache()
        members = service.members(request.args.get("search", ""), _int_arg("limit", DEFAULT_MEMBERS_LIMIT))
        return jsonify({"success": True, "members": [m.to_dict() for m in members]})

    @app.route("/api/attendance/time-in", methods=["POST"], endpoint="attendance_time_in")
    @leadership_required
    @handle_errors
    def attendance_time_in():
        p = request.get_json(silent=True) or {}
        result = service.record_time_in(
            event_id=p.get("eventId", ""),
            member_id=p.get("memberId", ""),
            member_name=p.get("memberName", ""),
            status=p.get("status") or AttendanceStatus.PRESENT.value,
            lat=p.get("lat"),
            lng=p.get("lng"),
            recorded_by=_recorder(),
        )
        return jsonify(_result_payload(result))

    @app.route("/api/attendance/time-out", methods=["POST"], endpoint="attendance_time_out")
    @leadership_required
    @handle_errors
    def attendance_time_out():
        p = request.get_json(silent=True) or {}
        result = service.record_time_out(
            event_id=p.get("eventId", ""),
            member_id=p.get("memberId", ""),
            lat=p.get("lat"),
            lng=p.get("lng"),
            recorded_by=_recorder(),
        )
        return jsonify(_result_payload(result))

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="attendance_manual")
    @leadership_required
    @handle_errors
    def attendance_manual():
        p = request.get_json(silent=True) or {}
        result = service.record_manual(
            event_id=p.get("eventId", ""),
            member_id=p.get("memberId", ""),
            member_name=p.get("memberName", ""),
            status=p.get("status") or AttendanceStatus.PRESENT.value,
            time_type=p.get("timeType") or TimeType.IN.value,
            notes=p.get("notes", ""),
            recorded_by=_recorder(),
            overwrite=bool(p.get("overwrite")),
        )
        return jsonify(_result_payload(result))

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="attendance_scan")
    @leadership_required
    @handle_errors
    def attendance_scan():
        p = request.get_json(silent=True) or {}
        member, result = service.record_scan(
            event_id=p.get("eventId", ""),
            qr_payload=p.get("code", ""),
            time_type=p.get("timeType") or TimeType.IN.value,
            recorded_by=_recorder(),
            overwrite=bool(p.get("overwrite")),
            lat=p.get("lat"),
            lng=p.get("lng"),
        )
        return jsonify({**_result_payload(result), "member": member.to_dict()})

    @app.route("/api/attendance/scan/image", methods=["POST"], endpoint="attendance_scan_image")
    @leadership_required
    @handle_errors
    def attendance_scan_image():
        if "image" not in request.files:
            return json_error("Missing image file", 400, "VALIDATION_ERROR")

        code = decode_qr_image(request.files["image"].stream)
        if not code:
            return json_error("No QR code detected in the image", 400, "VALIDATION_ERROR")

        member, result = service.record_scan(
            event_id=request.form.get("eventId", ""),
            qr_payload=code,
            time_type=request.form.get("timeType") or TimeType.IN.value,
            recorded_by=_recorder(),
            overwrite=request.form.get("overwrite") == "true",
        )
        return jsonify({**_result_payload(result), "member": member.to_dict()})

    @app.route("/api/attendance/existing", endpoint="attendance_existing")
    @leadership_required
    @handle_errors
    def attendance_existing():
        existing = service.check_existing(
            event_id=request.args.get("eventId", ""), member_id=request.args.get("memberId", "")
        )
        return jsonify(
            {
                "success": True,
                "exists": existing.exists,
                "record": {
                    "attendanceId": existing.attendance_id,
                    "timeIn": existing.time_in,
                    "timeOut": existing.time_out,
                    "status": existing.status,
                    "date": existing.date,
                }
                if existing.exists
                else None,
            }
        )

    @app.route("/api/attendance/events/<event_id>", endpoint="attendance_event_records")
    @leadership_required
    @handle_errors
    def attendance_event_records(event_id: str):
        records = service.event_records(event_id)
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})

    @app.route("/api/attendance/members/<member_id>/history", endpoint="attendance_member_history")
    @login_required
    @handle_errors
    def attendance_member_history(member_id: str):
        records = service.member_history(member_id, _int_arg("limit", DEFAULT_HISTORY_LIMIT))
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})

    @app.route("/api/attendance/geofence", endpoint="attendance_geofence")
    @login_required
    @handle_errors
    def attendance_geofence():
        check = service.validate_geofence(
            event_id=request.args.get("eventId", ""),
            lat=request.args.get("lat"),
            lng=request.args.get("lng"),
        )
        return jsonify(
            {
                "success": True,
                "valid": check.valid,
                "message": check.message,
                "distance": check.distance,
                "radius": check.radius,
            }
        )

    @app.route("/api/me/qr.png", endpoint="my_qr_image")
    @login_required
    @handle_errors
    def my_qr_image():
        """Personal QR ID; the payload is the member id code."""
        user = current_user()
        prefix = app.config.get("QR_PREFIX", "")
        data = f"{prefix}:{user.id}" if prefix else user.id
        return send_file(make_qr_png(data), mimetype="image/png")
