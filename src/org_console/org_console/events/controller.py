from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.decorators import admin_required, current_user, handle_errors, login_required
from ..container import Container
from ..core.constants import DEFAULT_EVENTS_LIMIT
from ..core.exceptions import ValidationError

# request JSON key -> service keyword
_CREATE_FIELDS = {
    "title": "title",
    "description": "description",
    "startDate": "start_date",
    "endDate": "end_date",
    "startTime": "start_time",
    "endTime": "end_time",
    "locationName": "location_name",
    "latitude": "latitude",
    "longitude": "longitude",
    "radius": "radius",
    "geofenceEnabled": "geofence_enabled",
    "status": "status",
    "notes": "notes",
}


def _limit() -> int:
    try:
        return int(request.args.get("limit", DEFAULT_EVENTS_LIMIT))
    except ValueError:
        raise ValidationError("limit must be an integer") from None


def register(app: Flask, container: Container) -> None:
    service = container.event_service

    @app.route("/api/events", methods=["GET"], endpoint="events_list")
    @login_required
    @handle_errors
    def events_list():
        events = service.list_events(status=request.args.get("status"), query=request.args.get("q", ""))
        grouped = service.split_by_date(events)
        return jsonify(
            {
                "success": True,
                "events": [e.to_dict() for e in events],
                "upcoming": [e.event_id for e in grouped["upcoming"]],
                "past": [e.event_id for e in grouped["past"]],
            }
        )

    @app.route("/api/events", methods=["POST"], endpoint="events_create")
    @login_required
    @handle_errors
    def events_create():
        payload = request.get_json(silent=True) or {}
        kwargs = {name: payload[key] for key, name in _CREATE_FIELDS.items() if key in payload}
        user = current_user()
        event_id, event = service.create_event(current_role=user.role, created_by=user.name or user.username, **kwargs)
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Event created successfully",
                    "eventId": event_id,
                    "event": event.to_dict() if event else None,
                }
            ),
            201,
        )

    @app.route("/api/events/upcoming", endpoint="events_upcoming")
    @login_required
    @handle_errors
    def events_upcoming():
        return jsonify({"success": True, "events": [e.to_dict() for e in service.upcoming(_limit())]})

    @app.route("/api/events/past", endpoint="events_past")
    @login_required
    @handle_errors
    def events_past():
        return jsonify({"success": True, "events": [e.to_dict() for e in service.past(_limit())]})

    @app.route("/api/events/stats", endpoint="events_stats")
    @login_required
    @handle_errors
    def events_stats():
        s = service.stats()
        return jsonify(
            {
                "success": True,
                "stats": {
                    "totalEvents": s.total_events,
                    "upcomingEvents": s.upcoming_events,
                    "pastEvents": s.past_events,
                    "cancelledEvents": s.cancelled_events,
                    "totalAttendees": s.total_attendees,
                },
            }
        )

    @app.route("/api/events/<event_id>", methods=["GET"], endpoint="events_get")
    @login_required
    @handle_errors
    def events_get(event_id: str):
        event = service.get_event(event_id)
        data = event.to_dict()
        data["displayDate"] = service.display_date(event)
        return jsonify({"success": True, "event": data})

    @app.route("/api/events/<event_id>", methods=["PUT"], endpoint="events_update")
    @login_required
    @handle_errors
    def events_update(event_id: str):
        payload = request.get_json(silent=True) or {}
        changes = {_CREATE_FIELDS.get(key, key): value for key, value in payload.items()}
        service.update_event(current_role=current_user().role, event_id=event_id, changes=changes)
        return jsonify({"success": True, "message": "Event updated successfully"})

    @app.route("/api/events/<event_id>", methods=["DELETE"], endpoint="events_delete")
    @login_required
    @handle_errors
    def events_delete(event_id: str):
        service.delete_event(current_role=current_user().role, event_id=event_id)
        return jsonify({"success": True, "message": "Event deleted successfully"})

    @app.route("/api/events/<event_id>/cancel", methods=["POST"], endpoint="events_cancel")
    @login_required
    @handle_errors
    def events_cancel(event_id: str):
        reason = (request.get_json(silent=True) or {}).get("reason", "")
        service.cancel_event(current_role=current_user().role, event_id=event_id, reason=reason)
        return jsonify({"success": True, "message": "Event cancelled"})

    @app.route("/api/events/<event_id>/duplicate", methods=["POST"], endpoint="events_duplicate")
    @login_required
    @handle_errors
    def events_duplicate(event_id: str):
        new_id = service.duplicate_event(current_role=current_user().role, event_id=event_id)
        return jsonify({"success": True, "message": "Event duplicated", "eventId": new_id}), 201

    @app.route("/api/events/<event_id>/toggle", methods=["POST"], endpoint="events_toggle")
    @login_required
    @handle_errors
    def events_toggle(event_id: str):
        status = service.toggle_status(current_role=current_user().role, event_id=event_id)
        return jsonify({"success": True, "status": status})

    @app.route("/api/events/<event_id>/geofence", endpoint="events_geofence")
    @login_required
    @handle_errors
    def events_geofence(event_id: str):
        fence = service.geofence(event_id)
        if fence is None:
            return jsonify({"success": True, "geofence": None})
        return jsonify(
            {
                "success": True,
                "geofence": {"lat": fence.lat, "lng": fence.lng, "radius": fence.radius, "name": fence.name},
            }
        )

    @app.route("/api/events/<event_id>/attendance", methods=["GET"], endpoint="events_attendance")
    @login_required
    @handle_errors
    def events_attendance(event_id: str):
        entries = service.attendance(event_id)
        return jsonify(
            {
                "success": True,
                "attendance": [
                    {
                        "attendanceId": a.attendance_id,
                        "memberId": a.member_id,
                        "memberName": a.member_name,
                        "status": a.status,
                        "checkInTime": a.check_in_time,
                        "checkOutTime": a.check_out_time,
                        "notes": a.notes,
                    }
                    for a in entries
                ],
            }
        )

    @app.route("/api/events/<event_id>/attendance", methods=["POST"], endpoint="events_attendance_record")
    @login_required
    @handle_errors
    def events_attendance_record(event_id: str):
        payload = request.get_json(silent=True) or {}
        if isinstance(payload.get("records"), list):
            saved = service.bulk_record_attendance(event_id=event_id, records=payload["records"])
            return jsonify({"success": True, "saved": saved})
        attendance_id = service.record_attendance(
            event_id=event_id, member_id=payload.get("memberId", ""), status=payload.get("status", "")
        )
        return jsonify({"success": True, "attendanceId": attendance_id})

    @app.route("/api/admin/events/initialize", methods=["POST"], endpoint="events_initialize")
    @admin_required
    @handle_errors
    def events_initialize():
        result = service.initialize_sheets(current_role=current_user().role)
        return jsonify({"success": True, **result})
