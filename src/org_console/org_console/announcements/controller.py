from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.decorators import current_user, handle_errors, login_required
from ..container import Container
from .model import AnnouncementForm, ImageUpload


def _form_from_request() -> AnnouncementForm:
    """JSON body, or multipart form with ``images`` files."""
    if request.files:
        images = []
        for f in request.files.getlist("images"):
            data = f.read()
            images.append(ImageUpload(filename=f.filename or "", content_type=f.mimetype or "", size=len(data)))
        fields = request.form.to_dict()
        fields["isPinned"] = fields.get("isPinned") in ("true", "1", "on")
        return AnnouncementForm.from_dict(fields, tuple(images))
    return AnnouncementForm.from_dict(request.get_json(silent=True) or {})


def register(app: Flask, container: Container) -> None:
    service = container.announcement_service

    @app.route("/api/announcements", methods=["GET"], endpoint="announcements_list")
    @login_required
    @handle_errors
    def announcements_list():
        user = current_user()
        items = service.list(
            user,
            search=request.args.get("search", ""),
            category=request.args.get("category", "all"),
        )
        return jsonify(
            {
                "success": True,
                "announcements": [ann.to_dict(is_read=read) for ann, read in items],
                "unread": sum(1 for _, read in items if not read),
            }
        )

    @app.route("/api/announcements", methods=["POST"], endpoint="announcements_create")
    @login_required
    @handle_errors
    def announcements_create():
        ann = service.create(current_user(), _form_from_request())
        return jsonify({"success": True, "message": "Announcement created successfully", "announcement": ann.to_dict()}), 201

    @app.route("/api/announcements/<announcement_id>", methods=["GET"], endpoint="announcements_get")
    @login_required
    @handle_errors
    def announcements_get(announcement_id: str):
        ann = service.get(current_user(), announcement_id)
        return jsonify({"success": True, "announcement": ann.to_dict(is_read=True)})

    @app.route("/api/announcements/<announcement_id>", methods=["PUT"], endpoint="announcements_update")
    @login_required
    @handle_errors
    def announcements_update(announcement_id: str):
        ann = service.update(current_user(), announcement_id, _form_from_request())
        return jsonify({"success": True, "message": "Announcement updated successfully", "announcement": ann.to_dict()})

    @app.route("/api/announcements/<announcement_id>", methods=["DELETE"], endpoint="announcements_delete")
    @login_required
    @handle_errors
    def announcements_delete(announcement_id: str):
        service.delete(current_user(), announcement_id)
        return jsonify({"success": True, "message": "Announcement deleted"})

    @app.route("/api/announcements/<announcement_id>/pin", methods=["POST"], endpoint="announcements_pin")
    @login_required
    @handle_errors
    def announcements_pin(announcement_id: str):
        ann = service.toggle_pin(current_user(), announcement_id)
        return jsonify({"success": True, "message": "Announcement pin status updated", "isPinned": ann.is_pinned})

    @app.route("/api/announcements/<announcement_id>/read", methods=["POST"], endpoint="announcements_read")
    @login_required
    @handle_errors
    def announcements_read(announcement_id: str):
        service.mark_read(current_user(), announcement_id)
        return jsonify({"success": True})
