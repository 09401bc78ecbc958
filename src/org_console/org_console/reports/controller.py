from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.decorators import handle_errors, leadership_required
from ..container import Container
from ..core.logging_config import get_logger
from .exporters.base import ReportExporter

log = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    def _export(event_id: str, exporter: ReportExporter):
        report = service.build_report(event_id, request.args.get("committee"))
        buf = exporter.export(report)
        filename = service.filename(report, exporter.extension)
        log.info("exported %s (%d rows)", filename, report.total)
        return send_file(buf, download_name=filename, as_attachment=True, mimetype=exporter.mimetype)

    @app.route("/api/dashboard/events", endpoint="dashboard_events")
    @leadership_required
    @handle_errors
    def dashboard_events():
        return jsonify(
            {
                "success": True,
                "events": [e.to_dict() for e in service.dashboard_events()],
                "committees": list(service.committees()),
            }
        )

    @app.route("/api/dashboard/<event_id>", endpoint="dashboard_event")
    @leadership_required
    @handle_errors
    def dashboard_event(event_id: str):
        committee = request.args.get("committee")
        status = request.args.get("status")
        if status:
            members = service.status_members(event_id, status, committee)
            return jsonify({"success": True, "status": status, "members": [m.to_dict() for m in members]})
        data = service.dashboard(event_id, committee)
        return jsonify({"success": True, **data.to_dict()})

    @app.route("/api/dashboard/<event_id>/export.pdf", endpoint="dashboard_export_pdf")
    @leadership_required
    @handle_errors
    def dashboard_export_pdf(event_id: str):
        return _export(event_id, container.pdf_exporter)

    @app.route("/api/dashboard/<event_id>/export.xlsx", endpoint="dashboard_export_xlsx")
    @leadership_required
    @handle_errors
    def dashboard_export_xlsx(event_id: str):
        return _export(event_id, container.spreadsheet_exporter)
