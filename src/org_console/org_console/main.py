from __future__ import annotations

import importlib
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .common.decorators import json_error
from .container import Container, build_container
from .core.constants import REMEMBER_ME_DAYS
from .core.logging_config import configure_logging, get_logger
from .events.controller import register as register_events
from .reports.controller import register as register_reports
from .users.controller import register as register_users

log = get_logger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=REMEMBER_ME_DAYS)

    gas_config = dict(getattr(settings, "GAS_CONFIG"))
    org_config = dict(getattr(settings, "ORG_CONFIG"))
    app.config["ORG_NAME"] = org_config.get("name", "")
    app.config["ORG_CHAPTER"] = org_config.get("chapter", "")
    app.config["QR_PREFIX"] = org_config.get("qr_prefix", "")

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_DIR", "") or None)
    log.info("settings=%s events_api=%s", settings_module, "set" if gas_config.get("events_api_url") else "missing")

    container = container or build_container(gas_config=gas_config, org_config=org_config)

    register_users(app, container)
    register_announcements(app, container)
    register_events(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    @app.route("/api/health", endpoint="health")
    def health():
        checks = {
            "eventsApi": container.event_service.is_healthy(),
            "attendanceApi": container.attendance_service.is_healthy(),
            "loginApi": container.logins_repo.is_healthy(),
        }
        ok = all(checks.values())
        return jsonify({"success": ok, "checks": checks}), 200 if ok else 503

    @app.errorhandler(404)
    def not_found(_e):
        return json_error("Not found", 404, "NOT_FOUND")

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return json_error("Method not allowed", 405, "METHOD_NOT_ALLOWED")

    @app.errorhandler(500)
    def server_error(_e):
        return json_error("Internal server error", 500, "SERVER_ERROR")

    return app
