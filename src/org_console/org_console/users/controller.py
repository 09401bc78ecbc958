from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.decorators import SESSION_USER_KEY, current_user, handle_errors, json_error, login_required
from ..container import Container
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..core.logging_config import get_logger
from ..gas.errors import GasAPIError, GasErrorCode
from .model import has_admin_access, has_leadership_access, role_display_name

log = get_logger(__name__)


def _user_payload(user) -> dict:
    data = user.to_session()
    data.pop("sessionToken", None)
    data["roleDisplayName"] = role_display_name(user.role)
    data["isAdmin"] = has_admin_access(user.role)
    data["isLeadership"] = has_leadership_access(user.role)
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or {}
        username = payload.get("username", "")
        password = payload.get("password", "")
        remember = bool(payload.get("rememberMe"))

        try:
            s_user = container.auth_service.authenticate(username, password)
        except (ValidationError, AuthenticationError) as e:
            return json_error(str(e), 401, GasErrorCode.INVALID_CREDENTIALS)
        except AuthorizationError as e:
            return json_error(str(e), 403, GasErrorCode.ACCOUNT_BANNED)
        except GasAPIError as e:
            log.warning("login backend error: %s %s", e.code, e.message)
            return json_error(e.message, 502, e.code)
        except Exception:
            log.exception("unexpected error during login")
            return json_error("Internal server error", 500, GasErrorCode.SERVER_ERROR)

        session.clear()
        session.permanent = remember
        session[SESSION_USER_KEY] = s_user.to_session()

        log.info("user %s logged in (%s)", s_user.username, s_user.role.value)
        return jsonify({"success": True, "user": _user_payload(s_user)})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/me", endpoint="me")
    @login_required
    @handle_errors
    def me():
        user = current_user()
        valid = container.auth_service.verify(user) if request.args.get("verify") == "true" else True
        if not valid:
            session.clear()
            return json_error("Session expired. Please log in again.", 401, "SESSION_EXPIRED")
        return jsonify({"success": True, "user": _user_payload(user)})
