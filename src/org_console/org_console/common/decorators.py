from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import jsonify, session

from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..gas.errors import ExistingRecordError, GasAPIError, GasErrorCode
from ..users.model import SessionUser, has_admin_access, has_leadership_access

log = get_logger(__name__)

SESSION_USER_KEY = "user"


def json_error(message: str, status: int, code: Optional[str] = None, **extra: Any):
    body = {"success": False, "message": message}
    if code:
        body["code"] = code
    body.update(extra)
    return jsonify(body), status


def current_user() -> Optional[SessionUser]:
    data = session.get(SESSION_USER_KEY)
    if not data:
        return None
    return SessionUser.from_row(data)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return json_error("Please log in to continue", 401, "UNAUTHENTICATED")
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return json_error("Please log in to continue", 401, "UNAUTHENTICATED")
        if not has_admin_access(user.role):
            return json_error("Admin access required", 403, "FORBIDDEN")
        return view(*args, **kwargs)

    return wrapper


def leadership_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return json_error("Please log in to continue", 401, "UNAUTHENTICATED")
        if not has_leadership_access(user.role):
            return json_error("Leadership access required", 403, "FORBIDDEN")
        return view(*args, **kwargs)

    return wrapper


def handle_errors(view):
    """Translate service/backend exceptions into the JSON error envelope."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return json_error(str(e), 400, "VALIDATION_ERROR")
        except AuthenticationError as e:
            return json_error(str(e), 401, "INVALID_CREDENTIALS")
        except AuthorizationError as e:
            return json_error(str(e), 403, "FORBIDDEN")
        except NotFoundError as e:
            return json_error(str(e), 404, "NOT_FOUND")
        except ExistingRecordError as e:
            return json_error(e.message, 409, e.code, existingRecord=e.existing_record)
        except GasAPIError as e:
            log.warning("backend error in %s: %s %s", view.__name__, e.code, e.message)
            status = 409 if e.code in (GasErrorCode.NO_TIME_IN, GasErrorCode.ALREADY_TIMED_OUT) else 502
            return json_error(e.message, status, e.code)
        except Exception:
            log.exception("unexpected error in %s", view.__name__)
            return json_error("Internal server error", 500, "SERVER_ERROR")

    return wrapper
