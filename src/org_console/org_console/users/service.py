from __future__ import annotations

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..core.logging_config import get_logger
from ..gas.errors import GasAPIError, GasErrorCode
from .model import SessionUser, is_restricted
from .repository import LoginRepository

log = get_logger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, logins: LoginRepository):
        self._logins = logins

    def authenticate(self, username: str, password: str) -> SessionUser:
        username = require_non_empty(username, "Username")
        if not password:
            raise AuthenticationError("Invalid username or password")

        try:
            user = self._logins.authenticate(username, password)
        except GasAPIError as e:
            if e.code == GasErrorCode.ACCOUNT_BANNED:
                raise AuthorizationError(e.message) from e
            raise

        if is_restricted(user.role):
            log.info("refused login for restricted account %s (%s)", user.username, user.role.value)
            raise AuthorizationError(f"Account is {user.role.value}. Please contact an administrator.")
        return user

    def verify(self, user: SessionUser) -> bool:
        """Ask the backend whether the stored session token is still valid."""
        if not user.session_token:
            return False
        return self._logins.verify_session(user.username, user.session_token)
