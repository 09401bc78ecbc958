from __future__ import annotations

from ..core.exceptions import AuthenticationError
from ..gas.base import require_success, row
from ..gas.connection import GasClient
from ..gas.errors import GasAPIError, GasErrorCode
from .model import SessionUser


class GasLoginRepository:
    def __init__(self, client: GasClient):
        self._client = client

    def authenticate(self, username: str, password: str) -> SessionUser:
        data = self._client.post("login", {"username": username.strip(), "password": password})
        if not data.get("success"):
            code = data.get("code")
            if code == 401:
                raise AuthenticationError(data.get("error") or "Invalid username or password")
            if code == 403:
                raise GasAPIError(GasErrorCode.ACCOUNT_BANNED, data.get("error") or "Account access denied")
            raise GasAPIError(GasErrorCode.SERVER_ERROR, data.get("error") or "Authentication failed")

        user = row(data, "user")
        if not user:
            raise GasAPIError(GasErrorCode.INVALID_RESPONSE, "Login response did not include a user")
        return SessionUser.from_row(user)

    def verify_session(self, username: str, session_token: str) -> bool:
        data = self._client.post("verifySession", {"username": username, "sessionToken": session_token})
        return bool(require_success(data, "Failed to verify session").get("valid"))

    def is_healthy(self) -> bool:
        return self._client.health("health")
