from __future__ import annotations

from typing import Protocol

from .model import SessionUser


class LoginRepository(Protocol):
    """User Profiles sheet access (login web app)."""

    def authenticate(self, username: str, password: str) -> SessionUser:
        raise NotImplementedError

    def verify_session(self, username: str, session_token: str) -> bool:
        raise NotImplementedError

    def is_healthy(self) -> bool:
        raise NotImplementedError
