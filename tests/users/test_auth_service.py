from __future__ import annotations

import pytest

from src.org_console.org_console.core.enums import Role
from src.org_console.org_console.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from src.org_console.org_console.gas.errors import GasAPIError, GasErrorCode
from src.org_console.org_console.users.gas_user_repository import GasLoginRepository
from src.org_console.org_console.users.model import (
    SessionUser,
    has_admin_access,
    has_leadership_access,
    is_restricted,
    role_display_name,
)
from src.org_console.org_console.users.service import AuthService


class FakeLoginRepo:
    def __init__(self, user=None, error=None, valid=True):
        self.user = user
        self.error = error
        self.valid = valid

    def authenticate(self, username, password):
        if self.error:
            raise self.error
        return self.user

    def verify_session(self, username, session_token):
        return self.valid

    def is_healthy(self):
        return True


def _user(role):
    return SessionUser(id="U-1", username="juan", email="", name="Juan", role=role, session_token="tok")


def test_authenticate_returns_user():
    svc = AuthService(FakeLoginRepo(_user(Role.HEAD)))
    assert svc.authenticate("juan", "pw").role is Role.HEAD


def test_blank_credentials():
    svc = AuthService(FakeLoginRepo(_user(Role.MEMBER)))
    with pytest.raises(ValidationError):
        svc.authenticate("", "pw")
    with pytest.raises(AuthenticationError):
        svc.authenticate("juan", "")


@pytest.mark.parametrize("role", [Role.SUSPENDED, Role.BANNED])
def test_restricted_roles_are_refused(role):
    with pytest.raises(AuthorizationError):
        AuthService(FakeLoginRepo(_user(role))).authenticate("juan", "pw")


def test_banned_backend_code_becomes_authorization_error():
    svc = AuthService(FakeLoginRepo(error=GasAPIError(GasErrorCode.ACCOUNT_BANNED, "Account banned")))
    with pytest.raises(AuthorizationError, match="Account banned"):
        svc.authenticate("juan", "pw")


def test_verify_without_token_is_false():
    svc = AuthService(FakeLoginRepo(valid=True))
    assert svc.verify(SessionUser(id="U", username="u", email="", name="", role=Role.MEMBER)) is False
    assert svc.verify(_user(Role.MEMBER)) is True


def test_role_helpers():
    assert has_admin_access(Role.AUDITOR) and has_admin_access(Role.ADMIN)
    assert not has_admin_access(Role.HEAD)
    assert has_leadership_access(Role.HEAD)
    assert not has_leadership_access(Role.MEMBER)
    assert is_restricted(Role.BANNED)
    assert role_display_name(Role.HEAD) == "Committee Head"


def test_unknown_role_becomes_guest():
    user = SessionUser.from_row({"id": "1", "username": "x", "role": "Superuser"})
    assert user.role is Role.GUEST


class ScriptedLoginClient:
    def __init__(self, response):
        self.response = response

    def post(self, action, payload=None):
        return self.response


@pytest.mark.parametrize(
    "response, exc_type",
    [
        ({"success": False, "code": 401, "error": "Invalid username or password"}, AuthenticationError),
        ({"success": False, "code": 403, "error": "Account banned"}, GasAPIError),
        ({"success": True}, GasAPIError),
    ],
)
def test_login_repository_maps_backend_codes(response, exc_type):
    with pytest.raises(exc_type):
        GasLoginRepository(ScriptedLoginClient(response)).authenticate("juan", "pw")


def test_login_repository_reads_user():
    client = ScriptedLoginClient(
        {"success": True, "user": {"id": "U-9", "username": "ana", "role": "admin", "sessionToken": "abc"}}
    )
    user = GasLoginRepository(client).authenticate(" ana ", "pw")
    assert user.role is Role.ADMIN
    assert user.session_token == "abc"
