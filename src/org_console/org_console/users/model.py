from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role
from ..gas.base import to_str

ADMIN_ROLES = frozenset({Role.AUDITOR, Role.ADMIN})
LEADERSHIP_ROLES = frozenset({Role.AUDITOR, Role.ADMIN, Role.HEAD})
RESTRICTED_ROLES = frozenset({Role.SUSPENDED, Role.BANNED})

ROLE_DISPLAY_NAMES = {
    Role.AUDITOR: "Auditor",
    Role.ADMIN: "Administrator",
    Role.HEAD: "Committee Head",
    Role.MEMBER: "Member",
    Role.SUSPENDED: "Suspended",
    Role.BANNED: "Banned",
    Role.GUEST: "Guest",
}


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    id: str
    username: str
    email: str
    name: str
    role: Role
    status: str = ""
    position: str = ""
    session_token: str = ""

    @classmethod
    def from_row(cls, row: dict) -> "SessionUser":
        try:
            role = Role(str(row.get("role") or "").lower())
        except ValueError:
            role = Role.GUEST
        return cls(
            id=to_str(row.get("id")),
            username=to_str(row.get("username")),
            email=to_str(row.get("email")),
            name=to_str(row.get("name")),
            role=role,
            status=to_str(row.get("status")),
            position=to_str(row.get("position")),
            session_token=to_str(row.get("sessionToken")),
        )

    def to_session(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "status": self.status,
            "position": self.position,
            "sessionToken": self.session_token,
        }


def has_admin_access(role: Role) -> bool:
    return role in ADMIN_ROLES


def has_leadership_access(role: Role) -> bool:
    return role in LEADERSHIP_ROLES


def is_restricted(role: Role) -> bool:
    return role in RESTRICTED_ROLES


def role_display_name(role: Role) -> str:
    return ROLE_DISPLAY_NAMES.get(role, "Unknown")
