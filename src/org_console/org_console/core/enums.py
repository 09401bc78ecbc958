from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles stored in the User Profiles sheet."""

    AUDITOR = "auditor"
    ADMIN = "admin"
    HEAD = "head"
    MEMBER = "member"
    SUSPENDED = "suspended"
    BANNED = "banned"
    GUEST = "guest"


class EventStatus(str, Enum):
    SCHEDULED = "Scheduled"
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    DRAFT = "Draft"


class AttendanceStatus(str, Enum):
    """Statuses written to the EventAttendance sheet."""

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
    EXCUSED = "Excused"
    CHECKED_IN = "CheckedIn"
    CHECKED_OUT = "CheckedOut"
    REGISTERED = "Registered"


class TimeType(str, Enum):
    IN = "in"
    OUT = "out"
    BOTH = "both"


class Priority(str, Enum):
    URGENT = "urgent"
    IMPORTANT = "important"
    NORMAL = "normal"


class RecipientType(str, Enum):
    ALL_MEMBERS = "All Members"
    ONLY_HEADS = "Only Heads"
    SPECIFIC_COMMITTEE = "Specific Committee"
    SPECIFIC_PERSON = "Specific Person"
