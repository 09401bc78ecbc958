from __future__ import annotations

import threading
from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import Priority
from .model import Announcement

SAMPLE_ANNOUNCEMENTS = (
    Announcement(
        announcement_id="1",
        title="Community Cleanup Drive - February 20",
        content=(
            "Join us for our monthly community cleanup drive! Meet at Tagum City Hall at 6:00 AM. "
            "Bring gloves and enthusiasm!"
        ),
        priority=Priority.IMPORTANT,
        is_pinned=True,
        author="Admin Team",
        date=date(2025, 2, 10),
        category="Events",
    ),
    Announcement(
        announcement_id="2",
        title="New Member Orientation Schedule",
        content=(
            "New member orientation will be held every Saturday at 2:00 PM. "
            "Please bring valid ID and membership form."
        ),
        priority=Priority.NORMAL,
        is_pinned=True,
        author="Membership Committee",
        date=date(2025, 2, 8),
        category="Training",
    ),
    Announcement(
        announcement_id="3",
        title="URGENT: Change in Meeting Schedule",
        content=(
            "This week's general assembly has been moved to Thursday, 6:00 PM due to venue conflicts. "
            "Please inform your co-members."
        ),
        priority=Priority.URGENT,
        is_pinned=False,
        author="Admin Team",
        date=date(2025, 2, 15),
        category="Updates",
    ),
    Announcement(
        announcement_id="4",
        title="Scholarship Program Applications Open",
        content=(
            "Applications for our scholarship program are now open! Deadline is March 15. "
            "Visit our office for forms."
        ),
        priority=Priority.IMPORTANT,
        is_pinned=False,
        author="Education Committee",
        date=date(2025, 2, 5),
        category="Programs",
    ),
)


class InMemoryAnnouncementRepository:
    """Process-local announcement board; read state is kept per user id."""

    def __init__(self, seed: Iterable[Announcement] = ()):
        self._lock = threading.Lock()
        self._items: dict[str, Announcement] = {a.announcement_id: a for a in seed}
        self._read: dict[str, set[str]] = {}

    def list_all(self) -> Sequence[Announcement]:
        with self._lock:
            return list(self._items.values())

    def get(self, announcement_id: str) -> Optional[Announcement]:
        with self._lock:
            return self._items.get(announcement_id)

    def add(self, announcement: Announcement) -> None:
        with self._lock:
            self._items[announcement.announcement_id] = announcement

    def replace(self, announcement: Announcement) -> None:
        with self._lock:
            self._items[announcement.announcement_id] = announcement

    def delete(self, announcement_id: str) -> bool:
        with self._lock:
            for readers in self._read.values():
                readers.discard(announcement_id)
            return self._items.pop(announcement_id, None) is not None

    def is_read(self, user_id: str, announcement_id: str) -> bool:
        with self._lock:
            return announcement_id in self._read.get(user_id, set())

    def mark_read(self, user_id: str, announcement_id: str) -> None:
        with self._lock:
            self._read.setdefault(user_id, set()).add(announcement_id)
