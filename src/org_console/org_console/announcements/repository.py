from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Announcement


class AnnouncementRepository(Protocol):
    def list_all(self) -> Sequence[Announcement]:
        raise NotImplementedError

    def get(self, announcement_id: str) -> Optional[Announcement]:
        raise NotImplementedError

    def add(self, announcement: Announcement) -> None:
        raise NotImplementedError

    def replace(self, announcement: Announcement) -> None:
        raise NotImplementedError

    def delete(self, announcement_id: str) -> bool:
        raise NotImplementedError

    def is_read(self, user_id: str, announcement_id: str) -> bool:
        raise NotImplementedError

    def mark_read(self, user_id: str, announcement_id: str) -> None:
        raise NotImplementedError
