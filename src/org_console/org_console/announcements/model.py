from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import Priority, RecipientType


@dataclass(frozen=True)
class ImageUpload:
    """Metadata of an image attached in the announcement form."""

    filename: str
    content_type: str
    size: int


@dataclass(frozen=True)
class Announcement:
    announcement_id: str
    title: str
    content: str
    priority: Priority
    is_pinned: bool
    author: str
    date: date
    category: str
    recipient_type: RecipientType = RecipientType.ALL_MEMBERS
    recipients: str = ""
    images: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self, *, is_read: Optional[bool] = None) -> dict:
        data = {
            "id": self.announcement_id,
            "title": self.title,
            "content": self.content,
            "priority": self.priority.value,
            "isPinned": self.is_pinned,
            "author": self.author,
            "date": self.date.isoformat(),
            "category": self.category,
            "recipientType": self.recipient_type.value,
            "recipients": self.recipients,
            "images": list(self.images),
        }
        if is_read is not None:
            data["isRead"] = is_read
        return data


@dataclass(frozen=True)
class AnnouncementForm:
    """Fields of the create/edit modal, before composition."""

    title: str
    subject: str
    content: str
    priority: str = Priority.NORMAL.value
    category: str = "Events"
    custom_category: str = ""
    recipient_type: str = RecipientType.ALL_MEMBERS.value
    specific_recipients: str = ""
    is_pinned: bool = False
    images: tuple[ImageUpload, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict, images: tuple[ImageUpload, ...] = ()) -> "AnnouncementForm":
        return cls(
            title=str(data.get("title") or ""),
            subject=str(data.get("subject") or ""),
            content=str(data.get("content") or ""),
            priority=str(data.get("priority") or Priority.NORMAL.value),
            category=str(data.get("category") or "Events"),
            custom_category=str(data.get("customCategory") or ""),
            recipient_type=str(data.get("recipientType") or RecipientType.ALL_MEMBERS.value),
            specific_recipients=str(data.get("specificRecipients") or ""),
            is_pinned=bool(data.get("isPinned")),
            images=tuple(images),
        )
