from __future__ import annotations

import itertools
import os
from dataclasses import replace
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_choice
from ..core.constants import (
    ALLOWED_IMAGE_TYPES,
    ANNOUNCEMENT_CATEGORIES,
    MAX_ANNOUNCEMENT_IMAGE_BYTES,
    MAX_ANNOUNCEMENT_IMAGES,
)
from ..core.enums import Priority, RecipientType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..users.model import SessionUser, has_admin_access
from .model import Announcement, AnnouncementForm, ImageUpload
from .repository import AnnouncementRepository

log = get_logger(__name__)

_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png")
_OTHER_CATEGORY = "Other"
_AUTHOR = "Admin Team"


def validate_images(images: Sequence[ImageUpload], already_attached: int = 0) -> None:
    if already_attached + len(images) > MAX_ANNOUNCEMENT_IMAGES:
        raise ValidationError(f"Maximum {MAX_ANNOUNCEMENT_IMAGES} images allowed")
    for image in images:
        ext = os.path.splitext(image.filename or "")[1].lower()
        if image.content_type not in ALLOWED_IMAGE_TYPES and ext not in _IMAGE_EXTENSIONS:
            raise ValidationError(f"{image.filename} is not a .jpg or .png file")
        if image.size > MAX_ANNOUNCEMENT_IMAGE_BYTES:
            raise ValidationError(f"{image.filename} exceeds 5MB limit")


def sort_key(announcement: Announcement, is_read: bool) -> tuple:
    """Pinned first, then unread, then newest."""
    return (not announcement.is_pinned, is_read, -announcement.date.toordinal())


class AnnouncementService:
    """Communication center: board listing plus admin-only authoring."""

    def __init__(self, announcements: AnnouncementRepository, *, tz_name: Optional[str] = None):
        self._announcements = announcements
        self._tz_name = tz_name
        self._ids = itertools.count(1)

    # ---- reading -----------------------------------------------------

    def list(self, user: SessionUser, *, search: str = "", category: str = "all") -> list[tuple[Announcement, bool]]:
        needle = (search or "").strip().lower()
        category = (category or "all").strip()

        items = []
        for ann in self._announcements.list_all():
            if needle and needle not in ann.title.lower() and needle not in ann.content.lower():
                continue
            if category.lower() != "all" and ann.category != category:
                continue
            items.append((ann, self._announcements.is_read(user.id, ann.announcement_id)))

        items.sort(key=lambda pair: sort_key(*pair))
        return items

    def unread_count(self, user: SessionUser) -> int:
        return sum(1 for _, read in self.list(user) if not read)

    def get(self, user: SessionUser, announcement_id: str) -> Announcement:
        """Open an announcement; opening marks it read."""
        ann = self._require(announcement_id)
        self._announcements.mark_read(user.id, ann.announcement_id)
        return ann

    def mark_read(self, user: SessionUser, announcement_id: str) -> None:
        self._require(announcement_id)
        self._announcements.mark_read(user.id, announcement_id)

    # ---- authoring ---------------------------------------------------

    def create(self, user: SessionUser, form: AnnouncementForm) -> Announcement:
        self._require_admin(user, "create")
        priority, recipient_type, category = self._validate(form)
        validate_images(form.images)

        content = self._compose_content(form, recipient_type)
        if form.images:
            content += f"\n📷 {len(form.images)} image(s) attached"

        stamp = now_local(self._tz_name)
        ann = Announcement(
            announcement_id=f"ANN-{int(stamp.timestamp() * 1000)}-{next(self._ids)}",
            title=f"{form.title.strip()} - {form.subject.strip()}",
            content=content,
            priority=priority,
            is_pinned=form.is_pinned,
            author=_AUTHOR,
            date=stamp.date(),
            category=category,
            recipient_type=recipient_type,
            recipients=form.specific_recipients.strip(),
            images=tuple(i.filename for i in form.images),
        )
        self._announcements.add(ann)
        log.info("announcement %s created by %s", ann.announcement_id, user.username)
        return ann

    def update(self, user: SessionUser, announcement_id: str, form: AnnouncementForm) -> Announcement:
        self._require_admin(user, "edit")
        current = self._require(announcement_id)
        priority, recipient_type, category = self._validate(form)
        validate_images(form.images)

        ann = Announcement(
            announcement_id=current.announcement_id,
            title=f"{form.title.strip()} - {form.subject.strip()}",
            content=self._compose_content(form, recipient_type),
            priority=priority,
            is_pinned=form.is_pinned,
            author=current.author,
            date=current.date,
            category=category,
            recipient_type=recipient_type,
            recipients=form.specific_recipients.strip(),
            images=tuple(i.filename for i in form.images) or current.images,
        )
        self._announcements.replace(ann)
        log.info("announcement %s updated by %s", ann.announcement_id, user.username)
        return ann

    def toggle_pin(self, user: SessionUser, announcement_id: str) -> Announcement:
        self._require_admin(user, "pin")
        current = self._require(announcement_id)
        ann = replace(current, is_pinned=not current.is_pinned)
        self._announcements.replace(ann)
        return ann

    def delete(self, user: SessionUser, announcement_id: str) -> None:
        self._require_admin(user, "delete")
        if not self._announcements.delete(announcement_id):
            raise NotFoundError(f"Announcement {announcement_id} not found")
        log.info("announcement %s deleted by %s", announcement_id, user.username)

    # ---- helpers -----------------------------------------------------

    def _require(self, announcement_id: str) -> Announcement:
        ann = self._announcements.get(announcement_id)
        if ann is None:
            raise NotFoundError(f"Announcement {announcement_id} not found")
        return ann

    @staticmethod
    def _require_admin(user: SessionUser, action: str) -> None:
        if not has_admin_access(user.role):
            raise AuthorizationError(f"Only admins can {action} announcements")

    @staticmethod
    def _validate(form: AnnouncementForm) -> tuple[Priority, RecipientType, str]:
        if not form.title.strip():
            raise ValidationError("Title is required")
        if not form.subject.strip():
            raise ValidationError("Subject is required")
        if not form.content.strip():
            raise ValidationError("Body content is required")

        recipient_type = require_choice(form.recipient_type, RecipientType, "recipient type")
        if recipient_type is RecipientType.SPECIFIC_PERSON and not form.specific_recipients.strip():
            raise ValidationError("Please specify person name")

        if form.category == _OTHER_CATEGORY:
            if not form.custom_category.strip():
                raise ValidationError("Please specify custom category")
            category = form.custom_category.strip()
        elif form.category in ANNOUNCEMENT_CATEGORIES:
            category = form.category
        else:
            raise ValidationError(f"Invalid category: {form.category!r}")

        priority = require_choice(form.priority, Priority, "priority")
        return priority, recipient_type, category

    @staticmethod
    def _compose_content(form: AnnouncementForm, recipient_type: RecipientType) -> str:
        if recipient_type is RecipientType.SPECIFIC_PERSON:
            recipient_info = f"Specific Person: {form.specific_recipients.strip()}"
        else:
            recipient_info = f"Recipient: {recipient_type.value}"
        return f"{form.content.strip()}\n\n📢 {recipient_info}"
