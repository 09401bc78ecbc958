from __future__ import annotations

from datetime import date

import pytest

from src.org_console.org_console.announcements.memory_announcement_repository import (
    SAMPLE_ANNOUNCEMENTS,
    InMemoryAnnouncementRepository,
)
from src.org_console.org_console.announcements.model import Announcement, AnnouncementForm, ImageUpload
from src.org_console.org_console.announcements.service import AnnouncementService
from src.org_console.org_console.core.enums import Priority, Role
from src.org_console.org_console.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.org_console.org_console.users.model import SessionUser

ADMIN = SessionUser(id="U-1", username="admin", email="", name="Admin", role=Role.ADMIN)
MEMBER = SessionUser(id="U-2", username="juan", email="", name="Juan", role=Role.MEMBER)


def _ann(ann_id, *, pinned=False, day=1, category="Events", title="T", content="C"):
    return Announcement(
        announcement_id=ann_id,
        title=title,
        content=content,
        priority=Priority.NORMAL,
        is_pinned=pinned,
        author="Admin Team",
        date=date(2025, 2, day),
        category=category,
    )


def _form(**overrides):
    data = {"title": "Cleanup", "subject": "Saturday", "content": "Bring gloves"}
    data.update(overrides)
    return AnnouncementForm(**data)


def test_order_is_pinned_then_unread_then_newest():
    repo = InMemoryAnnouncementRepository(
        [
            _ann("old-unread", day=1),
            _ann("new-read", day=20),
            _ann("pinned-old", pinned=True, day=2),
            _ann("new-unread", day=15),
        ]
    )
    repo.mark_read(MEMBER.id, "new-read")
    svc = AnnouncementService(repo)

    ids = [a.announcement_id for a, _ in svc.list(MEMBER)]

    assert ids == ["pinned-old", "new-unread", "old-unread", "new-read"]


def test_read_state_is_per_user():
    svc = AnnouncementService(InMemoryAnnouncementRepository([_ann("1")]))
    svc.get(MEMBER, "1")

    assert svc.list(MEMBER)[0][1] is True
    assert svc.list(ADMIN)[0][1] is False
    assert svc.unread_count(ADMIN) == 1


def test_search_and_category_filter():
    svc = AnnouncementService(InMemoryAnnouncementRepository(SAMPLE_ANNOUNCEMENTS))

    assert [a.announcement_id for a, _ in svc.list(MEMBER, search="ORIENTATION")] == ["2"]
    assert [a.announcement_id for a, _ in svc.list(MEMBER, search="gloves")] == ["1"]
    assert [a.announcement_id for a, _ in svc.list(MEMBER, category="Programs")] == ["4"]
    assert len(svc.list(MEMBER, category="all")) == 4


def test_create_composes_title_and_content():
    svc = AnnouncementService(InMemoryAnnouncementRepository(), tz_name="Asia/Manila")

    ann = svc.create(ADMIN, _form(images=(ImageUpload("a.png", "image/png", 1024),)))

    assert ann.title == "Cleanup - Saturday"
    assert ann.content == "Bring gloves\n\n📢 Recipient: All Members\n📷 1 image(s) attached"
    assert ann.author == "Admin Team"
    assert ann.announcement_id.startswith("ANN-")


def test_specific_person_recipient_line():
    svc = AnnouncementService(InMemoryAnnouncementRepository())
    ann = svc.create(ADMIN, _form(recipient_type="Specific Person", specific_recipients="Maria Santos, Ana Lopez"))
    assert ann.content.endswith("📢 Specific Person: Maria Santos, Ana Lopez")


def test_update_keeps_identity_and_drops_image_note():
    repo = InMemoryAnnouncementRepository([_ann("1", day=3)])
    svc = AnnouncementService(repo)

    ann = svc.update(ADMIN, "1", _form(category="Other", custom_category="Outreach", priority="urgent"))

    assert ann.date == date(2025, 2, 3)
    assert ann.category == "Outreach"
    assert ann.priority is Priority.URGENT
    assert "📷" not in ann.content
    assert repo.get("1") == ann


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"title": " "}, "Title is required"),
        ({"subject": ""}, "Subject is required"),
        ({"content": ""}, "Body content is required"),
        ({"recipient_type": "Specific Person"}, "Please specify person name"),
        ({"category": "Other"}, "Please specify custom category"),
        ({"priority": "critical"}, "Invalid priority"),
    ],
)
def test_form_validation(overrides, message):
    svc = AnnouncementService(InMemoryAnnouncementRepository())
    with pytest.raises(ValidationError, match=message):
        svc.create(ADMIN, _form(**overrides))


@pytest.mark.parametrize(
    "images, message",
    [
        (tuple(ImageUpload(f"{i}.png", "image/png", 10) for i in range(6)), "Maximum 5 images allowed"),
        ((ImageUpload("doc.gif", "image/gif", 10),), "doc.gif is not a .jpg or .png file"),
        ((ImageUpload("big.jpg", "image/jpeg", 5 * 1024 * 1024 + 1),), "big.jpg exceeds 5MB limit"),
    ],
)
def test_image_rules(images, message):
    svc = AnnouncementService(InMemoryAnnouncementRepository())
    with pytest.raises(ValidationError, match=message):
        svc.create(ADMIN, _form(images=images))


@pytest.mark.parametrize("action", ["create", "edit", "pin", "delete"])
def test_only_admins_can_mutate(action):
    repo = InMemoryAnnouncementRepository([_ann("1")])
    svc = AnnouncementService(repo)
    calls = {
        "create": lambda: svc.create(MEMBER, _form()),
        "edit": lambda: svc.update(MEMBER, "1", _form()),
        "pin": lambda: svc.toggle_pin(MEMBER, "1"),
        "delete": lambda: svc.delete(MEMBER, "1"),
    }
    with pytest.raises(AuthorizationError, match=f"Only admins can {action} announcements"):
        calls[action]()
    assert repo.get("1") == _ann("1")


def test_toggle_pin_and_delete():
    repo = InMemoryAnnouncementRepository([_ann("1")])
    svc = AnnouncementService(repo)

    assert svc.toggle_pin(ADMIN, "1").is_pinned is True
    assert svc.toggle_pin(ADMIN, "1").is_pinned is False

    svc.delete(ADMIN, "1")
    assert repo.get("1") is None
    with pytest.raises(NotFoundError):
        svc.delete(ADMIN, "1")
