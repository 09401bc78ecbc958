from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .announcements.memory_announcement_repository import SAMPLE_ANNOUNCEMENTS, InMemoryAnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.gas_attendance_repository import GasAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_EVENTS_CACHE_SECONDS, DEFAULT_GAS_TIMEOUT_SECONDS, DEFAULT_MEMBERS_CACHE_SECONDS
from .events.gas_event_repository import GasEventRepository
from .events.service import EventService
from .gas.connection import GasClient, GasConfig
from .reports.exporters.pdf_exporter import PdfReportExporter
from .reports.exporters.spreadsheet_exporter import SpreadsheetReportExporter
from .reports.service import DashboardService
from .users.gas_user_repository import GasLoginRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    events_client: GasClient
    login_client: GasClient

    events_repo: GasEventRepository
    attendance_repo: GasAttendanceRepository
    logins_repo: GasLoginRepository
    announcements_repo: InMemoryAnnouncementRepository

    auth_service: AuthService
    event_service: EventService
    attendance_service: AttendanceService
    announcement_service: AnnouncementService
    dashboard_service: DashboardService
    pdf_exporter: PdfReportExporter
    spreadsheet_exporter: SpreadsheetReportExporter


def build_container(*, gas_config: dict, org_config: dict, session: Optional[requests.Session] = None) -> Container:
    timeout = float(gas_config.get("timeout", DEFAULT_GAS_TIMEOUT_SECONDS))
    session = session or requests.Session()

    events_client = GasClient(
        GasConfig(api_url=str(gas_config.get("events_api_url") or ""), timeout=timeout, name="events-api"),
        session=session,
    )
    login_client = GasClient(
        GasConfig(api_url=str(gas_config.get("login_api_url") or ""), timeout=timeout, name="login-api"),
        session=session,
    )

    tz_name = org_config.get("timezone") or None

    events_repo = GasEventRepository(
        events_client, cache_seconds=float(gas_config.get("events_cache_seconds", DEFAULT_EVENTS_CACHE_SECONDS))
    )
    attendance_repo = GasAttendanceRepository(
        events_client,
        members_cache_seconds=float(gas_config.get("members_cache_seconds", DEFAULT_MEMBERS_CACHE_SECONDS)),
    )
    logins_repo = GasLoginRepository(login_client)
    announcements_repo = InMemoryAnnouncementRepository(SAMPLE_ANNOUNCEMENTS)

    auth_service = AuthService(logins_repo)
    event_service = EventService(events_repo, tz_name=tz_name)
    attendance_service = AttendanceService(attendance_repo, qr_prefix=str(org_config.get("qr_prefix") or ""))
    announcement_service = AnnouncementService(announcements_repo, tz_name=tz_name)
    dashboard_service = DashboardService(
        events_repo,
        attendance_repo,
        org_name=str(org_config.get("name") or ""),
        org_chapter=str(org_config.get("chapter") or ""),
        tz_name=tz_name,
    )

    return Container(
        events_client=events_client,
        login_client=login_client,
        events_repo=events_repo,
        attendance_repo=attendance_repo,
        logins_repo=logins_repo,
        announcements_repo=announcements_repo,
        auth_service=auth_service,
        event_service=event_service,
        attendance_service=attendance_service,
        announcement_service=announcement_service,
        dashboard_service=dashboard_service,
        pdf_exporter=PdfReportExporter(),
        spreadsheet_exporter=SpreadsheetReportExporter(),
    )
