"""Normalize date/time values exported by the spreadsheet backend.

Google Sheets hands back cells in several shapes depending on how the
column is formatted: already-formatted strings (``2:30 PM``), plain ISO
dates, full ISO timestamps in UTC, and time-only cells serialized against the
Sheets epoch (``1899-12-30T14:34:00.000Z``). The helpers below turn all of
those into display strings used by the dashboard and the exports.
"""
from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Any, Optional
from zoneinfo import ZoneInfo

EMPTY_MARKERS = {"", "-", "undefined", "null", "none"}

_CLOCK_RE = re.compile(r"^\d{1,2}:\d{2}(:\d{2})?\s*(AM|PM)?$", re.IGNORECASE)
_LONG_DATE_RE = re.compile(r"^[A-Za-z]+ \d{1,2}, \d{4}$")
_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


def now_local(tz_name: Optional[str] = None) -> datetime:
    """Current time, in ``tz_name`` when given.

    Note: Wrapped so tests can patch/mocked easier.
    """
    if tz_name:
        return datetime.now(ZoneInfo(tz_name))
    return datetime.now()


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return str(value).strip().lower() in EMPTY_MARKERS


def _clock(hours: int, minutes: int) -> str:
    period = "PM" if hours >= 12 else "AM"
    display_hour = hours % 12 or 12
    return f"{display_hour}:{minutes:02d} {period}"


def _long_date(value: date) -> str:
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_time_value(value: Any) -> str:
    """Render a time cell as ``h:MM AM/PM``; ``-`` when empty."""
    if isinstance(value, datetime):
        return _clock(value.hour, value.minute)
    if isinstance(value, time):
        return _clock(value.hour, value.minute)
    if _is_empty(value):
        return "-"

    text = str(value).strip()
    if _CLOCK_RE.match(text):
        return text

    if "T" in text:
        # Time-only cells come back on the Sheets epoch; read the clock verbatim.
        clock = text.split("T", 1)[1].replace("Z", "").split(".")[0]
        parts = clock.split(":")
        if len(parts) >= 2 and parts[0].isdigit() and parts[1].isdigit():
            return _clock(int(parts[0]), int(parts[1]))

    return text


def format_date_value(value: Any, tz_name: Optional[str] = None) -> str:
    """Render a date cell as ``Month D, YYYY``; ``-`` when empty."""
    if isinstance(value, datetime):
        if tz_name and value.tzinfo is not None:
            value = value.astimezone(ZoneInfo(tz_name))
        return _long_date(value.date())
    if isinstance(value, date):
        return _long_date(value)
    if _is_empty(value):
        return "-"

    text = str(value).strip()
    if _LONG_DATE_RE.match(text):
        return text

    if "T" in text:
        try:
            stamp = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            stamp = None
        if stamp is not None:
            if tz_name and stamp.tzinfo is not None:
                stamp = stamp.astimezone(ZoneInfo(tz_name))
            return _long_date(stamp.date())

    m = _ISO_DATE_RE.match(text)
    if m:
        try:
            return _long_date(date(int(m.group(1)), int(m.group(2)), int(m.group(3))))
        except ValueError:
            return text

    return text


def format_time_range(start: Any, end: Any) -> str:
    """``2:00 PM - 5:00 PM``; just the start when there is no end; ``-`` when no start."""
    if _is_empty(start):
        return "-"
    if _is_empty(end):
        return format_time_value(start)
    return f"{format_time_value(start)} - {format_time_value(end)}"


def coerce_date(value: Any, tz_name: Optional[str] = None) -> Optional[date]:
    """Best-effort conversion of a spreadsheet date cell into a ``date``."""
    if isinstance(value, datetime):
        if tz_name and value.tzinfo is not None:
            value = value.astimezone(ZoneInfo(tz_name))
        return value.date()
    if isinstance(value, date):
        return value
    if _is_empty(value):
        return None

    text = str(value).strip()
    if "T" in text:
        try:
            stamp = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
        if tz_name and stamp.tzinfo is not None:
            stamp = stamp.astimezone(ZoneInfo(tz_name))
        return stamp.date()

    m = _ISO_DATE_RE.match(text)
    if m:
        try:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None
    if _LONG_DATE_RE.match(text):
        month, rest = text.split(" ", 1)
        # "Sept" and similar four-letter forms fall back to the short name
        for candidate, fmt in ((text, "%B %d, %Y"), (f"{month[:3]} {rest}", "%b %d, %Y")):
            try:
                return datetime.strptime(candidate, fmt).date()
            except ValueError:
                continue
    return None
