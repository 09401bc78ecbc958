from __future__ import annotations

import io
from abc import ABC, abstractmethod

from ..service import ReportData

PDF_MIMETYPE = "application/pdf"
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ATTENDEE_COLUMNS = (
    ("index", "#"),
    ("name", "Full Name"),
    ("committee", "Committee"),
    ("position", "Position"),
    ("status", "Status"),
    ("time_in", "Time In"),
    ("time_out", "Time Out"),
    ("recorded_by_in", "Recorded By (In)"),
    ("recorded_by_out", "Recorded By (Out)"),
    ("notes", "Notes"),
)


class ReportExporter(ABC):
    """Exporter interface (Strategy Pattern for download formats)."""

    extension: str = ""
    mimetype: str = ""

    @abstractmethod
    def export(self, report: ReportData) -> io.BytesIO:
        raise NotImplementedError
