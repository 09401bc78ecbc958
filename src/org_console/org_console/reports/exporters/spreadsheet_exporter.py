from __future__ import annotations

import io

import pandas as pd
from openpyxl.styles import Font

from ..service import STATUS_BUCKETS, ReportData
from .base import ATTENDEE_COLUMNS, XLSX_MIMETYPE, ReportExporter

SHEET_NAME = "Attendance Report"
COLUMN_WIDTHS = {"A": 5, "B": 25, "C": 30, "D": 20, "E": 12, "F": 12, "G": 12, "H": 20, "I": 20, "J": 25}
SECTION_TITLES = ("EVENT DETAILS", "ATTENDANCE SUMMARY", "ATTENDEE LIST")


def header_block(report: ReportData) -> list[list]:
    """Rows written above the attendee table."""
    rows: list[list] = [
        [f"{report.org_name} - {report.org_chapter}"],
        ["Attendance Report"],
        [""],
        ["EVENT DETAILS"],
        ["Event Name:", report.event_title or "Unknown Event"],
        ["Event Date:", report.event_date],
        ["Event Time:", report.event_time],
        ["Event Status:", report.event_status],
        [""],
        ["Committee Filter:", report.committee],
        ["Generated:", report.generated_at.strftime("%m/%d/%Y, %I:%M:%S %p")],
        [""],
        ["ATTENDANCE SUMMARY"],
    ]
    rows.extend([f"{name}:", report.summary.get(name, 0)] for name in STATUS_BUCKETS)
    rows.append(["Total:", report.total])
    rows.append([""])
    rows.append(["ATTENDEE LIST"])
    return rows


class SpreadsheetReportExporter(ReportExporter):
    extension = "xlsx"
    mimetype = XLSX_MIMETYPE

    def export(self, report: ReportData) -> io.BytesIO:
        header = header_block(report)
        table = pd.DataFrame(
            [[row[key] for key, _ in ATTENDEE_COLUMNS] for row in report.rows],
            columns=[title for _, title in ATTENDEE_COLUMNS],
        )

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            pd.DataFrame(header).to_excel(writer, index=False, header=False, sheet_name=SHEET_NAME)
            table.to_excel(writer, index=False, sheet_name=SHEET_NAME, startrow=len(header))

            sheet = writer.sheets[SHEET_NAME]
            for letter, width in COLUMN_WIDTHS.items():
                sheet.column_dimensions[letter].width = width
            sheet["A1"].font = Font(bold=True, size=14)
            for cell in sheet["A"][: len(header)]:
                if cell.value in SECTION_TITLES:
                    cell.font = Font(bold=True)

        output.seek(0)
        return output
