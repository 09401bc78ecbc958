from __future__ import annotations

import io
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ...core.constants import STATUS_COLORS
from ..service import STATUS_BUCKETS, ReportData
from .base import PDF_MIMETYPE, ReportExporter

BRAND = colors.HexColor("#f6421f")
INK = colors.HexColor("#1e293b")
MUTED = colors.HexColor("#646464")
ROW_TINT = colors.HexColor("#fef9f4")
MARGIN = 15 * mm

PDF_COLUMNS = (
    ("index", "#", 7),
    ("name", "Name", 28),
    ("committee", "Committee", 28),
    ("position", "Position", 18),
    ("status", "Status", 14),
    ("time_in", "Time In", 16),
    ("time_out", "Time Out", 16),
    ("recorded_by_in", "Rec. By (In)", 22),
    ("recorded_by_out", "Rec. By (Out)", 22),
)


def _numbered_canvas(footer_left: str, generated: str):
    """Canvas class that defers page output so the footer can say ``Page X of Y``."""

    class NumberedCanvas(canvas.Canvas):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._saved_pages = []

        def showPage(self):
            self._saved_pages.append(dict(self.__dict__))
            self._startPage()

        def save(self):
            total = len(self._saved_pages)
            for state in self._saved_pages:
                self.__dict__.update(state)
                self._draw_footer(total)
                super().showPage()
            super().save()

        def _draw_footer(self, total: int) -> None:
            width, _ = self._pagesize
            y = 10 * mm
            self.setStrokeColor(BRAND)
            self.setLineWidth(0.5 * mm)
            self.line(MARGIN, 15 * mm, width - MARGIN, 15 * mm)
            self.setFillColor(MUTED)
            self.setFont("Helvetica", 7)
            self.drawString(MARGIN, y, footer_left)
            self.drawRightString(width - MARGIN, y, f"Page {self._pageNumber} of {total}")
            self.setFont("Helvetica", 6)
            self.drawCentredString(width / 2, y, f"Generated: {generated}")

    return NumberedCanvas


class PdfReportExporter(ReportExporter):
    extension = "pdf"
    mimetype = PDF_MIMETYPE

    def export(self, report: ReportData) -> io.BytesIO:
        buf = io.BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=A4,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=22 * mm,
            title=f"Attendance Report - {report.event_title or 'Event'}",
            author=f"{report.org_name} - {report.org_chapter}",
        )
        width = A4[0] - 2 * MARGIN
        styles = getSampleStyleSheet()

        content = []
        content.append(self._header(report, styles, width))
        content.append(Spacer(1, 6 * mm))
        content.append(self._section_title("EVENT DETAILS", styles))
        content.append(self._event_details(report, styles, width))
        content.append(Spacer(1, 6 * mm))
        content.append(self._section_title("ATTENDANCE SUMMARY", styles))
        content.append(self._summary_boxes(report, width))
        content.append(Spacer(1, 6 * mm))
        content.append(self._section_title("ATTENDEE LIST", styles))
        content.append(self._attendee_table(report))

        generated = report.generated_at.strftime("%m/%d/%Y, %I:%M:%S %p")
        doc.build(content, canvasmaker=_numbered_canvas(f"{report.org_name} - {report.org_chapter}", generated))
        buf.seek(0)
        return buf

    @staticmethod
    def _section_title(text: str, styles) -> Paragraph:
        style = ParagraphStyle(
            "SectionTitle",
            parent=styles["Heading2"],
            fontSize=11,
            textColor=INK,
            spaceAfter=3 * mm,
        )
        return Paragraph(f"<u>{text}</u>", style)

    @staticmethod
    def _header(report: ReportData, styles, width: float) -> Table:
        white = ParagraphStyle("HeaderText", parent=styles["Normal"], textColor=colors.white)
        cells = [
            [Paragraph(f"<b><font size=18>{escape(report.org_name)}</font></b>", white), ""],
            [Paragraph(f"<font size=12>{escape(report.org_chapter)}</font>", white), ""],
            [
                Paragraph("<font size=10>ATTENDANCE REPORT</font>", white),
                Paragraph(
                    f"<font size=9>{report.generated_at:%B} {report.generated_at.day}, {report.generated_at.year}</font>",
                    ParagraphStyle("HeaderDate", parent=white, alignment=2),
                ),
            ],
        ]
        table = Table(cells, colWidths=[width * 0.65, width * 0.35], rowHeights=[10 * mm, 8 * mm, 8 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), BRAND),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 6 * mm),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 6 * mm),
                ]
            )
        )
        return table

    @staticmethod
    def _event_details(report: ReportData, styles, width: float) -> Table:
        label = ParagraphStyle("Label", parent=styles["Normal"], fontSize=9, textColor=MUTED)
        value = ParagraphStyle("Value", parent=styles["Normal"], fontSize=9, textColor=INK)
        badge = ParagraphStyle("Badge", parent=styles["Normal"], alignment=TA_CENTER, textColor=colors.white)

        fields = [
            ("Event Name", report.event_title or "N/A"),
            ("Event Date", report.event_date),
            ("Event Time", report.event_time),
            ("Event Status", report.event_status or "N/A"),
        ]
        badge_text = f"<b><font size=16>{report.total}</font></b><br/><font size=7>ATTENDEES</font>"
        note = f"Filtered by: {report.committee}" if report.committee != "All" else ""

        cells = []
        for i, (name, text) in enumerate(fields):
            right = ""
            if i == 0:
                right = Paragraph(badge_text, badge)
            elif i == 3 and note:
                right = Paragraph(f"<font size=7>{escape(note)}</font>", label)
            cells.append([Paragraph(f"<b>{name}:</b>", label), Paragraph(escape(text), value), right])

        table = Table(cells, colWidths=[32 * mm, width - 32 * mm - 45 * mm, 45 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("BOX", (0, 0), (-1, -1), 0.5, colors.HexColor("#e6e6e6")),
                    ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#fcfcfc")),
                    ("BACKGROUND", (2, 0), (2, 2), BRAND),
                    ("SPAN", (2, 0), (2, 2)),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ]
            )
        )
        return table

    @staticmethod
    def _summary_boxes(report: ReportData, width: float) -> Table:
        style = ParagraphStyle("SummaryBox", alignment=TA_CENTER, textColor=colors.white, leading=18)
        cells = [
            [
                Paragraph(
                    f"<b><font size=16>{report.summary.get(name, 0)}</font></b><br/>"
                    f"<font size=6>{name.upper()}</font>",
                    style,
                )
                for name in STATUS_BUCKETS
            ]
        ]
        table = Table(cells, colWidths=[width / 4] * 4, rowHeights=[18 * mm])
        commands = [("VALIGN", (0, 0), (-1, -1), "MIDDLE")]
        for i, name in enumerate(STATUS_BUCKETS):
            commands.append(("BACKGROUND", (i, 0), (i, 0), colors.HexColor(STATUS_COLORS[name])))
        commands.append(("LINEAFTER", (0, 0), (2, 0), 4, colors.white))
        table.setStyle(TableStyle(commands))
        return table

    @staticmethod
    def _attendee_table(report: ReportData) -> Table:
        data = [[title for _, title, _ in PDF_COLUMNS]]
        for row in report.rows:
            data.append([str(row[key]) for key, _, _ in PDF_COLUMNS])

        table = Table(data, colWidths=[w * mm for _, _, w in PDF_COLUMNS], repeatRows=1)
        commands = [
            ("BACKGROUND", (0, 0), (-1, 0), BRAND),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 7),
            ("ALIGN", (0, 0), (-1, 0), "CENTER"),
            ("ALIGN", (0, 1), (0, -1), "CENTER"),
            ("FONTNAME", (0, 1), (0, -1), "Helvetica-Bold"),
            ("ALIGN", (4, 1), (6, -1), "CENTER"),
            ("TEXTCOLOR", (0, 1), (-1, -1), colors.HexColor("#323232")),
            ("GRID", (0, 0), (-1, -1), 0.1, colors.HexColor("#dcdcdc")),
        ]
        for i in range(2, len(data), 2):
            commands.append(("BACKGROUND", (0, i), (-1, i), ROW_TINT))
        table.setStyle(TableStyle(commands))
        return table
