from __future__ import annotations

import io
from datetime import date
from typing import Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape, legal
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .csv_export import days_in_month
from .model import LogRow, MusterRow

_HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
]


def _title_style() -> ParagraphStyle:
    styles = getSampleStyleSheet()
    return ParagraphStyle("ReportTitle", parent=styles["Heading2"], alignment=1, spaceAfter=6)


def muster_pdf(rows: Sequence[MusterRow], month: date) -> bytes:
    """Muster roll on legal landscape: one column per day of the month."""

    n = days_in_month(month)
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(legal), leftMargin=0.5 * inch, rightMargin=0.5 * inch, topMargin=0.5 * inch, bottomMargin=0.5 * inch)

    data = [["SL", "Ref No", "Name", *[str(d) for d in range(1, n + 1)], "P", "HD", "A", "L", "WO", "H", "Total"]]
    for row in rows:
        s = row.summary
        data.append(
            [
                row.sl_no,
                row.ref_no,
                row.staff_name,
                *[row.day_grid.get(d, "") for d in range(1, n + 1)],
                s.present,
                s.half_day,
                s.absent,
                s.leaves,
                s.week_off,
                s.holidays,
                f"{row.total_payable:.1f}",
            ]
        )

    table = Table(data, colWidths=[0.3 * inch, 0.8 * inch, 1.3 * inch, *[0.25 * inch] * n, *[0.3 * inch] * 6, 0.45 * inch], repeatRows=1)
    table.setStyle(
        TableStyle(
            _HEADER_STYLE
            + [
                ("FONTSIZE", (0, 0), (-1, -1), 6),
                ("ALIGN", (3, 0), (-1, -1), "CENTER"),
                ("FONTNAME", (-1, 1), (-1, -1), "Helvetica-Bold"),
            ]
        )
    )

    doc.build([Paragraph(f"Attendance Muster Roll - {month:%B %Y}", _title_style()), table])
    return buffer.getvalue()


def log_pdf(rows: Sequence[LogRow], start: date, end: date) -> bytes:
    """Attendance log on A4 portrait."""

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=0.5 * inch, rightMargin=0.5 * inch)
    styles = getSampleStyleSheet()

    data = [["Date", "Employee", "Check-In", "Check-Out", "Duration", "Status"]]
    for row in rows:
        rec = row.record
        data.append([rec.date, row.user_name, rec.check_in or "--", rec.check_out or "--", rec.duration or "--", rec.status.value])

    table = Table(data, colWidths=[1.0 * inch, 2.0 * inch, 0.9 * inch, 0.9 * inch, 0.8 * inch, 1.4 * inch], repeatRows=1)
    table.setStyle(TableStyle(_HEADER_STYLE + [("FONTSIZE", (0, 0), (-1, -1), 8)]))

    story = [
        Paragraph("Attendance Log", _title_style()),
        Paragraph(f"{start:%d %b, %Y} - {end:%d %b, %Y}", styles["Normal"]),
        Spacer(1, 12),
        table,
    ]
    doc.build(story)
    return buffer.getvalue()
