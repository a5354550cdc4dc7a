from __future__ import annotations

import calendar
import csv
import io
from datetime import date
from typing import Sequence

from .model import LogRow, MusterRow

LOG_HEADER = ["Date", "Day", "Employee ID", "Employee Name", "Check-In", "Check-Out", "Duration", "Status"]
MUSTER_TOTALS_HEADER = ["Present", "Half Day", "Absent", "Leaves", "Week Off", "Holidays", "Total Payable Days"]


def days_in_month(month: date) -> int:
    return calendar.monthrange(month.year, month.month)[1]


def muster_csv(rows: Sequence[MusterRow], month: date) -> str:
    n = days_in_month(month)
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(["SL.No", "Ref No", "Staff Name", *[str(d) for d in range(1, n + 1)], *MUSTER_TOTALS_HEADER])
    for row in rows:
        s = row.summary
        writer.writerow(
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
    return out.getvalue()


def log_csv(rows: Sequence[LogRow]) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(LOG_HEADER)
    for row in rows:
        rec = row.record
        writer.writerow(
            [rec.date, rec.day, row.user_id, row.user_name, rec.check_in or "", rec.check_out or "", rec.duration or "", rec.status.value]
        )
    return out.getvalue()


def muster_filename(month: date) -> str:
    return f"Monthly_Report_Attendance_{month.strftime('%b_%Y')}.csv"


def log_filename(user: str, start: date, end: date) -> str:
    return f"attendance_log_{user}_{start:%Y%m%d}-{end:%Y%m%d}.csv"
