from __future__ import annotations

from typing import Iterable

from ..attendance.model import DailyAttendanceRecord
from ..common.datetime_utils import parse_iso_date
from ..core.enums import DailyAttendanceStatus
from .calculator.base import PayableDaysCalculator
from .model import MusterRow, MusterSummary

S = DailyAttendanceStatus

# status -> (grid code, summary counter)
_CODES = {
    S.PRESENT: ("P", "present"),
    S.ABSENT: ("A", "absent"),
    S.HALF_DAY: ("HD", "half_day"),
    S.ON_LEAVE_FULL: ("L", "leaves"),
    S.ON_LEAVE_HALF: ("L", "leaves"),
    S.WEEKEND: ("WO", "week_off"),
    S.HOLIDAY: ("H", "holidays"),
}


def build_muster_row(
    sl_no: int,
    ref_no: str,
    staff_name: str,
    records: Iterable[DailyAttendanceRecord],
    calculator: PayableDaysCalculator,
) -> MusterRow:
    summary = MusterSummary()
    grid: dict[int, str] = {}
    for rec in records:
        code, counter = _CODES.get(rec.status, ("-", None))
        if counter:
            setattr(summary, counter, getattr(summary, counter) + 1)
        grid[parse_iso_date(rec.date).day] = code

    return MusterRow(
        sl_no=sl_no,
        ref_no=ref_no,
        staff_name=staff_name,
        day_grid=grid,
        summary=summary,
        total_payable=calculator.total_payable(summary),
    )
