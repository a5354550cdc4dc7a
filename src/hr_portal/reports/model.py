from __future__ import annotations

from dataclasses import dataclass, field

from ..attendance.model import DailyAttendanceRecord


@dataclass
class MusterSummary:
    present: int = 0
    half_day: int = 0
    absent: int = 0
    leaves: int = 0
    week_off: int = 0
    holidays: int = 0


@dataclass(frozen=True)
class MusterRow:
    sl_no: int
    ref_no: str
    staff_name: str
    day_grid: dict[int, str]
    summary: MusterSummary
    total_payable: float

    def to_dict(self) -> dict:
        return {
            "sl_no": self.sl_no,
            "ref_no": self.ref_no,
            "staff_name": self.staff_name,
            "day_grid": {str(k): v for k, v in self.day_grid.items()},
            "present": self.summary.present,
            "half_day": self.summary.half_day,
            "absent": self.summary.absent,
            "leaves": self.summary.leaves,
            "week_off": self.summary.week_off,
            "holidays": self.summary.holidays,
            "total_payable": self.total_payable,
        }


@dataclass(frozen=True)
class LogRow:
    user_id: str
    user_name: str
    record: DailyAttendanceRecord

    def to_dict(self) -> dict:
        return {**self.record.to_dict(), "user_id": self.user_id, "user_name": self.user_name}


@dataclass(frozen=True)
class ReportFile:
    filename: str
    mimetype: str
    content: bytes = field(repr=False)
