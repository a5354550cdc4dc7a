from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional

from ..common.datetime_utils import each_day, to_local
from ..core.enums import AttendanceEventType
from ..leave.model import LeaveRequest
from ..settings.model import AttendanceSettings, Holiday
from .factory import DayStatusStrategyFactory
from .model import AttendanceEvent, DailyAttendanceRecord
from .strategies.base import DayContext

_default_factory = DayStatusStrategyFactory()


def _fmt_time(value: Optional[datetime]) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


def generate_attendance_records(
    start: date,
    end: date,
    events: Iterable[AttendanceEvent],
    approved_leaves: Iterable[LeaveRequest],
    holidays: Iterable[Holiday],
    settings: AttendanceSettings,
    tz: Optional[tzinfo] = None,
    *,
    factory: Optional[DayStatusStrategyFactory] = None,
) -> list[DailyAttendanceRecord]:
    """Derive one record per calendar day in [start, end] for a single user.

    ``events`` and ``approved_leaves`` must already be filtered to that user.
    Event timestamps are bucketed by their date in ``tz``.
    """

    factory = factory or _default_factory
    leaves = list(approved_leaves)
    holiday_by_date = {h.date: h for h in holidays}

    punches: dict[date, dict[AttendanceEventType, list[datetime]]] = defaultdict(lambda: defaultdict(list))
    for e in events:
        local = to_local(e.timestamp, tz)
        punches[local.date()][e.type].append(local)

    records = []
    for day in each_day(start, end):
        by_type = punches.get(day, {})
        ctx = DayContext(
            day=day,
            settings=settings,
            leave=next((lv for lv in leaves if lv.covers(day)), None),
            holiday=holiday_by_date.get(day),
            check_ins=tuple(sorted(by_type.get(AttendanceEventType.CHECK_IN, ()))),
            check_outs=tuple(sorted(by_type.get(AttendanceEventType.CHECK_OUT, ()))),
        )
        decision = factory.for_day(ctx).decide(ctx)
        records.append(
            DailyAttendanceRecord(
                date=day.isoformat(),
                day=day.strftime("%A"),
                check_in=_fmt_time(decision.check_in),
                check_out=_fmt_time(decision.check_out),
                duration=f"{decision.hours:.2f}" if decision.hours is not None else None,
                status=decision.status,
            )
        )
    return records
