from __future__ import annotations

from ...core.enums import DailyAttendanceStatus, LeaveDayOption
from .base import DayContext, DayStatusStrategy, StatusDecision


class LeaveStrategy(DayStatusStrategy):
    """Approved leave wins over punches, holidays and weekends."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        if ctx.leave and ctx.leave.day_option == LeaveDayOption.HALF:
            return StatusDecision(status=DailyAttendanceStatus.ON_LEAVE_HALF)
        return StatusDecision(status=DailyAttendanceStatus.ON_LEAVE_FULL)
