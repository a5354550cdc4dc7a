from __future__ import annotations

from ...core.enums import DailyAttendanceStatus
from .base import DayContext, DayStatusStrategy, StatusDecision


class HolidayStrategy(DayStatusStrategy):
    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(status=DailyAttendanceStatus.HOLIDAY)


class WeekendStrategy(DayStatusStrategy):
    """Sunday is the only weekly off."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(status=DailyAttendanceStatus.WEEKEND)
