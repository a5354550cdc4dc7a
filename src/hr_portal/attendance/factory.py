from __future__ import annotations

from dataclasses import dataclass

from .strategies.base import DayContext, DayStatusStrategy
from .strategies.calendar_strategy import HolidayStrategy, WeekendStrategy
from .strategies.leave_strategy import LeaveStrategy
from .strategies.worked_hours_strategy import AbsentStrategy, IncompleteStrategy, WorkedHoursStrategy

SUNDAY = 6


@dataclass
class DayStatusStrategyFactory:
    """Factory Pattern: choose the strategy for a day.

    Order matters: leave, holiday, weekend, then the punches.
    """

    def for_day(self, ctx: DayContext) -> DayStatusStrategy:
        if ctx.leave:
            return LeaveStrategy()
        if ctx.holiday:
            return HolidayStrategy()
        if ctx.day.weekday() == SUNDAY:
            return WeekendStrategy()
        if not ctx.check_ins:
            return AbsentStrategy()
        if not ctx.check_outs:
            return IncompleteStrategy()
        return WorkedHoursStrategy()
