from __future__ import annotations

from ...core.enums import DailyAttendanceStatus
from .base import DayContext, DayStatusStrategy, StatusDecision


class AbsentStrategy(DayStatusStrategy):
    """No check-in on a working day."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(status=DailyAttendanceStatus.ABSENT)


class IncompleteStrategy(DayStatusStrategy):
    """Checked in but never checked out."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        return StatusDecision(status=DailyAttendanceStatus.INCOMPLETE, check_in=ctx.check_ins[0])


class WorkedHoursStrategy(DayStatusStrategy):
    """Standard rule: hours = last check-out - first check-in, graded by the configured minimums."""

    def decide(self, ctx: DayContext) -> StatusDecision:
        first_in = ctx.check_ins[0]
        last_out = ctx.check_outs[-1]
        hours = (last_out - first_in).total_seconds() / 3600

        if hours >= ctx.settings.minimum_hours_full_day:
            status = DailyAttendanceStatus.PRESENT
        elif hours >= ctx.settings.minimum_hours_half_day:
            status = DailyAttendanceStatus.HALF_DAY
        else:
            status = DailyAttendanceStatus.ABSENT
        return StatusDecision(status=status, check_in=first_in, check_out=last_out, hours=hours)
