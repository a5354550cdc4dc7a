from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ...core.enums import DailyAttendanceStatus
from ...leave.model import LeaveRequest
from ...settings.model import AttendanceSettings, Holiday


@dataclass(frozen=True)
class DayContext:
    """Everything known about one user on one calendar day.

    ``check_ins`` / ``check_outs`` are local times sorted ascending.
    """

    day: date
    settings: AttendanceSettings
    leave: Optional[LeaveRequest] = None
    holiday: Optional[Holiday] = None
    check_ins: tuple[datetime, ...] = field(default_factory=tuple)
    check_outs: tuple[datetime, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StatusDecision:
    status: DailyAttendanceStatus
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    hours: Optional[float] = None


class DayStatusStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a day's attendance status."""

    @abstractmethod
    def decide(self, ctx: DayContext) -> StatusDecision:
        raise NotImplementedError
