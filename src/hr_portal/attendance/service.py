from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Callable, Optional

from ..common.datetime_utils import end_of_day, start_of_day, to_iso, to_local, utc_now
from ..common.ids import new_id
from ..core.enums import AttendanceEventType
from ..core.exceptions import NotFoundError, ValidationError
from ..leave.service import LeaveService
from ..settings.service import SettingsService
from ..users.repository import UserRepository
from .derivation import generate_attendance_records
from .model import AttendanceEvent, AttendanceStatusSnapshot, DailyAttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: punches (check-in / check-out) and per-day records."""

    def __init__(
        self,
        events: AttendanceRepository,
        users: UserRepository,
        leaves: LeaveService,
        settings: SettingsService,
        *,
        tz: Optional[tzinfo] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._events = events
        self._users = users
        self._leaves = leaves
        self._settings = settings
        self._tz = tz
        self._clock = clock

    @property
    def tz(self) -> Optional[tzinfo]:
        return self._tz

    def day_bounds(self, start: date, end: date) -> tuple[datetime, datetime]:
        """Local-day bounds of an inclusive date range."""
        return start_of_day(start).replace(tzinfo=self._tz), end_of_day(end).replace(tzinfo=self._tz)

    def get_events(self, user_id: str, start: datetime, end: datetime) -> list[AttendanceEvent]:
        return list(self._events.list_for_user(user_id, start, end))

    def get_all_events(self, start: datetime, end: datetime) -> list[AttendanceEvent]:
        return list(self._events.list_between(start, end))

    def add_event(
        self,
        *,
        user_id: str,
        event_type: AttendanceEventType | str,
        timestamp: Optional[datetime] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> AttendanceEvent:
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")
        try:
            event_type = AttendanceEventType(event_type)
        except ValueError:
            raise ValidationError(f"Invalid event type: {event_type}")

        event = AttendanceEvent(
            id=new_id("evt"),
            user_id=user_id,
            timestamp=timestamp or self._clock(),
            type=event_type,
            latitude=latitude,
            longitude=longitude,
        )
        return self._events.add(event)

    def status(self, user_id: str, now: Optional[datetime] = None) -> AttendanceStatusSnapshot:
        """Checked in iff today's latest punch is a check-in."""

        now = now or self._clock()
        today = to_local(now, self._tz).date()
        start, end = self.day_bounds(today, today)
        events = sorted(self._events.list_for_user(user_id, start, end), key=lambda e: e.timestamp)

        check_ins = [e for e in events if e.type == AttendanceEventType.CHECK_IN]
        check_outs = [e for e in events if e.type == AttendanceEventType.CHECK_OUT]
        return AttendanceStatusSnapshot(
            is_checked_in=bool(events) and events[-1].type == AttendanceEventType.CHECK_IN,
            last_check_in_time=to_iso(check_ins[0].timestamp) if check_ins else None,
            last_check_out_time=to_iso(check_outs[-1].timestamp) if check_outs else None,
        )

    def toggle_check_in(
        self,
        user_id: str,
        *,
        now: Optional[datetime] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> tuple[AttendanceEvent, str]:
        now = now or self._clock()
        current = self.status(user_id, now)
        event_type = AttendanceEventType.CHECK_OUT if current.is_checked_in else AttendanceEventType.CHECK_IN

        event = self.add_event(
            user_id=user_id,
            event_type=event_type,
            timestamp=now,
            latitude=latitude,
            longitude=longitude,
        )
        action = "check out" if event_type == AttendanceEventType.CHECK_OUT else "check in"
        message = f"Successfully {action}!"
        if latitude is None or longitude is None:
            message += " (Location not captured)"
        logger.info("User %s: %s", user_id, event_type.value)
        return event, message

    def records_for_user(self, user_id: str, start: date, end: date) -> list[DailyAttendanceRecord]:
        if end < start:
            raise ValidationError("Invalid date range provided.")
        lo, hi = self.day_bounds(start, end)
        return generate_attendance_records(
            start,
            end,
            self._events.list_for_user(user_id, lo, hi),
            self._leaves.get_approved(user_id),
            self._settings.get_holidays(),
            self._settings.get_attendance_settings(),
            self._tz,
        )
