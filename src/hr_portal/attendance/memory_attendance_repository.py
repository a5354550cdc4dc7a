from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..store.mock_database import MockDatabase
from .model import AttendanceEvent


def _comparable(value: datetime, like: datetime) -> datetime:
    # Mixed naive/aware values are compared on wall-clock time.
    if value.tzinfo is None and like.tzinfo is not None:
        return value.replace(tzinfo=like.tzinfo)
    if value.tzinfo is not None and like.tzinfo is None:
        return value.replace(tzinfo=None)
    return value


def _within(event: AttendanceEvent, start: Optional[datetime], end: Optional[datetime]) -> bool:
    ts = event.timestamp
    if start is not None and ts < _comparable(start, ts):
        return False
    if end is not None and ts > _comparable(end, ts):
        return False
    return True


class InMemoryAttendanceRepository:
    def __init__(self, db: MockDatabase):
        self._db = db

    def list_for_user(self, user_id: str, start: Optional[datetime] = None, end: Optional[datetime] = None) -> Sequence[AttendanceEvent]:
        with self._db.lock:
            return [e for e in self._db.attendance_events if e.user_id == user_id and _within(e, start, end)]

    def list_between(self, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        with self._db.lock:
            return [e for e in self._db.attendance_events if _within(e, start, end)]

    def add(self, event: AttendanceEvent) -> AttendanceEvent:
        with self._db.lock:
            self._db.attendance_events.append(event)
        return event
