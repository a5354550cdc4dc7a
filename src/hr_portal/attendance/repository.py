from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    def list_for_user(self, user_id: str, start: Optional[datetime] = None, end: Optional[datetime] = None) -> Sequence[AttendanceEvent]:
        """Events of one user; the bounds are inclusive when given."""

        raise NotImplementedError

    def list_between(self, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def add(self, event: AttendanceEvent) -> AttendanceEvent:
        raise NotImplementedError
