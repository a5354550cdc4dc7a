from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_timestamp, to_iso
from ..core.enums import AttendanceEventType, DailyAttendanceStatus


@dataclass(frozen=True)
class AttendanceEvent:
    """A single check-in or check-out punch."""

    id: str
    user_id: str
    timestamp: datetime
    type: AttendanceEventType
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "timestamp": to_iso(self.timestamp),
            "type": self.type.value,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceEvent":
        return cls(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            timestamp=parse_timestamp(str(data["timestamp"])),
            type=AttendanceEventType(data["type"]),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )


@dataclass(frozen=True)
class DailyAttendanceRecord:
    date: str
    day: str
    check_in: Optional[str]
    check_out: Optional[str]
    duration: Optional[str]
    status: DailyAttendanceStatus

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "day": self.day,
            "check_in": self.check_in,
            "check_out": self.check_out,
            "duration": self.duration,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class AttendanceStatusSnapshot:
    is_checked_in: bool
    last_check_in_time: Optional[str]
    last_check_out_time: Optional[str]
