from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterator, Optional
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value[:10], "%Y-%m-%d").date()


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp; a trailing ``Z`` is read as UTC."""
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    return datetime.fromisoformat(v)


def to_iso(value: datetime) -> str:
    return value.isoformat()


def get_zone(name: Optional[str]) -> Optional[tzinfo]:
    return ZoneInfo(name) if name else None


def to_local(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """Aware timestamps are converted to ``tz``; naive ones are taken as already local."""
    if tz is None or value.tzinfo is None:
        return value
    return value.astimezone(tz)


def each_day(start: date, end: date) -> Iterator[date]:
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, datetime.min.time())


def end_of_day(d: date) -> datetime:
    return datetime.combine(d, datetime.max.time())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
