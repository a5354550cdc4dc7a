from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from hr_portal.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from hr_portal.attendance.service import AttendanceService
from hr_portal.core.enums import AttendanceEventType, DailyAttendanceStatus, Role
from hr_portal.core.exceptions import NotFoundError, ValidationError
from hr_portal.leave.memory_leave_repository import InMemoryLeaveRepository
from hr_portal.leave.service import LeaveService
from hr_portal.settings.service import SettingsService
from hr_portal.store.mock_database import MockDatabase
from hr_portal.users.memory_user_repository import InMemoryUserRepository
from hr_portal.users.model import User

IST = ZoneInfo("Asia/Kolkata")
NOW = datetime(2024, 7, 23, 4, 0, tzinfo=timezone.utc)  # 09:30 IST


@pytest.fixture
def service():
    db = MockDatabase()
    users = InMemoryUserRepository(db)
    users.add(User(id="u1", name="Ravi", email="ravi@example.com", role=Role.FIELD_OFFICER))
    settings = SettingsService(db)
    leaves = LeaveService(InMemoryLeaveRepository(db), users, settings, clock=lambda: NOW)
    return AttendanceService(InMemoryAttendanceRepository(db), users, leaves, settings, tz=IST, clock=lambda: NOW)


def test_status_without_events_is_checked_out(service):
    snap = service.status("u1")

    assert snap.is_checked_in is False
    assert snap.last_check_in_time is None
    assert snap.last_check_out_time is None


def test_toggle_alternates_and_reports_location(service):
    event, message = service.toggle_check_in("u1", latitude=12.97, longitude=77.59)
    assert event.type == AttendanceEventType.CHECK_IN
    assert message == "Successfully check in!"

    later = NOW + timedelta(hours=9)
    event, message = service.toggle_check_in("u1", now=later)
    assert event.type == AttendanceEventType.CHECK_OUT
    assert message == "Successfully check out! (Location not captured)"

    snap = service.status("u1", later)
    assert snap.is_checked_in is False
    assert snap.last_check_in_time == NOW.isoformat()
    assert snap.last_check_out_time == later.isoformat()


def test_status_reports_first_check_in_and_latest_check_out(service):
    for hours, kind in ((0, "check-in"), (3, "check-out"), (4, "check-in")):
        service.add_event(user_id="u1", event_type=kind, timestamp=NOW + timedelta(hours=hours))

    snap = service.status("u1", NOW + timedelta(hours=5))

    assert snap.is_checked_in is True
    assert snap.last_check_in_time == NOW.isoformat()
    assert snap.last_check_out_time == (NOW + timedelta(hours=3)).isoformat()


def test_yesterdays_check_in_does_not_count_today(service):
    service.add_event(user_id="u1", event_type="check-in", timestamp=NOW - timedelta(days=1))

    assert service.status("u1").is_checked_in is False


def test_add_event_rejects_unknown_user_and_type(service):
    with pytest.raises(NotFoundError):
        service.add_event(user_id="nobody", event_type="check-in")
    with pytest.raises(ValidationError):
        service.add_event(user_id="u1", event_type="lunch")


def test_records_for_user_covers_range(service):
    service.add_event(user_id="u1", event_type="check-in", timestamp=NOW)
    service.add_event(user_id="u1", event_type="check-out", timestamp=NOW + timedelta(hours=8, minutes=30))

    records = service.records_for_user("u1", date(2024, 7, 22), date(2024, 7, 23))

    assert [r.status for r in records] == [DailyAttendanceStatus.ABSENT, DailyAttendanceStatus.PRESENT]
    assert records[1].check_in == "09:30"


def test_records_for_user_rejects_inverted_range(service):
    with pytest.raises(ValidationError, match="Invalid date range provided."):
        service.records_for_user("u1", date(2024, 7, 23), date(2024, 7, 22))
