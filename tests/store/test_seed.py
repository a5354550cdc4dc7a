from __future__ import annotations

from datetime import date

from hr_portal.store.mock_database import MockDatabase
from hr_portal.store.seed import DateShifter, load_seed


def _load(db, tmp_dir=None, today=date(2024, 7, 30)):
    load_seed(db, seed_dir=tmp_dir, today=today, password_hash=lambda p: f"hashed:{p}", default_password="pw")


def test_seed_loads_every_collection():
    db = MockDatabase()
    _load(db)

    assert len(db.users) == 8
    assert {u.password_hash for u in db.users} == {"hashed:pw"}
    assert [o.id for o in db.organizations] == ["org_1", "org_2", "org_3"]
    assert len(db.organization_groups) == 2
    assert len(db.attendance_events) == 38
    assert len(db.leave_requests) == 4
    assert db.support_tickets[0].posts[0].comments[0].content == "Redmi Note 10"


def test_dates_shift_by_whole_days():
    db = MockDatabase()
    _load(db, today=date(2024, 8, 9))

    first = db.attendance_events[0]
    assert first.timestamp.isoformat() == "2024-08-01T03:30:00+00:00"
    assert db.leave_requests[0].start_date == date(2024, 8, 5)
    assert db.organizations[2].provisional_creation_date == "2024-05-20"
    assert db.support_tickets[0].raised_at == "2024-08-07T06:00:00+00:00"


def test_shifter_leaves_empty_values():
    shift = DateShifter(date(2024, 7, 31))

    assert shift.date_str(None) is None
    assert shift.date_str("") == ""
    assert shift.date_str("2024-07-01") == "2024-07-02"
    assert shift.date_str("2024-07-01T10:00:00Z") == "2024-07-02T10:00:00+00:00"


def test_missing_seed_dir_falls_back_to_default_sites(tmp_path):
    db = MockDatabase()
    _load(db, tmp_dir=tmp_path)

    assert [o.id for o in db.organizations] == ["org_1", "org_2"]
    assert db.users == []
