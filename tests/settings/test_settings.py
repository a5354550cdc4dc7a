from __future__ import annotations

import json
from datetime import date

import pytest

from hr_portal.core.exceptions import ValidationError
from hr_portal.settings.service import SettingsService
from hr_portal.store.mock_database import MockDatabase


def test_attendance_rules_merge_and_validate():
    settings = SettingsService(MockDatabase())

    updated = settings.update_attendance_settings({"minimum_hours_full_day": 9})
    assert updated.minimum_hours_full_day == 9
    assert updated.minimum_hours_half_day == 4

    with pytest.raises(ValidationError, match="Unknown attendance settings: overtime"):
        settings.update_attendance_settings({"overtime": True})
    with pytest.raises(ValidationError, match="Half day hours"):
        settings.update_attendance_settings({"minimum_hours_half_day": 10})
    assert settings.get_attendance_settings().minimum_hours_full_day == 9


def test_holidays_stay_sorted():
    settings = SettingsService(MockDatabase())

    added = settings.add_holiday(holiday_date=date(2024, 9, 7), name=" Ganesh Chaturthi ")
    assert added.name == "Ganesh Chaturthi"
    assert [h.date.month for h in settings.get_holidays()] == [8, 9, 10, 12]

    settings.remove_holiday(added.id)
    assert added not in settings.get_holidays()
    with pytest.raises(ValidationError):
        settings.add_holiday(holiday_date=date(2024, 9, 7), name="")


def test_verification_costs():
    settings = SettingsService(MockDatabase())

    saved = settings.update_verification_costs([{"name": "Aadhaar Verification", "cost": "2"}])
    assert settings.cost_table() == {"Aadhaar Verification": 2.0}
    assert saved[0].id.startswith("cost")
    with pytest.raises(ValidationError, match="numeric"):
        settings.update_verification_costs([{"name": "X", "cost": "free"}])
    with pytest.raises(ValidationError, match="negative"):
        settings.update_verification_costs([{"name": "X", "cost": -1}])


def test_workflow_and_enrollment_rules():
    settings = SettingsService(MockDatabase())

    with pytest.raises(ValidationError, match="Unknown role"):
        settings.update_approval_workflow({"final_confirmation_role": "ceo"})
    assert settings.update_approval_workflow({"final_confirmation_role": "admin"}) == {"final_confirmation_role": "admin"}

    with pytest.raises(ValidationError):
        settings.update_enrollment_rules({"manpower_limit_rule": "ignore"})
    rules = settings.update_enrollment_rules({"manpower_limit_rule": "block"})
    assert rules["manpower_limit_rule"] == "block"
    assert rules["esi_ctc_threshold"] == 21000


def test_settings_persist_to_file(tmp_path):
    path = tmp_path / "settings.json"
    first = SettingsService(MockDatabase(), settings_file=path)
    first.update_attendance_settings({"annual_earned_leaves": 10})
    first.update_site_management({"enable_provisional_sites": True})

    assert json.loads(path.read_text())["attendance"]["annual_earned_leaves"] == 10

    second = SettingsService(MockDatabase(), settings_file=path)
    assert second.get_attendance_settings().annual_earned_leaves == 10
    assert second.get_site_management() == {"enable_provisional_sites": True}


def test_unreadable_settings_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")

    settings = SettingsService(MockDatabase(), settings_file=path)

    assert settings.get_attendance_settings().annual_earned_leaves == 5


def test_settings_routes(client, login):
    login("field@paradigm.com")
    assert client.get("/api/settings/attendance").get_json()["data"]["minimum_hours_full_day"] == 8
    assert client.patch("/api/settings/attendance", json={"minimum_hours_full_day": 7}).status_code == 403
    assert client.get("/api/settings/site-management").status_code == 200
    client.post("/api/auth/logout")

    login("hr@paradigm.com")
    resp = client.post("/api/settings/holidays", json={"date": "2024-11-01", "name": "Rajyotsava"})
    assert resp.status_code == 201
    holiday_id = resp.get_json()["data"]["id"]
    assert client.delete(f"/api/settings/holidays/{holiday_id}").status_code == 200

    assert client.patch("/api/settings/address", json={"enable_pincode_verification": False}).get_json()["data"] == {
        "enable_pincode_verification": False
    }
    assert client.put("/api/settings/verification-costs", json={"costs": "all"}).status_code == 400
    assert client.post("/api/settings/holidays", json={"name": "No date"}).status_code == 400


def test_attendance_values_are_converted_to_their_types():
    settings = SettingsService(MockDatabase())

    updated = settings.update_attendance_settings(
        {"minimum_hours_full_day": "9", "sick_leave_certificate_threshold": "3", "enable_attendance_notifications": "true"}
    )

    assert updated.minimum_hours_full_day == 9.0
    assert updated.sick_leave_certificate_threshold == 3
    assert isinstance(updated.sick_leave_certificate_threshold, int)
    assert updated.enable_attendance_notifications is True


@pytest.mark.parametrize(
    "updates, message",
    [
        ({"minimum_hours_full_day": "nine"}, "must be a number"),
        ({"annual_sick_leaves": -1}, "cannot be negative"),
        ({"monthly_floating_leaves": 1.5}, "whole number"),
        ({"sick_leave_certificate_threshold": True}, "must be a number"),
        ({"enable_attendance_notifications": "sometimes"}, "true or false"),
    ],
)
def test_attendance_values_that_cannot_be_converted(updates, message):
    settings = SettingsService(MockDatabase())

    with pytest.raises(ValidationError, match=message):
        settings.update_attendance_settings(updates)
    assert settings.get_attendance_settings().to_dict() == SettingsService(MockDatabase()).get_attendance_settings().to_dict()


def test_settings_file_with_bad_types_is_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"attendance": {"sick_leave_certificate_threshold": "soon"}}))

    settings = SettingsService(MockDatabase(), settings_file=path)

    assert settings.get_attendance_settings().sick_leave_certificate_threshold == 2


def test_string_threshold_keeps_sick_leave_working(client, login):
    login("hr@paradigm.com")
    assert client.patch("/api/settings/attendance", json={"minimum_hours_full_day": "nine"}).status_code == 400
    resp = client.patch("/api/settings/attendance", json={"sick_leave_certificate_threshold": "2"})
    assert resp.get_json()["data"]["sick_leave_certificate_threshold"] == 2
    client.post("/api/auth/logout")

    login("field@paradigm.com")
    resp = client.post(
        "/api/leave",
        json={"leave_type": "Sick", "start_date": "2024-08-20", "end_date": "2024-08-20", "reason": "Fever"},
    )
    assert resp.status_code == 201
