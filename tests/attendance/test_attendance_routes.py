from __future__ import annotations


def test_routes_require_sign_in(client):
    resp = client.get("/api/attendance/status")

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Please sign in to continue."


def test_unverified_user_is_forbidden(client, login):
    login("newjoinee@paradigm.com")

    assert client.get("/api/attendance/status").status_code == 403


def test_status_and_toggle_for_checked_in_officer(client, login, fixed_now):
    login("field@paradigm.com")

    status = client.get("/api/attendance/status").get_json()["data"]
    assert status["is_checked_in"] is True
    assert status["last_check_in_time"] == "2024-07-30T03:30:00+00:00"

    resp = client.post("/api/attendance/toggle", json={"latitude": "12.97", "longitude": 77.59})
    body = resp.get_json()
    assert body["data"]["type"] == "check-out"
    assert body["data"]["latitude"] == 12.97
    assert body["message"] == "Successfully check out!"

    status = client.get("/api/attendance/status").get_json()["data"]
    assert status["is_checked_in"] is False
    assert status["last_check_out_time"] == fixed_now.isoformat()


def test_toggle_rejects_bad_coordinates(client, login):
    login("field@paradigm.com")

    resp = client.post("/api/attendance/toggle", json={"latitude": "north"})

    assert resp.status_code == 400


def test_records_default_to_month_so_far(client, login):
    login("field@paradigm.com")

    records = client.get("/api/attendance/records").get_json()["data"]

    assert len(records) == 30
    assert records[0]["date"] == "2024-07-01"
    assert records[-1]["status"] == "Incomplete"
    assert records[23]["status"] == "Half Day"


def test_own_events_only_for_field_officer(client, login):
    login("field@paradigm.com")

    own = client.get("/api/attendance/events?start=2024-07-22&end=2024-07-22").get_json()["data"]
    assert [e["type"] for e in own] == ["check-in", "check-out"]

    other = client.get("/api/attendance/events?user_id=user_7")
    assert other.status_code == 403
    assert other.get_json()["message"] == "You can only view your own attendance."
    assert client.get("/api/attendance/events?user_id=all").status_code == 403


def test_inverted_range_is_400(client, login):
    login("field@paradigm.com")

    resp = client.get("/api/attendance/records?start=2024-07-10&end=2024-07-01")

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid date range provided."


def test_hr_sees_all_events_and_dashboard(client, login):
    login("hr@paradigm.com")

    events = client.get("/api/attendance/events?user_id=all&start=2024-07-30&end=2024-07-30").get_json()["data"]
    assert {e["user_id"] for e in events} == {"user_6", "user_7"}

    records = client.get("/api/attendance/records?user_id=user_7&start=2024-07-26&end=2024-07-26").get_json()["data"]
    assert records[0]["status"] == "On Leave (Full)"

    dash = client.get("/api/attendance/dashboard?filter=Today").get_json()["data"]
    assert dash["total_employees"] == 8
    assert dash["stat_date_label"] == "Today"

    custom = client.get("/api/attendance/dashboard?filter=Custom&start=2024-07-22")
    assert custom.status_code == 400
