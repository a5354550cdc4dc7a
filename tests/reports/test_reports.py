from __future__ import annotations

from datetime import date

import pytest

from hr_portal.attendance.model import DailyAttendanceRecord
from hr_portal.core.enums import DailyAttendanceStatus as S
from hr_portal.core.exceptions import ValidationError
from hr_portal.reports.calculator.standard_calculator import StandardPayableDaysCalculator
from hr_portal.reports.csv_export import log_filename, muster_csv, muster_filename
from hr_portal.reports.model import MusterSummary
from hr_portal.reports.muster import build_muster_row


def _rec(day: str, status: S) -> DailyAttendanceRecord:
    return DailyAttendanceRecord(date=day, day="", check_in=None, check_out=None, duration=None, status=status)


def test_standard_calculator_counts_half_days_as_half():
    summary = MusterSummary(present=20, half_day=2, absent=3, leaves=1, week_off=4, holidays=1)

    assert StandardPayableDaysCalculator().total_payable(summary) == 27.0


def test_muster_row_maps_statuses_to_codes():
    records = [
        _rec("2024-07-01", S.PRESENT),
        _rec("2024-07-02", S.HALF_DAY),
        _rec("2024-07-03", S.ON_LEAVE_HALF),
        _rec("2024-07-04", S.HOLIDAY),
        _rec("2024-07-05", S.INCOMPLETE),
        _rec("2024-07-06", S.ABSENT),
        _rec("2024-07-07", S.WEEKEND),
    ]

    row = build_muster_row(1, "PFC-0012", "Ravi Kumar", records, StandardPayableDaysCalculator())

    assert row.day_grid == {1: "P", 2: "HD", 3: "L", 4: "H", 5: "-", 6: "A", 7: "WO"}
    assert (row.summary.present, row.summary.half_day, row.summary.leaves) == (1, 1, 1)
    assert (row.summary.absent, row.summary.week_off, row.summary.holidays) == (1, 1, 1)
    assert row.total_payable == 4.5


def test_muster_csv_has_one_column_per_day():
    row = build_muster_row(1, "X-1", "Someone", [_rec("2024-02-01", S.PRESENT)], StandardPayableDaysCalculator())

    header, line = muster_csv([row], date(2024, 2, 1)).splitlines()

    assert header.split(",")[:4] == ["SL.No", "Ref No", "Staff Name", "1"]
    assert header.split(",")[3 + 29 - 1] == "29"
    assert header.endswith("Total Payable Days")
    assert line.split(",")[3] == "P"
    assert line.endswith(",1.0")


def test_report_filenames():
    assert muster_filename(date(2024, 7, 1)) == "Monthly_Report_Attendance_Jul_2024.csv"
    assert log_filename("user_6", date(2024, 7, 1), date(2024, 7, 31)) == "attendance_log_user_6_20240701-20240731.csv"


def test_monthly_muster_for_seeded_officer(container):
    [row] = container.report_service.monthly_muster(user="user_6", start=date(2024, 7, 22), end=date(2024, 7, 28))

    assert row.ref_no == "PFC-0012"
    assert row.staff_name == "Ravi Kumar"
    assert row.day_grid[24] == "HD"
    assert row.day_grid[28] == "WO"
    assert row.summary.present == 5
    assert row.summary.half_day == 1
    assert row.summary.week_off == 1
    assert row.total_payable == 6.5


def test_monthly_muster_falls_back_to_user_id_without_submission(container):
    [row] = container.report_service.monthly_muster(user="user_5", start=date(2024, 7, 22), end=date(2024, 7, 28))

    assert row.ref_no == "user_5"
    assert row.day_grid[25] == "L"
    assert row.day_grid[27] == "A"


def test_generate_rejects_bad_input(container):
    service = container.report_service
    with pytest.raises(ValidationError, match="Invalid date range provided."):
        service.generate(report_format="monthly_muster", output="csv", user="all", start=None, end=date(2024, 7, 1))
    with pytest.raises(ValidationError, match="Unknown report format"):
        service.generate(report_format="yearly", output="csv", user="all", start=date(2024, 7, 1), end=date(2024, 7, 2))
    with pytest.raises(ValidationError, match="No users selected"):
        service.generate(report_format="custom_log", output="csv", user="ghost", start=date(2024, 7, 1), end=date(2024, 7, 2))


def test_custom_log_csv_for_all_users(container):
    report = container.report_service.generate(
        report_format="custom_log", output="csv", user="all", start=date(2024, 7, 22), end=date(2024, 7, 22)
    )

    lines = report.content.decode("utf-8").splitlines()
    assert report.mimetype == "text/csv"
    assert lines[0] == "Date,Day,Employee ID,Employee Name,Check-In,Check-Out,Duration,Status"
    assert len(lines) == 1 + 8
    assert "2024-07-22,Monday,user_6,Ravi Kumar,09:00,18:00,9.00,Present" in lines


def test_download_route_sends_attachment(client, login):
    login("hr@paradigm.com")

    resp = client.get("/api/reports/attendance?format=monthly_muster&output=csv&user=user_6&start=2024-07-01&end=2024-07-31")

    assert resp.status_code == 200
    assert "Monthly_Report_Attendance_Jul_2024.csv" in resp.headers["Content-Disposition"]
    assert b"PFC-0012" in resp.data


def test_download_route_pdf(client, login):
    login("hr@paradigm.com")

    resp = client.get("/api/reports/attendance?format=custom_log&output=pdf&user=user_6&start=2024-07-22&end=2024-07-28")

    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF")


def test_download_route_requires_permission(client, login):
    assert client.get("/api/reports/attendance").status_code == 401

    login("field@paradigm.com")
    resp = client.get("/api/reports/attendance?start=2024-07-01&end=2024-07-31")

    assert resp.status_code == 403
    assert resp.get_json()["redirect"] == "/forbidden"
