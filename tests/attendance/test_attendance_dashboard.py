from __future__ import annotations

from datetime import date

import pytest

from hr_portal.attendance.dashboard import resolve_date_filter, trend_label
from hr_portal.core.exceptions import ValidationError

TODAY = date(2024, 7, 30)


def test_resolve_date_filter_caps_end_at_today():
    assert resolve_date_filter("Today", TODAY) == (TODAY, TODAY)
    assert resolve_date_filter("This Month", TODAY) == (date(2024, 7, 1), TODAY)
    assert resolve_date_filter("This Year", TODAY) == (date(2024, 1, 1), TODAY)


def test_resolve_custom_filter_keeps_future_end():
    assert resolve_date_filter("Custom", TODAY, date(2024, 8, 1), date(2024, 8, 31)) == (date(2024, 8, 1), date(2024, 8, 31))


def test_resolve_custom_filter_needs_both_dates():
    with pytest.raises(ValidationError):
        resolve_date_filter("Custom", TODAY, date(2024, 8, 1), None)
    with pytest.raises(ValidationError):
        resolve_date_filter("Last Week", TODAY)


def test_trend_label_switches_on_range_length():
    assert trend_label(date(2024, 7, 22), 7) == "Mon 22"
    assert trend_label(date(2024, 7, 22), 14) == "Mon 22"
    assert trend_label(date(2024, 7, 22), 15) == "22-Jul"


def test_dashboard_for_today_counts_seeded_users(container):
    data = container.dashboard_service.dashboard(TODAY, TODAY, TODAY)

    assert data.total_employees == 8
    # Two field officers are checked in (Incomplete) and count as neither present nor absent.
    assert data.present_today == 0
    assert data.absent_today == 6
    assert data.on_leave_today == 0
    assert data.stat_date_label == "Today"


def test_dashboard_trends_and_site_rates_for_seeded_week(container):
    data = container.dashboard_service.dashboard(date(2024, 7, 22), date(2024, 7, 28), TODAY)

    assert data.stat_date_label == "on Jul 28"
    assert data.attendance_trend["labels"] == ["Mon 22", "Tue 23", "Wed 24", "Thu 25", "Fri 26", "Sat 27", "Sun 28"]
    assert data.attendance_trend["present"] == [3, 2, 3, 2, 2, 2, 0]
    assert data.attendance_trend["absent"] == [5, 6, 5, 5, 5, 6, 0]
    assert data.productivity_trend["hours"][0] == 9.17
    assert data.productivity_trend["hours"][-1] == 0
    assert data.attendance_by_site == {
        "labels": ["Prestige Falcon City", "Brigade Gateway"],
        "rates": [79.17, 58.33],
    }


def test_dashboard_rejects_inverted_range(container):
    with pytest.raises(ValidationError):
        container.dashboard_service.dashboard(date(2024, 7, 28), date(2024, 7, 22), TODAY)
