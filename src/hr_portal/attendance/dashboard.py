from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import each_day
from ..core.constants import TREND_SHORT_LABEL_MAX_DAYS
from ..core.enums import DailyAttendanceStatus
from ..core.exceptions import ValidationError
from ..leave.service import LeaveService
from ..onboarding.repository import SubmissionRepository
from ..organizations.repository import OrganizationRepository
from ..settings.service import SettingsService
from ..users.repository import UserRepository
from .derivation import generate_attendance_records
from .service import AttendanceService

DATE_FILTERS = ("Today", "This Month", "This Year", "Custom")


def resolve_date_filter(name: str, today: date, start: Optional[date] = None, end: Optional[date] = None) -> tuple[date, date]:
    """Translate a dashboard filter into an inclusive range; the end never passes today."""

    if name == "Today":
        lo, hi = today, today
    elif name == "This Month":
        lo = today.replace(day=1)
        hi = (lo.replace(day=28) + timedelta(days=4)).replace(day=1) - timedelta(days=1)
    elif name == "This Year":
        lo, hi = date(today.year, 1, 1), date(today.year, 12, 31)
    elif name == "Custom":
        if not start or not end:
            raise ValidationError("Custom range needs a start and an end date")
        lo, hi = start, end
    else:
        raise ValidationError(f"Unknown date filter: {name}")

    if name != "Custom" and hi > today:
        hi = today
    if hi < lo:
        raise ValidationError("Invalid date range provided.")
    return lo, hi


def trend_label(day: date, span_days: int) -> str:
    if span_days > TREND_SHORT_LABEL_MAX_DAYS:
        return day.strftime("%d-%b")
    return f"{day.strftime('%a')} {day.day}"


@dataclass(frozen=True)
class DashboardData:
    total_employees: int
    present_today: int
    absent_today: int
    on_leave_today: int
    stat_date_label: str
    attendance_trend: dict
    productivity_trend: dict
    attendance_by_site: dict

    def to_dict(self) -> dict:
        return {
            "total_employees": self.total_employees,
            "present_today": self.present_today,
            "absent_today": self.absent_today,
            "on_leave_today": self.on_leave_today,
            "stat_date_label": self.stat_date_label,
            "attendance_trend": self.attendance_trend,
            "productivity_trend": self.productivity_trend,
            "attendance_by_site": self.attendance_by_site,
        }


class AttendanceDashboardService:
    """Aggregates derived daily records across all users."""

    def __init__(
        self,
        attendance: AttendanceService,
        users: UserRepository,
        organizations: OrganizationRepository,
        submissions: SubmissionRepository,
        leaves: LeaveService,
        settings: SettingsService,
    ):
        self._attendance = attendance
        self._users = users
        self._organizations = organizations
        self._submissions = submissions
        self._leaves = leaves
        self._settings = settings

    def dashboard(self, start: date, end: date, today: date) -> DashboardData:
        if end < start:
            raise ValidationError("Invalid date range provided.")

        users = list(self._users.list_all())
        holidays = self._settings.get_holidays()
        rules = self._settings.get_attendance_settings()
        tz = self._attendance.tz

        stat_day = min(end, today)
        lo, hi = self._attendance.day_bounds(min(start, stat_day), max(end, stat_day))
        events_by_user = defaultdict(list)
        for e in self._attendance.get_all_events(lo, hi):
            events_by_user[e.user_id].append(e)
        leaves_by_user = defaultdict(list)
        for r in self._leaves.get_approved():
            leaves_by_user[r.user_id].append(r)

        def records(user_id: str, first: date, last: date):
            return generate_attendance_records(first, last, events_by_user[user_id], leaves_by_user[user_id], holidays, rules, tz)

        # Headline numbers for the last day of the range (or today)
        present = absent = on_leave = 0
        for u in users:
            status = records(u.id, stat_day, stat_day)[0].status
            if status.is_leave:
                on_leave += 1
            elif status.is_present:
                present += 1
            elif status == DailyAttendanceStatus.ABSENT:
                absent += 1

        days = list(each_day(start, end))
        per_user = {u.id: records(u.id, start, end) for u in users}

        labels, present_series, absent_series, hours_series = [], [], [], []
        for i, day in enumerate(days):
            daily_present = daily_absent = 0
            total_hours = 0.0
            for u in users:
                rec = per_user[u.id][i]
                if rec.status.is_present:
                    daily_present += 1
                    total_hours += float(rec.duration or 0)
                elif rec.status == DailyAttendanceStatus.ABSENT:
                    daily_absent += 1
            labels.append(trend_label(day, len(days)))
            present_series.append(daily_present)
            absent_series.append(daily_absent)
            hours_series.append(round(total_hours / daily_present, 2) if daily_present else 0)

        return DashboardData(
            total_employees=len(users),
            present_today=present,
            absent_today=absent,
            on_leave_today=on_leave,
            stat_date_label="Today" if stat_day == today else f"on {stat_day.strftime('%b')} {stat_day.day}",
            attendance_trend={"labels": labels, "present": present_series, "absent": absent_series},
            productivity_trend={"labels": list(labels), "hours": hours_series},
            attendance_by_site=self._site_rates(users, days, per_user, {h.date for h in holidays}),
        )

    def _site_rates(self, users, days, per_user, holiday_dates) -> dict:
        sites = {o.id: {"name": o.short_name, "present": 0.0, "work_days": 0} for o in self._organizations.list_all()}
        org_by_email = {s.email: s.organization_id for s in self._submissions.list_all() if s.email}

        for i, day in enumerate(days):
            if day.weekday() == 6 or day in holiday_dates:
                continue
            for u in users:
                org_id = u.organization_id or org_by_email.get(u.email)
                site = sites.get(org_id) if org_id else None
                if site is None:
                    continue
                site["work_days"] += 1
                status = per_user[u.id][i].status
                if status == DailyAttendanceStatus.PRESENT:
                    site["present"] += 1
                elif status == DailyAttendanceStatus.HALF_DAY:
                    site["present"] += 0.5

        rates = [
            (s["name"], s["present"] / s["work_days"] * 100 if s["work_days"] else 0.0)
            for s in sites.values()
        ]
        rates = sorted((r for r in rates if r[1] > 0), key=lambda r: r[1], reverse=True)
        return {"labels": [name for name, _ in rates], "rates": [round(rate, 2) for _, rate in rates]}
