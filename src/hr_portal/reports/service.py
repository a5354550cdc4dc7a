from __future__ import annotations

import logging
import time
from datetime import date
from enum import Enum
from typing import Optional

from ..attendance.service import AttendanceService
from ..core.exceptions import ValidationError
from ..onboarding.service import OnboardingService
from ..users.model import User
from ..users.repository import UserRepository
from .calculator.base import PayableDaysCalculator
from .calculator.standard_calculator import StandardPayableDaysCalculator
from .csv_export import log_csv, log_filename, muster_csv, muster_filename
from .model import LogRow, MusterRow, ReportFile
from .muster import build_muster_row
from .pdf_export import log_pdf, muster_pdf

logger = logging.getLogger(__name__)

ALL_USERS = "all"


class ReportFormat(str, Enum):
    MONTHLY_MUSTER = "monthly_muster"
    CUSTOM_LOG = "custom_log"


class OutputType(str, Enum):
    CSV = "csv"
    PDF = "pdf"


class AttendanceReportService:
    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceService,
        onboarding: OnboardingService,
        *,
        calculator: Optional[PayableDaysCalculator] = None,
    ):
        self._users = users
        self._attendance = attendance
        self._onboarding = onboarding
        self._calculator = calculator or StandardPayableDaysCalculator()

    def _users_for(self, user: str) -> list[User]:
        if user == ALL_USERS:
            users = list(self._users.list_all())
        else:
            found = self._users.get_by_id(user)
            users = [found] if found else []
        if not users:
            raise ValidationError("No users selected for report.")
        return users

    @staticmethod
    def _check_range(start: Optional[date], end: Optional[date]) -> None:
        if not start or not end or end < start:
            raise ValidationError("Invalid date range provided.")

    def monthly_muster(self, *, user: str, start: date, end: date) -> list[MusterRow]:
        self._check_range(start, end)
        rows = []
        for i, u in enumerate(self._users_for(user), start=1):
            submission = self._onboarding.find_by_email(u.email)
            ref_no = (submission.employee_id if submission else None) or u.id
            records = self._attendance.records_for_user(u.id, start, end)
            rows.append(build_muster_row(i, ref_no, u.name, records, self._calculator))
        return rows

    def custom_log(self, *, user: str, start: date, end: date) -> list[LogRow]:
        self._check_range(start, end)
        rows = []
        for u in self._users_for(user):
            rows.extend(LogRow(user_id=u.id, user_name=u.name, record=r) for r in self._attendance.records_for_user(u.id, start, end))
        if not rows:
            raise ValidationError("No data found for the selected criteria.")
        return rows

    def generate(
        self,
        *,
        report_format: ReportFormat | str,
        output: OutputType | str,
        user: str,
        start: Optional[date],
        end: Optional[date],
    ) -> ReportFile:
        try:
            report_format = ReportFormat(report_format)
            output = OutputType(output)
        except ValueError:
            raise ValidationError("Unknown report format")
        self._check_range(start, end)

        pdf_name = f"Attendance_Report_{int(time.time() * 1000)}.pdf"
        if report_format == ReportFormat.MONTHLY_MUSTER:
            rows = self.monthly_muster(user=user, start=start, end=end)
            if output == OutputType.CSV:
                result = ReportFile(muster_filename(start), "text/csv", muster_csv(rows, start).encode("utf-8"))
            else:
                result = ReportFile(pdf_name, "application/pdf", muster_pdf(rows, start))
        else:
            log_rows = self.custom_log(user=user, start=start, end=end)
            if output == OutputType.CSV:
                result = ReportFile(log_filename(user, start, end), "text/csv", log_csv(log_rows).encode("utf-8"))
            else:
                result = ReportFile(pdf_name, "application/pdf", log_pdf(log_rows, start, end))

        logger.info("Generated %s (%s, %s)", result.filename, report_format.value, user)
        return result
