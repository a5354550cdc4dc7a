from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import to_iso, utc_now
from ..common.ids import new_id
from ..core.enums import LeaveDayOption, LeaveRequestStatus, LeaveType, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..settings.service import SettingsService
from ..users.repository import UserRepository
from .model import ApprovalStep, LeaveBalance, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def _parse_enum(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {label}: {value}")


class LeaveService:
    """Use case: leave requests and their two-step approval (manager, then HR)."""

    def __init__(
        self,
        leaves: LeaveRepository,
        users: UserRepository,
        settings: SettingsService,
        *,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._leaves = leaves
        self._users = users
        self._settings = settings
        self._clock = clock

    def _final_approver_id(self) -> Optional[str]:
        role = Role(self._settings.get_approval_workflow().get("final_confirmation_role", Role.HR.value))
        user = next((u for u in self._users.list_all() if u.role == role), None)
        return user.id if user else None

    def submit(
        self,
        *,
        user_id: str,
        leave_type: LeaveType | str,
        start_date: date,
        end_date: date,
        reason: str,
        day_option: LeaveDayOption | str = LeaveDayOption.FULL,
        doctor_certificate: Optional[str] = None,
    ) -> LeaveRequest:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        leave_type = _parse_enum(LeaveType, leave_type, "leave type")
        day_option = _parse_enum(LeaveDayOption, day_option, "day option")
        if end_date < start_date:
            raise ValidationError("End date cannot be before start date")
        if not reason or not reason.strip():
            raise ValidationError("Reason is required")
        if day_option == LeaveDayOption.HALF and start_date != end_date:
            raise ValidationError("Half day leave must start and end on the same day")

        days = (end_date - start_date).days + 1
        threshold = self._settings.get_attendance_settings().sick_leave_certificate_threshold
        if leave_type == LeaveType.SICK and days > threshold and not doctor_certificate:
            raise ValidationError(f"A doctor's certificate is required for sick leave longer than {threshold} days")

        if user.reporting_manager_id:
            status = LeaveRequestStatus.PENDING_MANAGER_APPROVAL
            approver_id = user.reporting_manager_id
        else:
            status = LeaveRequestStatus.PENDING_HR_CONFIRMATION
            approver_id = self._final_approver_id()

        request = LeaveRequest(
            id=new_id("leave"),
            user_id=user.id,
            user_name=user.name,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason.strip(),
            status=status,
            day_option=day_option,
            current_approver_id=approver_id,
            doctor_certificate=doctor_certificate,
        )
        self._leaves.add(request)
        logger.info("Leave %s submitted by %s (%s)", request.id, user.id, status.value)
        return request

    def get_requests(
        self,
        *,
        user_id: Optional[str] = None,
        status: Optional[LeaveRequestStatus | str] = None,
        for_approver_id: Optional[str] = None,
    ) -> list[LeaveRequest]:
        if status:
            status = _parse_enum(LeaveRequestStatus, status, "status")
        return list(self._leaves.list(user_id=user_id, status=status, approver_id=for_approver_id))

    def get_approved(self, user_id: Optional[str] = None) -> list[LeaveRequest]:
        return self.get_requests(user_id=user_id, status=LeaveRequestStatus.APPROVED)

    def _pending(self, request_id: str) -> LeaveRequest:
        request = self._leaves.get(request_id)
        if not request:
            raise NotFoundError("Leave request not found")
        if not request.status.is_pending:
            raise ValidationError("Leave request has already been decided")
        return request

    def _decide(
        self,
        request: LeaveRequest,
        *,
        approver_id: str,
        step_status: str,
        new_status: LeaveRequestStatus,
        next_approver_id: Optional[str],
        comments: Optional[str],
    ) -> LeaveRequest:
        approver = self._users.get_by_id(approver_id)
        step = ApprovalStep(
            approver_id=approver_id,
            approver_name=approver.name if approver else approver_id,
            status=step_status,
            timestamp=to_iso(self._clock()),
            comments=comments or None,
        )
        updated = replace(
            request,
            status=new_status,
            current_approver_id=next_approver_id,
            approval_history=(*request.approval_history, step),
        )
        self._leaves.save(updated)
        logger.info("Leave %s -> %s by %s", request.id, new_status.value, approver_id)
        return updated

    def approve(self, request_id: str, approver_id: str, comments: Optional[str] = None) -> LeaveRequest:
        request = self._pending(request_id)
        return self._decide(
            request,
            approver_id=approver_id,
            step_status="approved",
            new_status=LeaveRequestStatus.PENDING_HR_CONFIRMATION,
            next_approver_id=self._final_approver_id(),
            comments=comments,
        )

    def reject(self, request_id: str, approver_id: str, comments: Optional[str] = None) -> LeaveRequest:
        request = self._pending(request_id)
        return self._decide(
            request,
            approver_id=approver_id,
            step_status="rejected",
            new_status=LeaveRequestStatus.REJECTED,
            next_approver_id=None,
            comments=comments,
        )

    def confirm_by_hr(self, request_id: str, hr_id: str, comments: Optional[str] = None) -> LeaveRequest:
        request = self._pending(request_id)
        return self._decide(
            request,
            approver_id=hr_id,
            step_status="approved",
            new_status=LeaveRequestStatus.APPROVED,
            next_approver_id=None,
            comments=comments,
        )

    def balances(self, user_id: str, year: int) -> LeaveBalance:
        """Totals come from the attendance settings; usage is approved leave taken in ``year``."""

        s = self._settings.get_attendance_settings()
        year_start, year_end = date(year, 1, 1), date(year, 12, 31)
        used = {t: 0.0 for t in LeaveType}

        for r in self._leaves.list(user_id=user_id, status=LeaveRequestStatus.APPROVED):
            first = max(r.start_date, year_start)
            last = min(r.end_date, year_end)
            if first > last:
                continue
            if r.day_option == LeaveDayOption.HALF:
                used[r.leave_type] += 0.5
            else:
                used[r.leave_type] += (last - first + timedelta(days=1)).days

        return LeaveBalance(
            user_id=user_id,
            earned_total=float(s.annual_earned_leaves),
            earned_used=used[LeaveType.EARNED],
            sick_total=float(s.annual_sick_leaves),
            sick_used=used[LeaveType.SICK],
            floating_total=float(s.monthly_floating_leaves * 12),
            floating_used=used[LeaveType.FLOATING],
        )
