from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import LeaveDayOption, LeaveRequestStatus, LeaveType


@dataclass(frozen=True)
class ApprovalStep:
    approver_id: str
    approver_name: str
    status: str
    timestamp: str
    comments: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "approver_id": self.approver_id,
            "approver_name": self.approver_name,
            "status": self.status,
            "timestamp": self.timestamp,
            "comments": self.comments,
        }


@dataclass(frozen=True)
class LeaveRequest:
    id: str
    user_id: str
    user_name: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveRequestStatus
    day_option: LeaveDayOption = LeaveDayOption.FULL
    current_approver_id: Optional[str] = None
    approval_history: tuple[ApprovalStep, ...] = field(default_factory=tuple)
    doctor_certificate: Optional[str] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "leave_type": self.leave_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "reason": self.reason,
            "day_option": self.day_option.value,
            "status": self.status.value,
            "current_approver_id": self.current_approver_id,
            "approval_history": [s.to_dict() for s in self.approval_history],
            "doctor_certificate": self.doctor_certificate,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LeaveRequest":
        return cls(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            user_name=str(data.get("user_name") or ""),
            leave_type=LeaveType(data["leave_type"]),
            start_date=parse_iso_date(str(data["start_date"])),
            end_date=parse_iso_date(str(data["end_date"])),
            reason=str(data.get("reason") or ""),
            status=LeaveRequestStatus(data["status"]),
            day_option=LeaveDayOption(data.get("day_option") or LeaveDayOption.FULL.value),
            current_approver_id=data.get("current_approver_id"),
            approval_history=tuple(ApprovalStep(**s) for s in data.get("approval_history") or ()),
            doctor_certificate=data.get("doctor_certificate"),
        )


@dataclass(frozen=True)
class LeaveBalance:
    user_id: str
    earned_total: float
    earned_used: float
    sick_total: float
    sick_used: float
    floating_total: float
    floating_used: float
