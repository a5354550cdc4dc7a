from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for permission lookups."""

    ADMIN = "admin"
    HR = "hr"
    DEVELOPER = "developer"
    OPERATION_MANAGER = "operation_manager"
    SITE_MANAGER = "site_manager"
    FIELD_OFFICER = "field_officer"
    UNVERIFIED = "unverified"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


class AttendanceEventType(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class DailyAttendanceStatus(str, Enum):
    """Per-day status derived from events, leaves and the holiday calendar."""

    PRESENT = "Present"
    HALF_DAY = "Half Day"
    ABSENT = "Absent"
    INCOMPLETE = "Incomplete"
    ON_LEAVE_FULL = "On Leave (Full)"
    ON_LEAVE_HALF = "On Leave (Half)"
    HOLIDAY = "Holiday"
    WEEKEND = "Weekend"

    @property
    def is_leave(self) -> bool:
        return self in {DailyAttendanceStatus.ON_LEAVE_FULL, DailyAttendanceStatus.ON_LEAVE_HALF}

    @property
    def is_present(self) -> bool:
        return self in {DailyAttendanceStatus.PRESENT, DailyAttendanceStatus.HALF_DAY}


class LeaveType(str, Enum):
    EARNED = "Earned"
    SICK = "Sick"
    FLOATING = "Floating"


class LeaveDayOption(str, Enum):
    FULL = "full"
    HALF = "half"


class LeaveRequestStatus(str, Enum):
    """Approval flow: manager -> HR confirmation."""

    PENDING_MANAGER_APPROVAL = "pending_manager_approval"
    PENDING_HR_CONFIRMATION = "pending_hr_confirmation"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_pending(self) -> bool:
        return self in {LeaveRequestStatus.PENDING_MANAGER_APPROVAL, LeaveRequestStatus.PENDING_HR_CONFIRMATION}


class SubmissionStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class PortalSyncStatus(str, Enum):
    PENDING_SYNC = "pending_sync"
    SYNCED = "synced"
    FAILED = "failed"


class TicketStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class TaskStatus(str, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class InvoiceStatus(str, Enum):
    NOT_GENERATED = "Not Generated"
    GENERATED = "Generated"
    SENT = "Sent"
    PAID = "Paid"
