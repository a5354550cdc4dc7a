from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveRequestStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def list(
        self,
        *,
        user_id: Optional[str] = None,
        status: Optional[LeaveRequestStatus] = None,
        approver_id: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def add(self, request: LeaveRequest) -> LeaveRequest:
        raise NotImplementedError

    def save(self, request: LeaveRequest) -> LeaveRequest:
        raise NotImplementedError
