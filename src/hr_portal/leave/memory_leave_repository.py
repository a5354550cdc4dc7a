from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import LeaveRequestStatus
from ..store.mock_database import MockDatabase
from .model import LeaveRequest


class InMemoryLeaveRepository:
    def __init__(self, db: MockDatabase):
        self._db = db

    def list(
        self,
        *,
        user_id: Optional[str] = None,
        status: Optional[LeaveRequestStatus] = None,
        approver_id: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        with self._db.lock:
            rows = list(self._db.leave_requests)
        if user_id:
            rows = [r for r in rows if r.user_id == user_id]
        if status:
            rows = [r for r in rows if r.status == status]
        if approver_id:
            rows = [r for r in rows if r.current_approver_id == approver_id]
        return rows

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        with self._db.lock:
            return next((r for r in self._db.leave_requests if r.id == request_id), None)

    def add(self, request: LeaveRequest) -> LeaveRequest:
        with self._db.lock:
            self._db.leave_requests.append(request)
        return request

    def save(self, request: LeaveRequest) -> LeaveRequest:
        with self._db.lock:
            for i, r in enumerate(self._db.leave_requests):
                if r.id == request.id:
                    self._db.leave_requests[i] = request
                    return request
        raise KeyError(request.id)
