from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field
from typing import Any


@dataclass
class MockDatabase:
    """In-memory collections shared by every repository.

    Repositories take ``lock`` around each read/write; records are frozen
    dataclasses so a returned record cannot be mutated behind the store.
    """

    lock: threading.RLock = field(default_factory=threading.RLock)

    users: list = field(default_factory=list)
    organizations: list = field(default_factory=list)
    organization_groups: list = field(default_factory=list)
    onboarding_submissions: list = field(default_factory=list)
    attendance_events: list = field(default_factory=list)
    leave_requests: list = field(default_factory=list)
    tasks: list = field(default_factory=list)
    notifications: list = field(default_factory=list)
    support_tickets: list = field(default_factory=list)
    roles: list = field(default_factory=list)
    # keyed "YYYY-MM:<organization id>"
    invoice_statuses: dict = field(default_factory=dict)
    enrollment_rules: dict = field(default_factory=dict)

    def export_all(self) -> dict[str, Any]:
        with self.lock:
            return {
                "users": [u.to_public_dict() for u in self.users],
                "organizations": [o.to_dict() for o in self.organizations],
                "organization_groups": copy.deepcopy(self.organization_groups),
                "onboarding_submissions": [s.to_dict() for s in self.onboarding_submissions],
                "attendance_events": [e.to_dict() for e in self.attendance_events],
                "leave_requests": [r.to_dict() for r in self.leave_requests],
                "tasks": [t.to_dict() for t in self.tasks],
                "notifications": [n.to_dict() for n in self.notifications],
                "support_tickets": [t.to_dict() for t in self.support_tickets],
                "roles": copy.deepcopy(self.roles),
                "invoice_statuses": dict(self.invoice_statuses),
                "enrollment_rules": copy.deepcopy(self.enrollment_rules),
            }
