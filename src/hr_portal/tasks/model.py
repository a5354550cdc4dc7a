from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import TaskStatus

ESCALATION_NONE = "None"
ESCALATION_LEVEL_1 = "Level 1"


@dataclass(frozen=True)
class Task:
    id: str
    name: str
    description: str
    status: TaskStatus
    priority: str
    created_at: str
    due_date: Optional[date] = None
    assigned_to_id: Optional[str] = None
    assigned_to_name: Optional[str] = None
    escalation_status: str = ESCALATION_NONE

    def is_overdue(self, today: date) -> bool:
        return self.due_date is not None and self.due_date < today and self.status != TaskStatus.DONE

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        data["due_date"] = self.due_date.isoformat() if self.due_date else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        due = data.get("due_date")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            description=str(data.get("description") or ""),
            status=TaskStatus(data.get("status") or TaskStatus.TODO.value),
            priority=str(data.get("priority") or "Medium"),
            created_at=str(data.get("created_at") or ""),
            due_date=parse_iso_date(due) if due else None,
            assigned_to_id=data.get("assigned_to_id"),
            assigned_to_name=data.get("assigned_to_name"),
            escalation_status=str(data.get("escalation_status") or ESCALATION_NONE),
        )
