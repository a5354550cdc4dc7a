from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import parse_iso_date, to_iso, utc_now
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.enums import TaskStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.service import NotificationService
from ..users.repository import UserRepository
from .model import ESCALATION_LEVEL_1, ESCALATION_NONE, Task
from .repository import TaskRepository

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {"name", "description", "status", "priority", "due_date", "assigned_to_id", "escalation_status"}


class TaskService:
    def __init__(
        self,
        tasks: TaskRepository,
        users: UserRepository,
        notifications: NotificationService,
        *,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._tasks = tasks
        self._users = users
        self._notifications = notifications
        self._clock = clock

    def get_tasks(self) -> list[Task]:
        return list(self._tasks.list_all())

    def _assignee_name(self, user_id: Optional[str]) -> Optional[str]:
        if not user_id:
            return None
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Assignee not found")
        return user.name

    def create_task(
        self,
        *,
        name: str,
        description: str = "",
        priority: str = "Medium",
        due_date: Optional[date] = None,
        assigned_to_id: Optional[str] = None,
    ) -> Task:
        task = Task(
            id=new_id("task"),
            name=require_non_empty(name, "Task name"),
            description=description or "",
            status=TaskStatus.TODO,
            priority=priority,
            created_at=to_iso(self._clock()),
            due_date=due_date,
            assigned_to_id=assigned_to_id,
            assigned_to_name=self._assignee_name(assigned_to_id),
            escalation_status=ESCALATION_NONE,
        )
        self._tasks.add(task)
        if assigned_to_id:
            self._notifications.create(
                user_id=assigned_to_id,
                type="task_assigned",
                message=f"You have been assigned a new task: {task.name}",
                link_to="/tasks",
            )
        return task

    def update_task(self, task_id: str, updates: dict) -> Task:
        task = self._tasks.get(task_id)
        if not task:
            raise NotFoundError("Task not found")
        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        changes = dict(updates)
        if "status" in changes:
            try:
                changes["status"] = TaskStatus(changes["status"])
            except ValueError:
                raise ValidationError(f"Invalid task status: {changes['status']}")
        if "due_date" in changes and isinstance(changes["due_date"], str):
            changes["due_date"] = parse_iso_date(changes["due_date"]) if changes["due_date"] else None
        if "assigned_to_id" in changes:
            changes["assigned_to_name"] = self._assignee_name(changes["assigned_to_id"])
        return self._tasks.save(replace(task, **changes))

    def delete_task(self, task_id: str) -> None:
        self._tasks.delete(task_id)

    def run_automatic_escalations(self, today: date) -> dict:
        """Escalate overdue open tasks to Level 1 and notify the assignee."""

        updated, notes = [], []
        for task in self._tasks.list_all():
            if not task.is_overdue(today) or task.escalation_status != ESCALATION_NONE:
                continue
            escalated = self._tasks.save(replace(task, escalation_status=ESCALATION_LEVEL_1))
            updated.append(escalated)
            if task.assigned_to_id:
                notes.append(
                    self._notifications.create(
                        user_id=task.assigned_to_id,
                        type="task_escalated",
                        message=f"Task '{task.name}' is overdue and has been escalated to {ESCALATION_LEVEL_1}.",
                        link_to="/tasks",
                    )
                )
        if updated:
            logger.info("Escalated %d overdue tasks", len(updated))
        return {"updated_tasks": updated, "new_notifications": notes}
