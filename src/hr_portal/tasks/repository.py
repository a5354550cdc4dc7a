from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Task


class TaskRepository(Protocol):
    def list_all(self) -> Sequence[Task]:
        raise NotImplementedError

    def get(self, task_id: str) -> Optional[Task]:
        raise NotImplementedError

    def add(self, task: Task) -> Task:
        raise NotImplementedError

    def save(self, task: Task) -> Task:
        raise NotImplementedError

    def delete(self, task_id: str) -> None:
        raise NotImplementedError
