from __future__ import annotations

from typing import Optional, Sequence

from ..store.mock_database import MockDatabase
from .model import Task


class InMemoryTaskRepository:
    def __init__(self, db: MockDatabase):
        self._db = db

    def list_all(self) -> Sequence[Task]:
        with self._db.lock:
            return list(self._db.tasks)

    def get(self, task_id: str) -> Optional[Task]:
        with self._db.lock:
            return next((t for t in self._db.tasks if t.id == task_id), None)

    def add(self, task: Task) -> Task:
        with self._db.lock:
            self._db.tasks.append(task)
        return task

    def save(self, task: Task) -> Task:
        with self._db.lock:
            for i, t in enumerate(self._db.tasks):
                if t.id == task.id:
                    self._db.tasks[i] = task
                    return task
        raise KeyError(task.id)

    def delete(self, task_id: str) -> None:
        with self._db.lock:
            self._db.tasks[:] = [t for t in self._db.tasks if t.id != task_id]
