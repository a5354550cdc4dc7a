from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from ..store.mock_database import MockDatabase
from .model import Notification


class InMemoryNotificationRepository:
    def __init__(self, db: MockDatabase):
        self._db = db

    def list_for_user(self, user_id: str) -> Sequence[Notification]:
        with self._db.lock:
            return [n for n in self._db.notifications if n.user_id == user_id]

    def add(self, notification: Notification) -> Notification:
        with self._db.lock:
            self._db.notifications.append(notification)
        return notification

    def mark_read(self, notification_id: str) -> None:
        with self._db.lock:
            self._db.notifications[:] = [
                replace(n, is_read=True) if n.id == notification_id else n for n in self._db.notifications
            ]

    def mark_all_read(self, user_id: str) -> None:
        with self._db.lock:
            self._db.notifications[:] = [
                replace(n, is_read=True) if n.user_id == user_id else n for n in self._db.notifications
            ]
