from __future__ import annotations

from typing import Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def list_for_user(self, user_id: str) -> Sequence[Notification]:
        raise NotImplementedError

    def add(self, notification: Notification) -> Notification:
        raise NotImplementedError

    def mark_read(self, notification_id: str) -> None:
        raise NotImplementedError

    def mark_all_read(self, user_id: str) -> None:
        raise NotImplementedError
