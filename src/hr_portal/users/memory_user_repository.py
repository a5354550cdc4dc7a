from __future__ import annotations

from typing import Optional, Sequence

from ..store.mock_database import MockDatabase
from .model import User


class InMemoryUserRepository:
    def __init__(self, db: MockDatabase):
        self._db = db

    def list_all(self) -> Sequence[User]:
        with self._db.lock:
            return list(self._db.users)

    def get_by_id(self, user_id: str) -> Optional[User]:
        with self._db.lock:
            return next((u for u in self._db.users if u.id == user_id), None)

    def get_by_email(self, email: str) -> Optional[User]:
        if not email:
            return None
        needle = email.strip().lower()
        with self._db.lock:
            return next((u for u in self._db.users if u.email.lower() == needle), None)

    def add(self, user: User) -> User:
        with self._db.lock:
            self._db.users.append(user)
        return user

    def save(self, user: User) -> User:
        with self._db.lock:
            for i, u in enumerate(self._db.users):
                if u.id == user.id:
                    self._db.users[i] = user
                    return user
        raise KeyError(user.id)

    def delete_by_id(self, user_id: str) -> bool:
        with self._db.lock:
            before = len(self._db.users)
            self._db.users[:] = [u for u in self._db.users if u.id != user_id]
            return len(self._db.users) < before
