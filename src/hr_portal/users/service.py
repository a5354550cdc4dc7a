from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.ids import new_id
from ..common.validators import require_email, require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {
    "name",
    "email",
    "phone",
    "role",
    "organization_id",
    "organization_name",
    "reporting_manager_id",
    "photo_url",
}

_NEARBY_ROLES = {Role.HR, Role.OPERATION_MANAGER, Role.SITE_MANAGER}


def _parse_role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError(f"Unknown role: {value}")


class UserService:
    """Use case: manage users (admin / HR)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_users(self) -> list[User]:
        return list(self._users.list_all())

    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def get_users_with_managers(self) -> list[dict]:
        users = self._users.list_all()
        names = {u.id: u.name for u in users}
        rows = []
        for u in users:
            row = u.to_public_dict()
            row["manager_name"] = names.get(u.reporting_manager_id) if u.reporting_manager_id else None
            rows.append(row)
        return rows

    def get_field_officers(self) -> list[User]:
        return [u for u in self._users.list_all() if u.role == Role.FIELD_OFFICER]

    def get_nearby_users(self) -> list[User]:
        return [u for u in self._users.list_all() if u.role in _NEARBY_ROLES]

    def get_first_with_role(self, role: Role) -> Optional[User]:
        return next((u for u in self._users.list_all() if u.role == role), None)

    def create_user(
        self,
        *,
        name: str,
        email: str,
        role: Role | str,
        phone: Optional[str] = None,
        organization_id: Optional[str] = None,
        organization_name: Optional[str] = None,
        reporting_manager_id: Optional[str] = None,
        password_hash: str = "",
    ) -> User:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        role = _parse_role(role)

        if self._users.get_by_email(email):
            raise ValidationError("A user with this email already exists")
        if reporting_manager_id and not self._users.get_by_id(reporting_manager_id):
            raise ValidationError("Reporting manager not found")

        user = User(
            id=new_id("user"),
            name=name,
            email=email,
            role=role,
            phone=phone,
            organization_id=organization_id,
            organization_name=organization_name,
            reporting_manager_id=reporting_manager_id,
            password_hash=password_hash,
        )
        self._users.add(user)
        logger.info("Created user %s (%s)", user.id, user.role.value)
        return user

    def update_user(self, user_id: str, updates: dict) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        changes = dict(updates)
        if "name" in changes:
            changes["name"] = require_non_empty(changes["name"], "Name")
        if "email" in changes:
            changes["email"] = require_email(changes["email"])
            other = self._users.get_by_email(changes["email"])
            if other and other.id != user_id:
                raise ValidationError("A user with this email already exists")
        if "role" in changes:
            changes["role"] = _parse_role(changes["role"])
        if changes.get("reporting_manager_id") == user_id:
            raise ValidationError("A user cannot report to themselves")

        return self._users.save(replace(user, **changes))

    def set_password_hash(self, user_id: str, password_hash: str) -> None:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        self._users.save(replace(user, password_hash=password_hash))

    def delete_user(self, user_id: str) -> None:
        if self._users.delete_by_id(user_id):
            logger.info("Deleted user %s", user_id)

    def update_reporting_manager(self, user_id: str, manager_id: Optional[str]) -> None:
        user = self._users.get_by_id(user_id)
        if not user:
            return
        if manager_id == user_id:
            raise ValidationError("A user cannot report to themselves")
        self._users.save(replace(user, reporting_manager_id=manager_id or None))
