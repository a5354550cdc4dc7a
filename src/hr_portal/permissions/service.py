from __future__ import annotations

import copy
import logging

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..core.permissions import DEFAULT_PERMISSIONS, Permission
from ..store.mock_database import MockDatabase

logger = logging.getLogger(__name__)


def default_roles() -> list[dict]:
    return [
        {
            "id": role.value,
            "display_name": role.display_name,
            "permissions": sorted(p.value for p in DEFAULT_PERMISSIONS[role]),
        }
        for role in Role
    ]


class RoleService:
    """Editable role -> permission table, seeded from the static defaults."""

    def __init__(self, db: MockDatabase):
        self._db = db
        with db.lock:
            if not db.roles:
                db.roles[:] = default_roles()

    def get_roles(self) -> list[dict]:
        with self._db.lock:
            return copy.deepcopy(self._db.roles)

    def save_roles(self, roles: list[dict]) -> list[dict]:
        known = {p.value for p in Permission}
        cleaned = []
        for r in roles:
            role_id = require_non_empty(str(r.get("id") or ""), "Role id")
            perms = list(r.get("permissions") or [])
            unknown = sorted(set(perms) - known)
            if unknown:
                raise ValidationError(f"Unknown permissions: {', '.join(unknown)}")
            cleaned.append(
                {
                    "id": role_id,
                    "display_name": str(r.get("display_name") or role_id),
                    "permissions": sorted(set(perms)),
                }
            )
        with self._db.lock:
            self._db.roles[:] = cleaned
        logger.info("Saved %d roles", len(cleaned))
        return copy.deepcopy(cleaned)

    def permissions_for(self, role: Role | str) -> frozenset[Permission]:
        role_id = role.value if isinstance(role, Role) else str(role)
        with self._db.lock:
            row = next((r for r in self._db.roles if r["id"] == role_id), None)
        if row is None:
            return frozenset()
        return frozenset(Permission(p) for p in row["permissions"])

    def has_permission(self, role: Role | str, permission: Permission) -> bool:
        return permission in self.permissions_for(role)
