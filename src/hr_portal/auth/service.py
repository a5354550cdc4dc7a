from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, PASSWORD_RESET_MAX_AGE
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..permissions.service import RoleService
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import UserService

logger = logging.getLogger(__name__)

_RESET_SALT = "password-reset"


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    name: str
    email: str
    role: Role
    permissions: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "permissions": list(self.permissions),
        }


class AuthService:
    """Use case: sign in, password reset and password change."""

    def __init__(self, users: UserRepository, user_service: UserService, roles: RoleService, *, secret_key: str):
        self._users = users
        self._user_service = user_service
        self._roles = roles
        self._serializer = URLSafeTimedSerializer(secret_key, salt=_RESET_SALT)

    def session_user(self, user: User) -> SessionUser:
        return SessionUser(
            user_id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            permissions=tuple(sorted(p.value for p in self._roles.permissions_for(user.role))),
        )

    def sign_in(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email(email or "")
        if not user:
            raise AuthenticationError("auth/user-not-found")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False
        if not ok:
            raise AuthenticationError("auth/wrong-password")

        logger.info("User %s signed in", user.id)
        return self.session_user(user)

    def current_user(self, user_id: Optional[str]) -> Optional[SessionUser]:
        if not user_id:
            return None
        user = self._users.get_by_id(user_id)
        return self.session_user(user) if user else None

    def send_password_reset(self, email: str) -> Optional[str]:
        """Issue a reset token and "send" it; unknown addresses are silently ignored."""

        user = self._users.get_by_email(email or "")
        if not user:
            logger.info("Password reset requested for unknown address")
            return None
        token = self._serializer.dumps(user.id)
        logger.info("(Mock) Password reset link sent to %s: /auth/reset-password?token=%s", user.email, token)
        return token

    def reset_password(self, token: str, new_password: str) -> None:
        try:
            user_id = self._serializer.loads(token or "", max_age=PASSWORD_RESET_MAX_AGE)
        except SignatureExpired:
            raise ValidationError("This password reset link has expired")
        except BadSignature:
            raise ValidationError("Invalid password reset link")
        self._set_password(user_id, new_password)

    def update_password(self, user_id: Optional[str], new_password: str) -> None:
        if not user_id:
            raise AuthenticationError("auth/requires-recent-login")
        self._set_password(user_id, new_password)

    def _set_password(self, user_id: str, new_password: str) -> None:
        require_non_empty(new_password or "", "Password")
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
        try:
            self._user_service.set_password_hash(user_id, generate_password_hash(new_password))
        except NotFoundError:
            raise AuthenticationError("auth/user-not-found")
        logger.info("Password updated for user %s", user_id)
