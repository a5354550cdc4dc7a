from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional

from flask import g, jsonify, session

from ..auth.service import AuthService, SessionUser
from ..core.permissions import Permission
from .service import RoleService

LOGIN_PATH = "/auth/login"
FORBIDDEN_PATH = "/forbidden"


@dataclass(frozen=True)
class Guards:
    login_required: Callable
    permission_required: Callable[[Permission], Callable]
    current_user: Callable[[], Optional[SessionUser]]


def build_guards(auth: AuthService, roles: RoleService) -> Guards:
    """Route decorators backed by the Flask session.

    The signed-in user is resolved once per request and cached on ``g``;
    permissions are read from the role table at request time so edits to
    roles apply immediately.
    """

    def current_user() -> Optional[SessionUser]:
        if "session_user" not in g:
            g.session_user = auth.current_user(session.get("user_id"))
        return g.session_user

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if current_user() is None:
                session.clear()
                return jsonify({"success": False, "message": "Please sign in to continue.", "redirect": LOGIN_PATH}), 401
            return view(*args, **kwargs)

        return wrapper

    def permission_required(permission: Permission):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                user = current_user()
                if user is None:
                    session.clear()
                    return jsonify({"success": False, "message": "Please sign in to continue.", "redirect": LOGIN_PATH}), 401
                if not roles.has_permission(user.role, permission):
                    return jsonify({"success": False, "message": "You do not have access to this page.", "redirect": FORBIDDEN_PATH}), 403
                return view(*args, **kwargs)

            return wrapper

        return decorator

    return Guards(login_required=login_required, permission_required=permission_required, current_user=current_user)
