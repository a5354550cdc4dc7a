from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container
from ..core.exceptions import ValidationError
from ..core.permissions import Permission


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    roles = container.role_service

    @app.route("/api/roles", methods=["GET"], endpoint="list_roles")
    @guards.permission_required(Permission.MANAGE_ROLES_AND_PERMISSIONS)
    def list_roles():
        return ok({"roles": roles.get_roles(), "permissions": [p.value for p in Permission]})

    @app.route("/api/roles", methods=["PUT"], endpoint="save_roles")
    @guards.permission_required(Permission.MANAGE_ROLES_AND_PERMISSIONS)
    def save_roles():
        rows = json_body().get("roles")
        if not isinstance(rows, list):
            raise ValidationError("roles must be a list")
        return ok(roles.save_roles(rows), message="Roles saved.")

    @app.route("/api/admin/export", methods=["GET"], endpoint="export_all_data")
    @guards.permission_required(Permission.MANAGE_MODULES)
    def export_all_data():
        return ok({**container.db.export_all(), "settings": container.settings_service.export()})
