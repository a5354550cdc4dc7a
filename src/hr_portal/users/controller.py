from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container
from ..core.exceptions import NotFoundError
from ..core.permissions import Permission


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    users = container.user_service

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @guards.permission_required(Permission.MANAGE_USERS)
    def list_users():
        return ok(users.get_users_with_managers())

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @guards.permission_required(Permission.MANAGE_USERS)
    def create_user():
        body = json_body()
        user = users.create_user(
            name=body.get("name", ""),
            email=body.get("email", ""),
            role=body.get("role", ""),
            phone=body.get("phone"),
            organization_id=body.get("organization_id"),
            organization_name=body.get("organization_name"),
            reporting_manager_id=body.get("reporting_manager_id"),
        )
        return ok(user.to_public_dict(), message="User created.", status=201)

    @app.route("/api/users/<user_id>", methods=["GET"], endpoint="get_user")
    @guards.login_required
    def get_user(user_id: str):
        user = users.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return ok(user.to_public_dict())

    @app.route("/api/users/<user_id>", methods=["PATCH"], endpoint="update_user")
    @guards.permission_required(Permission.MANAGE_USERS)
    def update_user(user_id: str):
        return ok(users.update_user(user_id, json_body()).to_public_dict(), message="User updated.")

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @guards.permission_required(Permission.MANAGE_USERS)
    def delete_user(user_id: str):
        users.delete_user(user_id)
        return ok(message="User deleted.")

    @app.route("/api/users/<user_id>/reporting-manager", methods=["PUT"], endpoint="update_reporting_manager")
    @guards.permission_required(Permission.MANAGE_USERS)
    def update_reporting_manager(user_id: str):
        users.update_reporting_manager(user_id, json_body().get("manager_id"))
        return ok(message="Reporting manager updated.")

    @app.route("/api/field-officers", methods=["GET"], endpoint="field_officers")
    @guards.permission_required(Permission.VIEW_FIELD_OFFICER_TRACKING)
    def field_officers():
        return ok([u.to_public_dict() for u in users.get_field_officers()])

    @app.route("/api/users/nearby", methods=["GET"], endpoint="nearby_users")
    @guards.login_required
    def nearby_users():
        return ok([u.to_public_dict() for u in users.get_nearby_users()])
