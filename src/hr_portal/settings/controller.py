from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok, require_date
from ..container import Container
from ..core.exceptions import ValidationError
from ..core.permissions import Permission


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    settings = container.settings_service

    @app.route("/api/settings/attendance", methods=["GET"], endpoint="get_attendance_settings")
    @guards.login_required
    def get_attendance_settings():
        return ok(settings.get_attendance_settings().to_dict())

    @app.route("/api/settings/attendance", methods=["PATCH"], endpoint="update_attendance_settings")
    @guards.permission_required(Permission.MANAGE_ATTENDANCE_RULES)
    def update_attendance_settings():
        return ok(settings.update_attendance_settings(json_body()).to_dict(), message="Attendance rules saved.")

    @app.route("/api/settings/holidays", methods=["GET"], endpoint="list_holidays")
    @guards.login_required
    def list_holidays():
        return ok([h.to_dict() for h in settings.get_holidays()])

    @app.route("/api/settings/holidays", methods=["POST"], endpoint="add_holiday")
    @guards.permission_required(Permission.MANAGE_ATTENDANCE_RULES)
    def add_holiday():
        body = json_body()
        holiday = settings.add_holiday(holiday_date=require_date(body.get("date"), "Date"), name=body.get("name", ""))
        return ok(holiday.to_dict(), message="Holiday added.", status=201)

    @app.route("/api/settings/holidays/<holiday_id>", methods=["DELETE"], endpoint="remove_holiday")
    @guards.permission_required(Permission.MANAGE_ATTENDANCE_RULES)
    def remove_holiday(holiday_id: str):
        settings.remove_holiday(holiday_id)
        return ok(message="Holiday removed.")

    @app.route("/api/settings/verification-costs", methods=["GET"], endpoint="get_verification_costs")
    @guards.permission_required(Permission.VIEW_VERIFICATION_COSTING)
    def get_verification_costs():
        return ok([c.to_dict() for c in settings.get_verification_costs()])

    @app.route("/api/settings/verification-costs", methods=["PUT"], endpoint="update_verification_costs")
    @guards.permission_required(Permission.VIEW_VERIFICATION_COSTING)
    def update_verification_costs():
        costs = json_body().get("costs")
        if not isinstance(costs, list):
            raise ValidationError("costs must be a list")
        return ok([c.to_dict() for c in settings.update_verification_costs(costs)], message="Costs saved.")

    # Each of these is a free-form dict merged on update.
    sections = (
        ("site-management", Permission.MANAGE_SITES, settings.get_site_management, settings.update_site_management),
        ("address", Permission.MANAGE_SITES, settings.get_address_settings, settings.update_address_settings),
        (
            "approval-workflow",
            Permission.MANAGE_APPROVAL_WORKFLOW,
            settings.get_approval_workflow,
            settings.update_approval_workflow,
        ),
        (
            "enrollment-rules",
            Permission.MANAGE_ENROLLMENT_RULES,
            settings.get_enrollment_rules,
            settings.update_enrollment_rules,
        ),
    )
    for name, permission, getter, updater in sections:
        _register_section(app, guards, name, permission, getter, updater)


def _register_section(app: Flask, guards, name: str, permission: Permission, getter, updater) -> None:
    endpoint = name.replace("-", "_")

    @guards.login_required
    def get_section():
        return ok(getter())

    @guards.permission_required(permission)
    def update_section():
        return ok(updater(json_body()), message="Settings saved.")

    app.add_url_rule(f"/api/settings/{name}", endpoint=f"get_{endpoint}", view_func=get_section, methods=["GET"])
    app.add_url_rule(f"/api/settings/{name}", endpoint=f"update_{endpoint}", view_func=update_section, methods=["PATCH"])
