from __future__ import annotations

from dataclasses import asdict

from flask import Flask, request

from ..common.http import date_arg, json_body, ok
from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.permissions import Permission
from .dashboard import resolve_date_filter


def _coordinate(value):
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid coordinate: {value}")


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    attendance = container.attendance_service

    def _target_user_id() -> str:
        """The requested user, defaulting to the caller; others need view_all_attendance."""
        me = guards.current_user()
        user_id = request.args.get("user_id") or me.user_id
        if user_id != me.user_id and not container.role_service.has_permission(me.role, Permission.VIEW_ALL_ATTENDANCE):
            raise AuthorizationError("You can only view your own attendance.")
        return user_id

    def _range():
        today = container.today()
        start = date_arg("start", today.replace(day=1))
        end = date_arg("end", today)
        if end < start:
            raise ValidationError("Invalid date range provided.")
        return start, end

    @app.route("/api/attendance/status", methods=["GET"], endpoint="attendance_status")
    @guards.permission_required(Permission.VIEW_OWN_ATTENDANCE)
    def attendance_status():
        return ok(asdict(attendance.status(guards.current_user().user_id)))

    @app.route("/api/attendance/toggle", methods=["POST"], endpoint="toggle_check_in")
    @guards.permission_required(Permission.VIEW_OWN_ATTENDANCE)
    def toggle_check_in():
        body = json_body()
        event, message = attendance.toggle_check_in(
            guards.current_user().user_id,
            latitude=_coordinate(body.get("latitude")),
            longitude=_coordinate(body.get("longitude")),
        )
        return ok(event.to_dict(), message=message)

    @app.route("/api/attendance/events", methods=["GET"], endpoint="attendance_events")
    @guards.permission_required(Permission.VIEW_OWN_ATTENDANCE)
    def attendance_events():
        start, end = _range()
        lo, hi = attendance.day_bounds(start, end)
        if request.args.get("user_id") == "all":
            me = guards.current_user()
            if not container.role_service.has_permission(me.role, Permission.VIEW_ALL_ATTENDANCE):
                raise AuthorizationError("You can only view your own attendance.")
            events = attendance.get_all_events(lo, hi)
        else:
            events = attendance.get_events(_target_user_id(), lo, hi)
        return ok([e.to_dict() for e in events])

    @app.route("/api/attendance/records", methods=["GET"], endpoint="attendance_records")
    @guards.permission_required(Permission.VIEW_OWN_ATTENDANCE)
    def attendance_records():
        start, end = _range()
        records = attendance.records_for_user(_target_user_id(), start, end)
        return ok([r.to_dict() for r in records])

    @app.route("/api/attendance/dashboard", methods=["GET"], endpoint="attendance_dashboard")
    @guards.permission_required(Permission.VIEW_ALL_ATTENDANCE)
    def attendance_dashboard():
        today = container.today()
        start, end = resolve_date_filter(
            request.args.get("filter", "This Month"),
            today,
            date_arg("start"),
            date_arg("end"),
        )
        return ok(container.dashboard_service.dashboard(start, end, today).to_dict())
