from __future__ import annotations

from dataclasses import asdict

from flask import Flask, request

from ..common.http import json_body, ok, require_date
from ..container import Container
from ..core.exceptions import ValidationError
from ..core.permissions import Permission


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    leaves = container.leave_service

    @app.route("/api/leave", methods=["POST"], endpoint="submit_leave")
    @guards.permission_required(Permission.APPLY_FOR_LEAVE)
    def submit_leave():
        body = json_body()
        leave = leaves.submit(
            user_id=guards.current_user().user_id,
            leave_type=body.get("leave_type", ""),
            start_date=require_date(body.get("start_date"), "Start date"),
            end_date=require_date(body.get("end_date"), "End date"),
            reason=body.get("reason", ""),
            day_option=body.get("day_option") or "full",
            doctor_certificate=body.get("doctor_certificate"),
        )
        return ok(leave.to_dict(), message="Leave request submitted.", status=201)

    @app.route("/api/leave/mine", methods=["GET"], endpoint="my_leave_requests")
    @guards.permission_required(Permission.APPLY_FOR_LEAVE)
    def my_leave_requests():
        rows = leaves.get_requests(user_id=guards.current_user().user_id, status=request.args.get("status") or None)
        return ok([r.to_dict() for r in rows])

    @app.route("/api/leave/balances", methods=["GET"], endpoint="leave_balances")
    @guards.permission_required(Permission.APPLY_FOR_LEAVE)
    def leave_balances():
        year = request.args.get("year") or container.today().year
        try:
            year = int(year)
        except ValueError:
            raise ValidationError(f"Invalid year: {year}")
        return ok(asdict(leaves.balances(guards.current_user().user_id, year)))

    @app.route("/api/leave/requests", methods=["GET"], endpoint="leave_requests")
    @guards.permission_required(Permission.MANAGE_LEAVE_REQUESTS)
    def leave_requests():
        approver = request.args.get("for_approver_id")
        if approver == "me":
            approver = guards.current_user().user_id
        rows = leaves.get_requests(
            user_id=request.args.get("user_id") or None,
            status=request.args.get("status") or None,
            for_approver_id=approver or None,
        )
        return ok([r.to_dict() for r in rows])

    def _decide(action, request_id: str):
        leave = action(request_id, guards.current_user().user_id, json_body().get("comments"))
        return ok(leave.to_dict(), message=f"Leave request {leave.status.value.replace('_', ' ')}.")

    @app.route("/api/leave/<request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @guards.permission_required(Permission.MANAGE_LEAVE_REQUESTS)
    def approve_leave(request_id: str):
        return _decide(leaves.approve, request_id)

    @app.route("/api/leave/<request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @guards.permission_required(Permission.MANAGE_LEAVE_REQUESTS)
    def reject_leave(request_id: str):
        return _decide(leaves.reject, request_id)

    @app.route("/api/leave/<request_id>/confirm", methods=["POST"], endpoint="confirm_leave")
    @guards.permission_required(Permission.MANAGE_LEAVE_REQUESTS)
    def confirm_leave(request_id: str):
        return _decide(leaves.confirm_by_hr, request_id)
