from __future__ import annotations

from flask import Flask

from ..common.http import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    notifications = container.notification_service

    @app.route("/api/notifications", methods=["GET"], endpoint="list_notifications")
    @guards.login_required
    def list_notifications():
        rows = notifications.get_for_user(guards.current_user().user_id)
        return ok({"items": [n.to_dict() for n in rows], "unread": sum(1 for n in rows if not n.is_read)})

    @app.route("/api/notifications/<notification_id>/read", methods=["POST"], endpoint="mark_notification_read")
    @guards.login_required
    def mark_notification_read(notification_id: str):
        notifications.mark_as_read(notification_id)
        return ok()

    @app.route("/api/notifications/read-all", methods=["POST"], endpoint="mark_all_notifications_read")
    @guards.login_required
    def mark_all_notifications_read():
        notifications.mark_all_as_read(guards.current_user().user_id)
        return ok()
