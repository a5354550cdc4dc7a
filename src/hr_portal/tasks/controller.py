from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok, to_date
from ..container import Container
from ..core.permissions import Permission


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    tasks = container.task_service

    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    @guards.permission_required(Permission.MANAGE_TASKS)
    def list_tasks():
        return ok([t.to_dict() for t in tasks.get_tasks()])

    @app.route("/api/tasks", methods=["POST"], endpoint="create_task")
    @guards.permission_required(Permission.MANAGE_TASKS)
    def create_task():
        body = json_body()
        task = tasks.create_task(
            name=body.get("name", ""),
            description=body.get("description", ""),
            priority=body.get("priority") or "Medium",
            due_date=to_date(body.get("due_date"), "Due date"),
            assigned_to_id=body.get("assigned_to_id") or None,
        )
        return ok(task.to_dict(), message="Task created.", status=201)

    @app.route("/api/tasks/<task_id>", methods=["PATCH"], endpoint="update_task")
    @guards.permission_required(Permission.MANAGE_TASKS)
    def update_task(task_id: str):
        return ok(tasks.update_task(task_id, json_body()).to_dict(), message="Task updated.")

    @app.route("/api/tasks/<task_id>", methods=["DELETE"], endpoint="delete_task")
    @guards.permission_required(Permission.MANAGE_TASKS)
    def delete_task(task_id: str):
        tasks.delete_task(task_id)
        return ok(message="Task deleted.")

    @app.route("/api/tasks/escalations", methods=["POST"], endpoint="run_escalations")
    @guards.permission_required(Permission.MANAGE_TASKS)
    def run_escalations():
        result = tasks.run_automatic_escalations(container.today())
        return ok(
            {
                "updated_tasks": [t.to_dict() for t in result["updated_tasks"]],
                "new_notifications": [n.to_dict() for n in result["new_notifications"]],
            }
        )
