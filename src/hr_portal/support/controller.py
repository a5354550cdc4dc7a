from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container
from ..core.exceptions import NotFoundError
from ..core.permissions import Permission


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    support = container.support_service
    desk = guards.permission_required(Permission.ACCESS_SUPPORT_DESK)

    @app.route("/api/support/tickets", methods=["GET"], endpoint="list_tickets")
    @desk
    def list_tickets():
        return ok([t.to_dict() for t in support.get_tickets()])

    @app.route("/api/support/tickets", methods=["POST"], endpoint="create_ticket")
    @desk
    def create_ticket():
        body = json_body()
        me = guards.current_user()
        ticket = support.create(
            title=body.get("title", ""),
            description=body.get("description", ""),
            category=body.get("category", ""),
            priority=body.get("priority", ""),
            raised_by_id=me.user_id,
            raised_by_name=me.name,
            attachment_url=body.get("attachment_url"),
        )
        return ok(ticket.to_dict(), message=f"Ticket {ticket.ticket_number} created.", status=201)

    @app.route("/api/support/tickets/<ticket_id>", methods=["GET"], endpoint="get_ticket")
    @desk
    def get_ticket(ticket_id: str):
        ticket = support.get_ticket(ticket_id)
        if not ticket:
            raise NotFoundError("Ticket not found")
        return ok(ticket.to_dict())

    @app.route("/api/support/tickets/<ticket_id>", methods=["PATCH"], endpoint="update_ticket")
    @desk
    def update_ticket(ticket_id: str):
        me = guards.current_user()
        ticket = support.update(ticket_id, json_body(), user_id=me.user_id, role=me.role)
        return ok(ticket.to_dict(), message="Ticket updated.")

    @app.route("/api/support/tickets/<ticket_id>/posts", methods=["POST"], endpoint="add_post")
    @desk
    def add_post(ticket_id: str):
        me = guards.current_user()
        post = support.add_post(
            ticket_id,
            author_id=me.user_id,
            author_name=me.name,
            author_role=me.role.value,
            content=json_body().get("content", ""),
        )
        return ok(post.to_dict(), status=201)

    @app.route("/api/support/posts/<post_id>/like", methods=["POST"], endpoint="toggle_like")
    @desk
    def toggle_like(post_id: str):
        return ok(support.toggle_like(post_id, guards.current_user().user_id).to_dict())

    @app.route("/api/support/posts/<post_id>/comments", methods=["POST"], endpoint="add_comment")
    @desk
    def add_comment(post_id: str):
        me = guards.current_user()
        comment = support.add_comment(post_id, author_id=me.user_id, author_name=me.name, content=json_body().get("content", ""))
        return ok(comment.to_dict(), status=201)

    @app.route("/api/support/posts/<post_id>", methods=["DELETE"], endpoint="delete_post")
    @desk
    def delete_post(post_id: str):
        support.delete_post(post_id, guards.current_user().user_id)
        return ok(message="Post deleted.")
