from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import to_iso, utc_now
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.enums import Role, TicketStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..notifications.service import NotificationService
from ..users.repository import UserRepository
from .model import SupportTicket, TicketComment, TicketPost
from .repository import TicketRepository

logger = logging.getLogger(__name__)

TICKET_UPDATE = "support_ticket_update"

_UPDATABLE_FIELDS = {
    "title",
    "description",
    "category",
    "priority",
    "status",
    "assigned_to_id",
    "assigned_to_name",
    "resolved_at",
    "closed_at",
    "rating",
    "feedback",
}


def check_status_change(ticket: SupportTicket, new_status: TicketStatus, *, user_id: str, role: Role | str) -> None:
    """Raise AuthorizationError unless ``user_id`` may move ``ticket`` to ``new_status``.

    Admins may set any status. Everyone else follows the ticket lifecycle:
    Open -> In Progress (creator or assignee), In Progress -> Resolved
    (assignee), Resolved -> Closed (creator).
    """

    if new_status == ticket.status or Role(role) == Role.ADMIN:
        return

    is_creator = ticket.raised_by_id == user_id
    is_assignee = ticket.assigned_to_id == user_id

    if ticket.status == TicketStatus.OPEN and new_status == TicketStatus.IN_PROGRESS:
        if not (is_creator or is_assignee):
            raise AuthorizationError("You do not have permission to assign this post.")
    elif ticket.status == TicketStatus.IN_PROGRESS and new_status == TicketStatus.RESOLVED:
        if not is_assignee:
            raise AuthorizationError("You do not have permission to resolve this post.")
    elif ticket.status == TicketStatus.RESOLVED and new_status == TicketStatus.CLOSED:
        if not is_creator:
            raise AuthorizationError("You do not have permission to close this post.")
    else:
        raise AuthorizationError("You do not have permission to change the status of this post.")


class SupportService:
    """Use case: support desk tickets, their discussion posts and comments."""

    def __init__(
        self,
        tickets: TicketRepository,
        users: UserRepository,
        notifications: NotificationService,
        *,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._tickets = tickets
        self._users = users
        self._notifications = notifications
        self._clock = clock

    def get_tickets(self) -> list[SupportTicket]:
        return list(self._tickets.list_all())

    def get_ticket(self, ticket_id: str) -> Optional[SupportTicket]:
        return self._tickets.get(ticket_id)

    def _require(self, ticket_id: str) -> SupportTicket:
        ticket = self._tickets.get(ticket_id)
        if not ticket:
            raise NotFoundError("Ticket not found")
        return ticket

    def create(
        self,
        *,
        title: str,
        description: str,
        category: str,
        priority: str,
        raised_by_id: str,
        raised_by_name: str,
        attachment_url: Optional[str] = None,
    ) -> SupportTicket:
        now = self._clock()
        ticket = SupportTicket(
            id=new_id("ticket"),
            ticket_number=f"TICKET-{now:%Y%m}-{self._tickets.count() + 1:03d}",
            title=require_non_empty(title, "Title"),
            description=require_non_empty(description, "Description"),
            category=category or "Other",
            priority=priority or "Medium",
            status=TicketStatus.OPEN,
            raised_by_id=raised_by_id,
            raised_by_name=raised_by_name,
            raised_at=to_iso(now),
            attachment_url=attachment_url,
        )
        self._tickets.add_first(ticket)
        logger.info("Ticket %s raised by %s", ticket.ticket_number, raised_by_id)
        return ticket

    def update(self, ticket_id: str, updates: dict, *, user_id: str, role: Role | str) -> SupportTicket:
        ticket = self._require(ticket_id)
        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        changes = dict(updates)
        new_status = None
        if "status" in changes:
            try:
                new_status = TicketStatus(changes["status"])
            except ValueError:
                raise ValidationError(f"Invalid ticket status: {changes['status']}")
            changes["status"] = new_status
            check_status_change(ticket, new_status, user_id=user_id, role=role)
            if new_status != ticket.status and new_status == TicketStatus.RESOLVED:
                changes.setdefault("resolved_at", to_iso(self._clock()))
            elif new_status != ticket.status and new_status == TicketStatus.CLOSED:
                changes.setdefault("closed_at", to_iso(self._clock()))

        updated = self._tickets.save(replace(ticket, **changes))

        if new_status and new_status != ticket.status and user_id != updated.raised_by_id:
            if self._users.get_by_id(updated.raised_by_id):
                self._notifications.create(
                    user_id=updated.raised_by_id,
                    type=TICKET_UPDATE,
                    message=f'Your support post "{updated.title}" status changed to {updated.status.value}.',
                    link_to=f"/support/ticket/{updated.id}",
                )
        return updated

    def add_post(self, ticket_id: str, *, author_id: str, author_name: str, author_role: str, content: str) -> TicketPost:
        ticket = self._require(ticket_id)
        post = TicketPost(
            id=new_id("post"),
            ticket_id=ticket.id,
            author_id=author_id,
            author_name=author_name,
            author_role=author_role,
            content=require_non_empty(content, "Content"),
            created_at=to_iso(self._clock()),
        )
        self._tickets.save(replace(ticket, posts=(*ticket.posts, post)))
        return post

    def _replace_post(self, ticket: SupportTicket, post: TicketPost) -> None:
        self._tickets.save(replace(ticket, posts=tuple(post if p.id == post.id else p for p in ticket.posts)))

    def _find_post(self, post_id: str) -> tuple[SupportTicket, TicketPost]:
        ticket = self._tickets.find_by_post(post_id)
        if not ticket:
            raise NotFoundError("Post not found")
        return ticket, next(p for p in ticket.posts if p.id == post_id)

    def toggle_like(self, post_id: str, user_id: str) -> TicketPost:
        ticket, post = self._find_post(post_id)
        if user_id in post.likes:
            likes = tuple(u for u in post.likes if u != user_id)
        else:
            likes = (*post.likes, user_id)
        updated = replace(post, likes=likes)
        self._replace_post(ticket, updated)
        return updated

    def add_comment(self, post_id: str, *, author_id: str, author_name: str, content: str) -> TicketComment:
        ticket, post = self._find_post(post_id)
        comment = TicketComment(
            id=new_id("comment"),
            post_id=post_id,
            author_id=author_id,
            author_name=author_name,
            content=require_non_empty(content, "Comment"),
            created_at=to_iso(self._clock()),
        )
        self._replace_post(ticket, replace(post, comments=(*post.comments, comment)))
        return comment

    def delete_post(self, post_id: str, deleted_by: str) -> None:
        ticket = self._tickets.find_by_post(post_id)
        if not ticket:
            return
        post = next(p for p in ticket.posts if p.id == post_id)
        self._tickets.save(replace(ticket, posts=tuple(p for p in ticket.posts if p.id != post_id)))

        if post.author_id != deleted_by:
            self._notifications.create(
                user_id=post.author_id,
                type=TICKET_UPDATE,
                message=f'Your post in ticket "{ticket.title}" was deleted by an admin due to policy violations.',
                link_to=f"/support/ticket/{ticket.id}",
            )
        logger.info("Post %s deleted by %s", post_id, deleted_by)
