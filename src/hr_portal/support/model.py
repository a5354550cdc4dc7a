from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import TicketStatus


@dataclass(frozen=True)
class TicketComment:
    id: str
    post_id: str
    author_id: str
    author_name: str
    content: str
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "post_id": self.post_id,
            "author_id": self.author_id,
            "author_name": self.author_name,
            "content": self.content,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class TicketPost:
    id: str
    ticket_id: str
    author_id: str
    author_name: str
    author_role: str
    content: str
    created_at: str
    likes: tuple[str, ...] = field(default_factory=tuple)
    comments: tuple[TicketComment, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ticket_id": self.ticket_id,
            "author_id": self.author_id,
            "author_name": self.author_name,
            "author_role": self.author_role,
            "content": self.content,
            "created_at": self.created_at,
            "likes": list(self.likes),
            "comments": [c.to_dict() for c in self.comments],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TicketPost":
        return cls(
            id=str(data["id"]),
            ticket_id=str(data.get("ticket_id") or ""),
            author_id=str(data["author_id"]),
            author_name=str(data.get("author_name") or ""),
            author_role=str(data.get("author_role") or ""),
            content=str(data.get("content") or ""),
            created_at=str(data.get("created_at") or ""),
            likes=tuple(data.get("likes") or ()),
            comments=tuple(TicketComment(**c) for c in data.get("comments") or ()),
        )


@dataclass(frozen=True)
class SupportTicket:
    id: str
    ticket_number: str
    title: str
    description: str
    category: str
    priority: str
    status: TicketStatus
    raised_by_id: str
    raised_by_name: str
    raised_at: str
    assigned_to_id: Optional[str] = None
    assigned_to_name: Optional[str] = None
    resolved_at: Optional[str] = None
    closed_at: Optional[str] = None
    rating: Optional[int] = None
    feedback: Optional[str] = None
    attachment_url: Optional[str] = None
    posts: tuple[TicketPost, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ticket_number": self.ticket_number,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "priority": self.priority,
            "status": self.status.value,
            "raised_by_id": self.raised_by_id,
            "raised_by_name": self.raised_by_name,
            "raised_at": self.raised_at,
            "assigned_to_id": self.assigned_to_id,
            "assigned_to_name": self.assigned_to_name,
            "resolved_at": self.resolved_at,
            "closed_at": self.closed_at,
            "rating": self.rating,
            "feedback": self.feedback,
            "attachment_url": self.attachment_url,
            "posts": [p.to_dict() for p in self.posts],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SupportTicket":
        return cls(
            id=str(data["id"]),
            ticket_number=str(data["ticket_number"]),
            title=str(data["title"]),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or "Other"),
            priority=str(data.get("priority") or "Medium"),
            status=TicketStatus(data.get("status") or TicketStatus.OPEN.value),
            raised_by_id=str(data["raised_by_id"]),
            raised_by_name=str(data.get("raised_by_name") or ""),
            raised_at=str(data.get("raised_at") or ""),
            assigned_to_id=data.get("assigned_to_id"),
            assigned_to_name=data.get("assigned_to_name"),
            resolved_at=data.get("resolved_at"),
            closed_at=data.get("closed_at"),
            rating=data.get("rating"),
            feedback=data.get("feedback"),
            attachment_url=data.get("attachment_url"),
            posts=tuple(TicketPost.from_dict(p) for p in data.get("posts") or ()),
        )
