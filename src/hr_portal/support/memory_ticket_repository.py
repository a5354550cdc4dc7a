from __future__ import annotations

from typing import Optional, Sequence

from ..store.mock_database import MockDatabase
from .model import SupportTicket


class InMemoryTicketRepository:
    def __init__(self, db: MockDatabase):
        self._db = db

    def list_all(self) -> Sequence[SupportTicket]:
        with self._db.lock:
            return list(self._db.support_tickets)

    def get(self, ticket_id: str) -> Optional[SupportTicket]:
        with self._db.lock:
            return next((t for t in self._db.support_tickets if t.id == ticket_id), None)

    def find_by_post(self, post_id: str) -> Optional[SupportTicket]:
        with self._db.lock:
            return next((t for t in self._db.support_tickets if any(p.id == post_id for p in t.posts)), None)

    def count(self) -> int:
        with self._db.lock:
            return len(self._db.support_tickets)

    def add_first(self, ticket: SupportTicket) -> SupportTicket:
        with self._db.lock:
            self._db.support_tickets.insert(0, ticket)
        return ticket

    def save(self, ticket: SupportTicket) -> SupportTicket:
        with self._db.lock:
            for i, t in enumerate(self._db.support_tickets):
                if t.id == ticket.id:
                    self._db.support_tickets[i] = ticket
                    return ticket
        raise KeyError(ticket.id)
