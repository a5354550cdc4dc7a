from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SupportTicket


class TicketRepository(Protocol):
    def list_all(self) -> Sequence[SupportTicket]:
        """Newest first."""

        raise NotImplementedError

    def get(self, ticket_id: str) -> Optional[SupportTicket]:
        raise NotImplementedError

    def find_by_post(self, post_id: str) -> Optional[SupportTicket]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def add_first(self, ticket: SupportTicket) -> SupportTicket:
        raise NotImplementedError

    def save(self, ticket: SupportTicket) -> SupportTicket:
        raise NotImplementedError
