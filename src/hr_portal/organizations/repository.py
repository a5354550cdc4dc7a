from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Organization


class OrganizationRepository(Protocol):
    def list_all(self) -> Sequence[Organization]:
        raise NotImplementedError

    def get_by_id(self, org_id: str) -> Optional[Organization]:
        raise NotImplementedError

    def upsert(self, org: Organization) -> bool:
        """Insert or replace by id; returns True when a new row was inserted."""

        raise NotImplementedError

    def list_groups(self) -> Sequence[dict]:
        raise NotImplementedError
