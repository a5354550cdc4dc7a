from __future__ import annotations

import copy
from typing import Optional, Sequence

from ..store.mock_database import MockDatabase
from .model import Organization


class InMemoryOrganizationRepository:
    def __init__(self, db: MockDatabase):
        self._db = db

    def list_all(self) -> Sequence[Organization]:
        with self._db.lock:
            return list(self._db.organizations)

    def get_by_id(self, org_id: str) -> Optional[Organization]:
        with self._db.lock:
            return next((o for o in self._db.organizations if o.id == org_id), None)

    def upsert(self, org: Organization) -> bool:
        with self._db.lock:
            for i, existing in enumerate(self._db.organizations):
                if existing.id == org.id:
                    self._db.organizations[i] = org
                    return False
            self._db.organizations.append(org)
            return True

    def list_groups(self) -> Sequence[dict]:
        with self._db.lock:
            return copy.deepcopy(self._db.organization_groups)
