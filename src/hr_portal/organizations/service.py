from __future__ import annotations

from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import Organization
from .repository import OrganizationRepository


class OrganizationService:
    def __init__(self, organizations: OrganizationRepository):
        self._organizations = organizations

    def get_organizations(self) -> list[Organization]:
        return list(self._organizations.list_all())

    def get_organization(self, org_id: str) -> Optional[Organization]:
        return self._organizations.get_by_id(org_id)

    def get_organization_structure(self) -> list[dict]:
        return list(self._organizations.list_groups())

    def create_organization(self, org: Organization) -> Organization:
        require_non_empty(org.id, "Site ID")
        require_non_empty(org.short_name, "Short name")
        if self._organizations.get_by_id(org.id):
            raise ValidationError(f"Site {org.id} already exists")
        self._organizations.upsert(org)
        return org

    def bulk_upload(self, orgs: list[Organization]) -> dict:
        for org in orgs:
            require_non_empty(org.id, "Site ID")
            self._organizations.upsert(org)
        return {"count": len(orgs)}
