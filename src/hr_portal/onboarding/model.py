from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import PortalSyncStatus, SubmissionStatus


@dataclass(frozen=True)
class VerificationUsage:
    name: str
    count: int


@dataclass(frozen=True)
class OnboardingData:
    """An employee enrollment form; ``personal``/``bank``/``uan`` stay free-form sections."""

    id: Optional[str]
    status: SubmissionStatus
    enrollment_date: str
    organization_id: Optional[str] = None
    organization_name: Optional[str] = None
    portal_sync_status: Optional[PortalSyncStatus] = None
    personal: dict = field(default_factory=dict)
    bank: dict = field(default_factory=dict)
    uan: dict = field(default_factory=dict)
    sections: dict = field(default_factory=dict)
    verification_usage: tuple[VerificationUsage, ...] = field(default_factory=tuple)
    change_request_reason: Optional[str] = None

    @property
    def email(self) -> Optional[str]:
        return self.personal.get("email")

    @property
    def employee_id(self) -> Optional[str]:
        return self.personal.get("employee_id")

    @property
    def employee_name(self) -> str:
        return " ".join(p for p in (self.personal.get("first_name"), self.personal.get("last_name")) if p)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "status": self.status.value,
            "portal_sync_status": self.portal_sync_status.value if self.portal_sync_status else None,
            "enrollment_date": self.enrollment_date,
            "organization_id": self.organization_id,
            "organization_name": self.organization_name,
            "personal": copy.deepcopy(self.personal),
            "bank": copy.deepcopy(self.bank),
            "uan": copy.deepcopy(self.uan),
            "sections": copy.deepcopy(self.sections),
            "verification_usage": [{"name": u.name, "count": u.count} for u in self.verification_usage],
            "change_request_reason": self.change_request_reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OnboardingData":
        sync = data.get("portal_sync_status")
        return cls(
            id=data.get("id"),
            status=SubmissionStatus(data.get("status") or SubmissionStatus.DRAFT.value),
            enrollment_date=str(data.get("enrollment_date") or ""),
            organization_id=data.get("organization_id"),
            organization_name=data.get("organization_name"),
            portal_sync_status=PortalSyncStatus(sync) if sync else None,
            personal=copy.deepcopy(data.get("personal") or {}),
            bank=copy.deepcopy(data.get("bank") or {}),
            uan=copy.deepcopy(data.get("uan") or {}),
            sections=copy.deepcopy(data.get("sections") or {}),
            verification_usage=tuple(
                VerificationUsage(name=str(u["name"]), count=int(u["count"])) for u in data.get("verification_usage") or ()
            ),
            change_request_reason=data.get("change_request_reason"),
        )


@dataclass(frozen=True)
class SubmissionCostBreakdown:
    id: str
    employee_id: Optional[str]
    employee_name: str
    enrollment_date: str
    total_cost: float
    breakdown: tuple[VerificationUsage, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "enrollment_date": self.enrollment_date,
            "total_cost": self.total_cost,
            "breakdown": [{"name": u.name, "count": u.count} for u in self.breakdown],
        }
