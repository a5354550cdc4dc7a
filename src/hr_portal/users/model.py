from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: portal user.

    Note: plain data object; persistence lives in the repository.
    """

    id: str
    name: str
    email: str
    role: Role
    phone: Optional[str] = None
    organization_id: Optional[str] = None
    organization_name: Optional[str] = None
    reporting_manager_id: Optional[str] = None
    photo_url: Optional[str] = None
    password_hash: str = ""

    def to_public_dict(self) -> dict:
        data = asdict(self)
        data.pop("password_hash")
        data["role"] = self.role.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            email=str(data["email"]),
            role=Role(data.get("role", Role.UNVERIFIED.value)),
            phone=data.get("phone"),
            organization_id=data.get("organization_id"),
            organization_name=data.get("organization_name"),
            reporting_manager_id=data.get("reporting_manager_id"),
            photo_url=data.get("photo_url"),
            password_hash=data.get("password_hash", ""),
        )
